"""
HTTP client for the nlcompiler API.
"""

import httpx

from nlcompiler.core.config import CompilerConfig

BASE_URL = CompilerConfig.from_env().api_url


def compile_text(text: str, fmt: str = "json", language: str = "en", session_id: str = None) -> dict:
    payload = {"text": text, "format": fmt, "language": language}
    if session_id:
        payload["session_id"] = session_id
    r = httpx.post(f"{BASE_URL}/compile", json=payload, timeout=60)
    r.raise_for_status()
    return r.json()


def get_session(session_id: str) -> dict:
    r = httpx.get(f"{BASE_URL}/sessions/{session_id}")
    r.raise_for_status()
    return r.json()


def delete_session(session_id: str) -> dict:
    r = httpx.delete(f"{BASE_URL}/sessions/{session_id}")
    r.raise_for_status()
    return r.json()


def list_layers() -> list[dict]:
    r = httpx.get(f"{BASE_URL}/layers")
    r.raise_for_status()
    return r.json()["layers"]
