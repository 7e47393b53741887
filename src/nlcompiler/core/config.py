# src/nlcompiler/core/config.py
"""
Compiler configuration, read from NLC_* environment variables.
"""

import os
from dataclasses import dataclass, field


DEFAULT_DICTIONARY_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"
DEFAULT_API_URL = "http://localhost:8000/api"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]
COMPILER_VERSION = "2.0-FULL-FUNCTIONAL"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    value = os.environ.get(name)
    if not value:
        return list(default)
    return [v.strip() for v in value.split(",") if v.strip()]


@dataclass
class CompilerConfig:
    dictionary_url: str = DEFAULT_DICTIONARY_URL
    lookup_timeout: float = 5.0
    offline: bool = False
    memory_size: int = 5
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    api_url: str = DEFAULT_API_URL
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    debug: bool = False

    @property
    def dictionary_label(self) -> str:
        """How lookups are sourced, as reported in output metadata."""
        if self.offline:
            return "fallback"
        host = self.dictionary_url.split("//", 1)[-1].split("/", 1)[0]
        if host.startswith("api."):
            host = host[len("api."):]
        return f"{host} + fallback"

    @classmethod
    def from_env(cls) -> "CompilerConfig":
        return cls(
            dictionary_url=os.environ.get("NLC_DICTIONARY_URL", DEFAULT_DICTIONARY_URL).rstrip("/"),
            lookup_timeout=float(os.environ.get("NLC_LOOKUP_TIMEOUT", "5.0")),
            offline=_env_bool("NLC_OFFLINE"),
            memory_size=int(os.environ.get("NLC_MEMORY_SIZE", "5")),
            redis_host=os.environ.get("NLC_REDIS_HOST", "localhost"),
            redis_port=int(os.environ.get("NLC_REDIS_PORT", "6379")),
            redis_db=int(os.environ.get("NLC_REDIS_DB", "0")),
            api_url=os.environ.get("NLC_API_URL", DEFAULT_API_URL).rstrip("/"),
            cors_origins=_env_list("NLC_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            debug=_env_bool("NLC_DEBUG"),
        )
