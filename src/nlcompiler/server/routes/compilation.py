"""
Compile routes: /api/compile
"""

import asyncio
import uuid
import weakref

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from nlcompiler.core.compiler import Compiler, CompileRequest
from nlcompiler.core.memory import SessionStore
from nlcompiler.server.deps import get_compiler, get_session_store


router = APIRouter(prefix="/api/compile", tags=["compile"])

# One compilation at a time per session, so context memory appends are ordered.
# A lock lives only while some request holds or awaits it.
_session_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


def session_lock(session_id: str) -> asyncio.Lock:
    lock = _session_locks.get(session_id)
    if lock is None:
        lock = asyncio.Lock()
        _session_locks[session_id] = lock
    return lock


class CompileBody(BaseModel):
    text: str
    format: str = "json"
    language: str = "en"
    session_id: str | None = None


@router.post("")
async def compile_text(
    req: CompileBody,
    compiler: Compiler = Depends(get_compiler),
    store: SessionStore = Depends(get_session_store),
):
    """Compile a sentence. Pipeline errors come back as success=false, not HTTP errors."""
    session_id = req.session_id or uuid.uuid4().hex[:12]
    lock = session_lock(session_id)

    async with lock:
        session = store.get(session_id)
        result = await compiler.compile(
            CompileRequest(text=req.text, format=req.format, language=req.language),
            session,
        )
        store.save(session_id, session)

    return {
        **result.to_dict(),
        "session_id": session_id,
    }
