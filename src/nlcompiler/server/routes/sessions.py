"""
Session routes: /api/sessions
"""

from fastapi import APIRouter, Depends, HTTPException

from nlcompiler.core.memory import SessionStore
from nlcompiler.server.deps import get_session_store


router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.get("/{session_id}")
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Context memory and analytics for a session."""
    if not store.exists(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    session = store.get(session_id)
    return {"id": session_id, **session.to_dict()}


@router.delete("/{session_id}")
async def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Forget a session's context memory and analytics."""
    if not store.exists(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    store.delete(session_id)
    return {"success": True}
