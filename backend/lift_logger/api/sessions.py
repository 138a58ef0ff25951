"""Active workout session endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from lift_logger.dependencies import get_session_store
from lift_logger.models.sessions import ActiveSession
from lift_logger.sessions.store import SessionStore

router = APIRouter()


@router.get("", response_model=list[ActiveSession])
async def list_sessions(
    sessions: SessionStore = Depends(get_session_store),
) -> list[dict[str, Any]]:
    """Return every channel that currently has an open session.

    Sessions live in process memory only, so the list is empty after a
    restart.
    """
    return [
        {"channel_id": channel_id, "session_id": session_id}
        for channel_id, session_id in sorted(sessions.active_sessions().items())
    ]
