"""Exercise catalog lookup endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from lift_logger.catalog.ranker import MAX_SUGGESTIONS
from lift_logger.coordinator.commands import CommandCoordinator
from lift_logger.dependencies import get_coordinator

router = APIRouter()


@router.get("")
async def list_exercises(
    q: str = Query("", description="Partial exercise name"),
    limit: int = Query(MAX_SUGGESTIONS, ge=0, le=MAX_SUGGESTIONS),
    coordinator: CommandCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """Return cached exercise names ranked against ``q``, as autocomplete does."""
    return {
        "query": q,
        "suggestions": coordinator.suggest_exercises(q, limit),
    }
