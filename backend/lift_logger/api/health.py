"""Health check endpoint for infrastructure monitoring."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from lift_logger.backend.client import BackendClient
from lift_logger.catalog.cache import ExerciseCatalog
from lift_logger.dependencies import (
    get_backend_client,
    get_exercise_catalog,
    get_session_store,
)
from lift_logger.sessions.store import SessionStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _check_backend(client: BackendClient) -> dict[str, Any]:
    """Report whether the workout backend endpoint is configured."""
    if not client.configured:
        logger.warning("Backend health check failed: APP_URL is not configured")
        return {"status": "unhealthy", "error": "APP_URL is not configured"}
    return {"status": "healthy"}


def _check_catalog(catalog: ExerciseCatalog) -> dict[str, Any]:
    """Report exercise catalog freshness."""
    snapshot = catalog.snapshot
    return {
        "status": "healthy" if catalog.is_warm else "unhealthy",
        "size": len(snapshot.names),
        "fetched_at": snapshot.fetched_at.isoformat() if snapshot.fetched_at else None,
        "seed": snapshot.is_seed,
    }


@router.get("")
async def health_check(
    client: BackendClient = Depends(get_backend_client),
    catalog: ExerciseCatalog = Depends(get_exercise_catalog),
    sessions: SessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    """Return aggregate health of the relay."""
    services = {
        "backend": _check_backend(client),
        "exercise_catalog": _check_catalog(catalog),
    }

    overall = (
        "healthy"
        if all(s["status"] == "healthy" for s in services.values())
        else "degraded"
    )

    return {
        "status": overall,
        "services": services,
        "active_sessions": len(sessions),
    }
