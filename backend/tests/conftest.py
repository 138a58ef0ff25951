"""Shared test fixtures for the Lift Logger backend."""

from collections.abc import AsyncGenerator
from typing import Any, Optional, Union

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from lift_logger.catalog.cache import ExerciseCatalog
from lift_logger.coordinator.commands import CommandCoordinator
from lift_logger.dependencies import (
    get_backend_client,
    get_coordinator,
    get_exercise_catalog,
    get_session_store,
)
from lift_logger.errors import BackendRejected, BackendUnavailable
from lift_logger.main import app
from lift_logger.sessions.store import SessionStore

CATALOG_NAMES = ["Bench", "Squat", "Deadlift", "Overhead Press", "Barbell Row"]

Outcome = Union[dict[str, Any], Exception]


class FakeBackend:
    """Scripted stand-in for ``BackendClient``.

    Each operation replays its queued outcomes in order; the last one repeats.
    Replies without ``ok`` raise ``BackendRejected`` like the real client.
    """

    configured = True

    def __init__(self) -> None:
        self._outcomes: dict[str, list[Outcome]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def script(self, operation: str, *outcomes: Outcome) -> None:
        self._outcomes.setdefault(operation, []).extend(outcomes)

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    async def submit(
        self,
        operation: str,
        payload: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> dict[str, Any]:
        self.calls.append((operation, payload or {}))
        queue = self._outcomes.get(operation)
        if not queue:
            raise BackendUnavailable(f"no scripted reply for {operation}")
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        if not outcome.get("ok"):
            raise BackendRejected(outcome.get("error") or "backend reported a failure")
        return outcome

    async def close(self) -> None:
        pass


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def catalog(fake_backend: FakeBackend) -> ExerciseCatalog:
    """Catalog seeded with ``CATALOG_NAMES`` (not yet refreshed)."""
    return ExerciseCatalog(fake_backend, seed=CATALOG_NAMES, refresh_timeout=0.5)


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore()


@pytest.fixture
def coordinator(
    fake_backend: FakeBackend, catalog: ExerciseCatalog, sessions: SessionStore
) -> CommandCoordinator:
    return CommandCoordinator(fake_backend, catalog, sessions)


@pytest_asyncio.fixture
async def client(
    fake_backend: FakeBackend,
    catalog: ExerciseCatalog,
    sessions: SessionStore,
    coordinator: CommandCoordinator,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints against fakes."""
    app.dependency_overrides[get_backend_client] = lambda: fake_backend
    app.dependency_overrides[get_exercise_catalog] = lambda: catalog
    app.dependency_overrides[get_session_store] = lambda: sessions
    app.dependency_overrides[get_coordinator] = lambda: coordinator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
