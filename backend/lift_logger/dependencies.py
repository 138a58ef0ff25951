"""Dependency injection providers for FastAPI and the Telegram bot."""

from lift_logger.backend.client import BackendClient
from lift_logger.catalog.cache import ExerciseCatalog
from lift_logger.catalog.refresher import CatalogRefresher
from lift_logger.coordinator.commands import CommandCoordinator
from lift_logger.sessions.store import SessionStore

# Global singleton instances (safe for a single asyncio event loop)
_backend_client: BackendClient | None = None
_exercise_catalog: ExerciseCatalog | None = None
_session_store: SessionStore | None = None
_coordinator: CommandCoordinator | None = None
_catalog_refresher: CatalogRefresher | None = None


def get_backend_client() -> BackendClient:
    """Return singleton BackendClient instance."""
    global _backend_client
    if _backend_client is None:
        _backend_client = BackendClient()
    return _backend_client


def get_exercise_catalog() -> ExerciseCatalog:
    """Return singleton ExerciseCatalog instance."""
    global _exercise_catalog
    if _exercise_catalog is None:
        _exercise_catalog = ExerciseCatalog(get_backend_client())
    return _exercise_catalog


def get_session_store() -> SessionStore:
    """Return singleton SessionStore instance."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store


def get_coordinator() -> CommandCoordinator:
    """Return singleton CommandCoordinator instance."""
    global _coordinator
    if _coordinator is None:
        _coordinator = CommandCoordinator(
            get_backend_client(), get_exercise_catalog(), get_session_store()
        )
    return _coordinator


def get_catalog_refresher() -> CatalogRefresher:
    """Return singleton CatalogRefresher instance."""
    global _catalog_refresher
    if _catalog_refresher is None:
        _catalog_refresher = CatalogRefresher(get_exercise_catalog())
    return _catalog_refresher
