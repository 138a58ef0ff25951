"""Process-wide cache of canonical exercise names.

Reads are synchronous and never touch the network. The snapshot starts as a
seed list and is replaced wholesale by each successful ``refresh()``; a failed
refresh keeps whatever was there before.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, Sequence

from pydantic import ValidationError

from lift_logger.config import settings
from lift_logger.errors import BackendError, InvalidCatalogReply
from lift_logger.models.backend import ExerciseListReply

if TYPE_CHECKING:
    from lift_logger.backend.client import BackendClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of the catalog at one point in time."""

    names: tuple[str, ...]
    fetched_at: Optional[datetime] = None

    @property
    def is_seed(self) -> bool:
        return self.fetched_at is None


class ExerciseCatalog:
    """Time-stamped set of exercise names with last-good-value semantics."""

    def __init__(
        self,
        client: BackendClient,
        seed: Optional[Sequence[str]] = None,
        refresh_timeout: Optional[float] = None,
    ) -> None:
        self._client = client
        seed_names = settings.seed_exercises if seed is None else seed
        self._snapshot = CatalogSnapshot(names=tuple(seed_names))
        self._refresh_timeout = (
            settings.catalog_refresh_timeout_seconds
            if refresh_timeout is None
            else refresh_timeout
        )
        self._pending: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def is_warm(self) -> bool:
        """True once any refresh has succeeded."""
        return not self._snapshot.is_seed

    def current_names(self) -> tuple[str, ...]:
        """Return the latest names without doing any I/O."""
        return self._snapshot.names

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        """Fetch the catalog from the backend within the refresh deadline.

        Returns:
            True if the snapshot was replaced, False if the old one was kept.
        """
        try:
            reply = await self._client.submit(
                "list_exercises", {}, timeout=self._refresh_timeout
            )
            names = self._parse(reply)
        except (BackendError, InvalidCatalogReply) as exc:
            logger.warning(
                "Exercise catalog refresh failed, keeping %d cached names: %s",
                len(self._snapshot.names),
                exc,
            )
            return False

        self._snapshot = CatalogSnapshot(
            names=tuple(names), fetched_at=datetime.now(timezone.utc)
        )
        logger.info("Exercise catalog refreshed: %d names", len(names))
        return True

    @staticmethod
    def _parse(reply: dict) -> list[str]:
        try:
            names = ExerciseListReply.model_validate(reply).clean_names()
        except ValidationError as exc:
            raise InvalidCatalogReply(f"malformed list_exercises reply: {exc}") from exc
        if not names:
            raise InvalidCatalogReply("list_exercises returned no names")
        return names

    def request_refresh(self) -> None:
        """Start a background refresh unless one is already running.

        Fire-and-forget: the caller's read is unaffected and failures are
        only logged.
        """
        if self._pending is not None and not self._pending.done():
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, skipping background refresh")
            return

        self._pending = loop.create_task(self.refresh())

    def request_refresh_if_cold(self) -> None:
        """Hint a background refresh while still serving the seed list."""
        if not self.is_warm:
            self.request_refresh()
