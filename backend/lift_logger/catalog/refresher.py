"""
Periodic exercise catalog refresh using APScheduler.
"""

import asyncio
import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from lift_logger.catalog.cache import ExerciseCatalog
from lift_logger.config import settings

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "exercise_catalog_refresh"


class CatalogRefresher:
    """
    Warms the exercise catalog on startup and keeps it fresh on a timer,
    independent of user traffic.
    """

    def __init__(self, catalog: ExerciseCatalog, interval_seconds: Optional[int] = None):
        self.catalog = catalog
        self.interval_seconds = (
            settings.catalog_refresh_interval_seconds
            if interval_seconds is None
            else interval_seconds
        )
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._initialized = False

    async def start(self):
        """Run one refresh, then schedule the recurring job."""
        if self._initialized:
            logger.warning("Catalog refresher already started")
            return

        warmed = await self.catalog.refresh()
        if not warmed:
            logger.warning(
                "Initial catalog refresh failed, serving %d seed names",
                len(self.catalog.current_names()),
            )

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.catalog.refresh,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=REFRESH_JOB_ID,
            name="Refresh exercise catalog",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        self._initialized = True

        logger.info(
            "✅ Catalog refresher started (every %ss)", self.interval_seconds
        )

    async def shutdown(self):
        """Stop the recurring job."""
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            # AsyncIOScheduler queues the stop on the loop; let it run
            await asyncio.sleep(0)
            logger.info("Catalog refresher shut down")
        self._initialized = False

    @property
    def running(self) -> bool:
        return bool(self._initialized and self.scheduler and self.scheduler.running)

    def next_run_time(self):
        """When the next scheduled refresh fires, or None if not scheduled."""
        if not self._initialized:
            return None
        job = self.scheduler.get_job(REFRESH_JOB_ID)
        return job.next_run_time if job else None
