"""Tests for the scheduled catalog refresh."""

import pytest

from lift_logger.catalog.cache import ExerciseCatalog
from lift_logger.catalog.refresher import REFRESH_JOB_ID, CatalogRefresher
from lift_logger.errors import BackendUnavailable


@pytest.mark.asyncio
async def test_start_warms_catalog_then_schedules_refresh(
    catalog: ExerciseCatalog, fake_backend
) -> None:
    fake_backend.script("list_exercises", {"ok": True, "exercises": ["Bench", "Dips"]})
    refresher = CatalogRefresher(catalog, interval_seconds=300)

    await refresher.start()
    try:
        assert catalog.is_warm
        assert catalog.current_names() == ("Bench", "Dips")
        assert refresher.running
        job = refresher.scheduler.get_job(REFRESH_JOB_ID)
        assert job is not None
        assert job.trigger.interval.total_seconds() == 300
        assert refresher.next_run_time() is not None
    finally:
        await refresher.shutdown()

    assert not refresher.running


@pytest.mark.asyncio
async def test_failed_warm_up_still_schedules_refresh(
    catalog: ExerciseCatalog, fake_backend
) -> None:
    fake_backend.script("list_exercises", BackendUnavailable("down"))
    refresher = CatalogRefresher(catalog, interval_seconds=60)

    await refresher.start()
    try:
        assert not catalog.is_warm
        assert refresher.scheduler.get_job(REFRESH_JOB_ID) is not None
    finally:
        await refresher.shutdown()


@pytest.mark.asyncio
async def test_start_twice_keeps_single_job(catalog: ExerciseCatalog, fake_backend) -> None:
    fake_backend.script("list_exercises", {"ok": True, "exercises": ["Bench"]})
    refresher = CatalogRefresher(catalog, interval_seconds=60)

    await refresher.start()
    await refresher.start()
    try:
        assert len(refresher.scheduler.get_jobs()) == 1
        assert fake_backend.operations() == ["list_exercises"]
    finally:
        await refresher.shutdown()


def test_not_started_has_no_next_run(catalog: ExerciseCatalog) -> None:
    refresher = CatalogRefresher(catalog, interval_seconds=60)
    assert refresher.next_run_time() is None
    assert not refresher.running


@pytest.mark.asyncio
async def test_shutdown_stops_scheduler_before_returning(
    catalog: ExerciseCatalog, fake_backend
) -> None:
    fake_backend.script("list_exercises", {"ok": True, "exercises": ["Bench"]})
    refresher = CatalogRefresher(catalog, interval_seconds=60)
    await refresher.start()
    scheduler = refresher.scheduler

    await refresher.shutdown()

    assert not scheduler.running
    assert not refresher.running
    assert refresher.next_run_time() is None
