"""Background schedulers for calendar refresh and reminder timers."""
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


def create_scheduler() -> BackgroundScheduler:
    """A scheduler running its jobs on a single worker thread."""
    return BackgroundScheduler(
        executors={"default": ThreadPoolExecutor(max_workers=1)},
        timezone=UTC,
    )


def refresh_job(refresh: Callable[[], dict]):
    """Background refresh job. Failures are logged and retried next interval."""
    try:
        stats = refresh()
        logger.debug(f"Background refresh completed: {stats}")
    except Exception as e:
        logger.error(f"Background refresh failed: {e}")


def start_refresh(scheduler: BackgroundScheduler, refresh: Callable[[], dict], seconds: int):
    """Start the refresh scheduler; the first refresh runs right away."""
    scheduler.add_job(
        refresh_job,
        trigger=IntervalTrigger(seconds=seconds),
        args=[refresh],
        id="calendar_refresh",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        next_run_time=datetime.now(UTC),
    )
    scheduler.start()
    logger.info(f"Refresh scheduler started, refreshing every {seconds} seconds")


def start_timers(scheduler: BackgroundScheduler):
    """Start the scheduler hosting reminder timers."""
    scheduler.start()
    logger.info("Reminder scheduler started")


def shutdown_scheduler(scheduler: BackgroundScheduler):
    """Stop without waiting; outstanding timers and fetches are abandoned."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")
