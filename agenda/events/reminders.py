"""Reminder timers, one per admitted event.

Each timer is a one-off APScheduler job on the reminder scheduler. When it
runs it sends the event id on the fire channel and is discarded. Timers are
never cancelled: a timer whose event has since been removed still fires, and
the alert gate simply shows whatever is current.
"""

import logging
from datetime import UTC, datetime, timedelta

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

from agenda.core.channel import Channel, ChannelClosed
from agenda.models import CalendarEvent

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Arms a fire-once timer ``lead_time`` before each new event."""

    def __init__(self, timers: BaseScheduler, fired: Channel[str], lead_time: timedelta):
        self.timers = timers
        self.fired = fired
        self.lead_time = lead_time
        self.armed = 0

    def fire_time(self, event: CalendarEvent, now: datetime) -> datetime:
        """When the reminder should go off; never earlier than ``now``."""
        return max(event.start_time - self.lead_time, now)

    def delay(self, event: CalendarEvent, now: datetime) -> timedelta:
        return self.fire_time(event, now) - now

    def arm(self, event: CalendarEvent, now: datetime | None = None) -> None:
        """Start the single timer for a newly admitted event."""
        now = now or datetime.now(UTC)
        run_date = self.fire_time(event, now)
        self.schedule(run_date, event.id)
        self.armed += 1
        logger.info(f"Reminder for {event.subject!r} armed for {run_date.isoformat()}")

    def schedule(self, run_date: datetime, payload: str) -> None:
        # misfire_grace_time=None: a late timer still fires instead of being skipped
        self.timers.add_job(
            self._fire,
            trigger=DateTrigger(run_date=run_date),
            args=[payload],
            misfire_grace_time=None,
        )

    def _fire(self, payload: str) -> None:
        try:
            self.fired.send(payload)
        except ChannelClosed:
            logger.debug(f"Reminder {payload} fired during shutdown, dropped")
