"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from agenda.core.channel import Channel
from agenda.events.alerts import AlertGate
from agenda.events.loop import Agenda
from agenda.events.reminders import ReminderScheduler
from agenda.events.store import EventStore
from agenda.models import CalendarEvent

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)


def make_event(
    event_id: str,
    start: datetime,
    minutes: int = 30,
    **fields,
) -> CalendarEvent:
    """Build an event starting at ``start`` and lasting ``minutes``."""
    fields.setdefault("subject", f"Event {event_id}")
    return CalendarEvent(
        id=event_id,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        **fields,
    )


@pytest.fixture(name="now")
def now_fixture() -> datetime:
    return NOW


@pytest.fixture(name="store")
def store_fixture() -> EventStore:
    return EventStore()


@pytest.fixture(name="commands")
def commands_fixture() -> Channel:
    return Channel("commands")


@pytest.fixture(name="fired")
def fired_fixture() -> Channel:
    return Channel("fired")


@pytest.fixture(name="timers")
def timers_fixture():
    """A reminder scheduler that is never started, so no job ever runs."""
    scheduler = BackgroundScheduler(timezone=UTC)
    yield scheduler
    scheduler.remove_all_jobs()


@pytest.fixture(name="running_timers")
def running_timers_fixture():
    """A started reminder scheduler whose jobs really fire."""
    scheduler = BackgroundScheduler(timezone=UTC)
    scheduler.start()
    yield scheduler
    scheduler.shutdown(wait=False)


@pytest.fixture(name="reminders")
def reminders_fixture(timers, fired) -> ReminderScheduler:
    return ReminderScheduler(timers, fired, timedelta(minutes=2))


@pytest.fixture(name="alerts")
def alerts_fixture(fired) -> AlertGate:
    # No window command: surfacing is a no-op unless a test sets one
    return AlertGate(fired)


@pytest.fixture(name="agenda")
def agenda_fixture(commands, reminders, alerts, store) -> Agenda:
    return Agenda(commands=commands, reminders=reminders, alerts=alerts, store=store)
