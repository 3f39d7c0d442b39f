"""The foreground side of the application.

``Agenda`` owns the event store, the focus state, the reminder scheduler and
the alert gate, and is the only code that mutates the store or the focus.
The UI calls ``tick`` on every pass of its loop; each tick

1. applies every pending snapshot command, in arrival order,
2. checks for fired reminders and raises at most one alert,
3. sweeps events that have ended,
4. re-validates the selection against the new store size.

Because admission happens before the sweep, an event admitted in a tick is
judged against the same clock that admitted it.
"""

import logging
from datetime import UTC, datetime

from agenda.core.channel import Channel
from agenda.events.alerts import AlertGate
from agenda.events.focus import Focus, FocusState
from agenda.events.reminders import ReminderScheduler
from agenda.events.store import EventStore
from agenda.models import CalendarEvent, EventCommand, Remove

logger = logging.getLogger(__name__)


class Agenda:
    """Single-writer coordinator for store, reminders, alerts and focus."""

    def __init__(
        self,
        commands: Channel[EventCommand],
        reminders: ReminderScheduler,
        alerts: AlertGate,
        store: EventStore | None = None,
        focus: FocusState | None = None,
        cancelled_as_remove: bool = True,
    ):
        self.commands = commands
        self.reminders = reminders
        self.alerts = alerts
        self.store = store if store is not None else EventStore()
        self.focus = focus if focus is not None else FocusState()
        self.cancelled_as_remove = cancelled_as_remove

    def apply(self, command: EventCommand, now: datetime) -> None:
        event = command.event
        if isinstance(command, Remove) or (event.is_cancelled and self.cancelled_as_remove):
            if self.store.remove(event):
                logger.info(f"Removed event: {event.subject}")
        elif event.is_over(now):
            # Late snapshot of a finished event; never admit or arm it
            if self.store.remove(event):
                logger.info(f"Removed finished event: {event.subject}")
        elif self.store.admit(event):
            self.reminders.arm(event, now)

    def tick(self, now: datetime | None = None) -> None:
        now = now or datetime.now(UTC)

        for command in self.commands.drain():
            self.apply(command, now)

        if self.alerts.poll_fired():
            self.alerts.raise_alert(self.focus)

        self.store.sweep(now)
        self.focus.clamp(len(self.store))

    # Read-only views for the presentation layer

    @property
    def events(self) -> list[CalendarEvent]:
        return list(self.store)

    @property
    def view(self) -> Focus:
        return self.focus.view

    @property
    def selected(self) -> int | None:
        return self.focus.selected

    @property
    def selected_event(self) -> CalendarEvent | None:
        if self.focus.selected is None:
            return None
        return self.store.at(self.focus.selected)

    @property
    def alert_events(self) -> list[CalendarEvent]:
        """Events behind the last alert, or the next event if they are gone."""
        events = [self.store.get(event_id) for event_id in self.alerts.alerted_ids]
        events = [event for event in events if event is not None]
        if not events and len(self.store):
            events = [self.store.first()]
        return events
