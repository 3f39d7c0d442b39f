"""Time-ordered store of the events currently shown to the user.

The store maps an event's start time to the event itself. Keying on start
time means two distinct events starting at the same instant collide and the
later one wins; in exchange, an event can never be admitted twice and so can
never arm two reminders.

Only the foreground loop touches the store, so it does no locking.
"""

import bisect
import logging
from collections.abc import Iterator
from datetime import datetime

from agenda.models import CalendarEvent

logger = logging.getLogger(__name__)


class EventStore:
    """Ascending-by-start-time mapping of active events."""

    def __init__(self):
        self._events: dict[datetime, CalendarEvent] = {}
        self._keys: list[datetime] = []  # sorted view of _events

    def admit(self, event: CalendarEvent) -> bool:
        """Insert or replace the entry at ``event.start_time``.

        Returns True only when the key was free, i.e. this is a new
        admission rather than an update. A known id found under a different
        key (the event was moved) is dropped first.
        """
        key = event.start_time
        stale = self._key_for(event.id)
        if stale is not None and stale != key:
            logger.info(f"Event rescheduled: {event.subject} moved to {key}")
            self._pop(stale)

        if key in self._events:
            self._events[key] = event
            return False

        bisect.insort(self._keys, key)
        self._events[key] = event
        return True

    def remove(self, event: CalendarEvent) -> bool:
        """Remove the entry with the same id as ``event``. Returns True if removed."""
        key = self._key_for(event.id)
        if key is None:
            return False
        self._pop(key)
        return True

    def sweep(self, now: datetime) -> list[CalendarEvent]:
        """Drop every event that has ended by ``now`` and return them."""
        expired = [self._events[key] for key in self._keys if self._events[key].is_over(now)]
        for event in expired:
            self._pop(event.start_time)
        if expired:
            logger.debug(f"Swept {len(expired)} expired event(s)")
        return expired

    def get(self, event_id: str) -> CalendarEvent | None:
        key = self._key_for(event_id)
        return self._events[key] if key is not None else None

    def at(self, index: int) -> CalendarEvent | None:
        """Event at ``index`` in ascending start order, or None if out of range."""
        if 0 <= index < len(self._keys):
            return self._events[self._keys[index]]
        return None

    def first(self) -> CalendarEvent | None:
        return self.at(0)

    def _key_for(self, event_id: str) -> datetime | None:
        for key, event in self._events.items():
            if event.id == event_id:
                return key
        return None

    def _pop(self, key: datetime) -> CalendarEvent:
        self._keys.pop(bisect.bisect_left(self._keys, key))
        return self._events.pop(key)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[CalendarEvent]:
        return (self._events[key] for key in list(self._keys))

    def __contains__(self, event_id: object) -> bool:
        return isinstance(event_id, str) and self._key_for(event_id) is not None
