"""Calendar snapshot source.

Runs on the refresh scheduler's worker thread. Each refresh fetches the
visible window from Google Calendar and turns it into commands for the UI
loop: an ``Upsert`` per event returned, and a ``Remove`` per event that was
in the previous snapshot but has since disappeared. A failed fetch emits
nothing; the next interval simply tries again.
"""
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from agenda.calendar.parser import EventParseError, parse_event
from agenda.core.channel import Channel
from agenda.models import CalendarEvent, EventCommand, Remove, Upsert

logger = logging.getLogger(__name__)


def _isoformat(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat().replace("+00:00", "Z")


def fetch_events(service, calendar_id: str, time_min: datetime, time_max: datetime) -> list[dict]:
    """Fetch every event item in the window, following pagination."""
    items = []
    page_token = None
    while True:
        events_result = (
            service.events()
            .list(
                calendarId=calendar_id,
                timeMin=_isoformat(time_min),
                timeMax=_isoformat(time_max),
                singleEvents=True,
                orderBy="startTime",
                showDeleted=True,
                pageToken=page_token,
            )
            .execute()
        )
        items.extend(events_result.get("items", []))
        page_token = events_result.get("nextPageToken")
        if not page_token:
            return items


class SnapshotSource:
    """Turns periodic calendar fetches into Upsert/Remove commands."""

    def __init__(
        self,
        service,
        commands: Channel[EventCommand],
        calendar_id: str = "primary",
        window: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        self.service = service
        self.commands = commands
        self.calendar_id = calendar_id
        self.window = window
        self.clock = clock
        self._known: dict[str, CalendarEvent] = {}

    def refresh(self) -> dict:
        """
        Fetch the window and emit commands.

        Returns dict with refresh statistics.
        """
        now = self.clock()
        items = fetch_events(self.service, self.calendar_id, now, now + self.window)

        stats = {"upserted": 0, "cancelled": 0, "removed": 0, "skipped": 0}
        snapshot: dict[str, CalendarEvent] = {}
        handled: set[str] = set()
        commands: list[EventCommand] = []

        for google_event in items:
            try:
                event = parse_event(google_event)
            except EventParseError as e:
                # Deleted instances often come back as a bare id + status
                known = self._known.get(google_event.get("id", ""))
                if google_event.get("status") == "cancelled" and known:
                    commands.append(Remove(known))
                    handled.add(known.id)
                    stats["removed"] += 1
                else:
                    logger.debug(f"Skipping event {google_event.get('id')}: {e}")
                    stats["skipped"] += 1
                continue

            # Cancelled events are still sent; the UI loop decides what they mean
            commands.append(Upsert(event))
            handled.add(event.id)
            snapshot[event.id] = event
            if event.is_cancelled:
                stats["cancelled"] += 1
            else:
                stats["upserted"] += 1

        # Events deleted remotely since the last refresh
        for event_id, event in self._known.items():
            if event_id not in handled:
                commands.append(Remove(event))
                stats["removed"] += 1

        for command in commands:
            self.commands.send(command)
        self._known = snapshot

        logger.info(f"Refresh completed: {stats}")
        return stats
