"""Commands sent from the snapshot source to the event store."""

from dataclasses import dataclass

from agenda.models.event import CalendarEvent


@dataclass(frozen=True)
class Upsert:
    """Insert the event, or replace the entry at its start time."""
    event: CalendarEvent


@dataclass(frozen=True)
class Remove:
    """Drop the stored event with the same id, if any."""
    event: CalendarEvent


EventCommand = Upsert | Remove
