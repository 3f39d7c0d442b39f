"""Calendar event model shared by the refresh worker and the UI loop.

This module defines the CalendarEvent value which represents one upcoming
meeting or appointment. Events are built by the snapshot source from the
remote calendar response and are never modified once admitted into the
event store; an update arrives as a new value that replaces the old one.
"""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict


class ResponseStatus(str, Enum):
    """The user's own answer to the invitation."""
    ACCEPTED = "accepted"
    NOT_RESPONDED = "notResponded"
    UNKNOWN = "unknown"


class OnlineMeeting(BaseModel):
    """Join details for events held as an online meeting."""
    model_config = ConfigDict(frozen=True)

    join_url: str


class CalendarEvent(BaseModel):
    """An upcoming calendar event.

    Attributes:
        id: Stable identifier from the source calendar.
        start_time: When the event starts (timezone-aware).
        end_time: When the event ends (timezone-aware). Expected to be after
            start_time, but not checked.
        subject: Event title.
        organizer: Display name or address of the organizer.
        location: Free-form location text.
        body: Event description.
        is_cancelled: Whether the source marked the event as cancelled.
        online_meeting: Join details, present only for online meetings.
        response: The user's response to the invitation, if any.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    start_time: AwareDatetime
    end_time: AwareDatetime
    subject: str = ""
    organizer: str = ""
    location: str = ""
    body: str = ""
    is_cancelled: bool = False
    online_meeting: OnlineMeeting | None = None
    response: ResponseStatus | None = None

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    def is_over(self, now: datetime) -> bool:
        return self.end_time <= now
