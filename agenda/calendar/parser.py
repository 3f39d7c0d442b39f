"""Parse Google Calendar API event resources into CalendarEvent values."""
from datetime import datetime

from agenda.models import CalendarEvent, OnlineMeeting, ResponseStatus


class EventParseError(ValueError):
    """The API item cannot be shown as a timed event."""


def parse_event(google_event: dict) -> CalendarEvent:
    """
    Build a CalendarEvent from one item of ``events().list()``.

    Raises EventParseError for items without an id or a timed start/end.
    All-day events (``date`` only) are rejected: they have no instant to
    remind before.
    """
    google_id = google_event.get("id")
    if not google_id:
        raise EventParseError("Event has no id")

    return CalendarEvent(
        id=google_id,
        start_time=parse_datetime(google_event.get("start")),
        end_time=parse_datetime(google_event.get("end")),
        subject=google_event.get("summary") or "Untitled",
        organizer=_parse_organizer(google_event.get("organizer") or {}),
        location=google_event.get("location") or "",
        body=google_event.get("description") or "",
        is_cancelled=google_event.get("status") == "cancelled",
        online_meeting=_parse_online_meeting(google_event),
        response=_parse_response(google_event.get("attendees") or []),
    )


def parse_datetime(dt_dict: dict | None) -> datetime:
    """Parse a timed ``{"dateTime": ...}`` value into an aware datetime."""
    if not dt_dict or not dt_dict.get("dateTime"):
        raise EventParseError(f"Not a timed event boundary: {dt_dict!r}")
    try:
        parsed = datetime.fromisoformat(dt_dict["dateTime"].replace("Z", "+00:00"))
    except ValueError as e:
        raise EventParseError(str(e)) from e
    if parsed.tzinfo is None:
        raise EventParseError(f"Event time has no offset: {dt_dict['dateTime']}")
    return parsed


def _parse_organizer(organizer: dict) -> str:
    return organizer.get("displayName") or organizer.get("email") or ""


def _parse_online_meeting(google_event: dict) -> OnlineMeeting | None:
    if google_event.get("hangoutLink"):
        return OnlineMeeting(join_url=google_event["hangoutLink"])

    # Zoom, Teams etc. only show up as conference entry points
    entry_points = (google_event.get("conferenceData") or {}).get("entryPoints", [])
    for entry in entry_points:
        if entry.get("entryPointType") == "video" and entry.get("uri"):
            return OnlineMeeting(join_url=entry["uri"])
    return None


def _parse_response(attendees: list) -> ResponseStatus | None:
    """The current user's response, from the attendee flagged ``self``."""
    if not attendees:
        return None
    for attendee in attendees:
        if attendee.get("self", False):
            status = attendee.get("responseStatus", "needsAction")
            if status == "accepted":
                return ResponseStatus.ACCEPTED
            if status == "needsAction":
                return ResponseStatus.NOT_RESPONDED
            return ResponseStatus.UNKNOWN
    return ResponseStatus.UNKNOWN
