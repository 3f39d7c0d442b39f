from agenda.models.command import EventCommand, Remove, Upsert
from agenda.models.event import CalendarEvent, OnlineMeeting, ResponseStatus

__all__ = [
    "CalendarEvent",
    "OnlineMeeting",
    "ResponseStatus",
    "EventCommand",
    "Upsert",
    "Remove",
]
