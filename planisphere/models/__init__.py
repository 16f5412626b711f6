"""Pydantic models and the in-memory calendar model."""

from planisphere.models.calendar import CalendarModel
from planisphere.models.event import Event, EventCategory, new_event_id
from planisphere.models.record import EventRecord

__all__ = [
    "Event",
    "EventCategory",
    "EventRecord",
    "CalendarModel",
    "new_event_id",
]
