"""Store-side event record."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from planisphere.dates import is_date_key
from planisphere.models.event import Event, EventCategory


class EventRecord(BaseModel):
    """A row in the events table.

    Column names follow the backend (snake_case). ``position`` is the
    display order within a date and is only meaningful for stores that
    support ordering; ``created_at`` is the fallback order.
    """

    id: str
    date: str
    name: str
    start_time: str
    end_time: str
    description: str | None = None
    category: EventCategory = EventCategory.OTHER
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    position: int = 0

    @field_validator("date")
    @classmethod
    def validate_date_key(cls, v: str) -> str:
        if not is_date_key(v):
            raise ValueError(f"Invalid date-key: {v!r}")
        return v

    def to_event(self) -> Event:
        """Convert to the client-side event value."""
        return Event(
            id=self.id,
            name=self.name,
            start_time=self.start_time,
            end_time=self.end_time,
            description=self.description,
            category=self.category,
        )

    @classmethod
    def from_event(
        cls,
        date_key: str,
        event: Event,
        user_id: str | None = None,
        position: int = 0,
        event_id: str | None = None,
    ) -> "EventRecord":
        """Build a record for ``event`` on ``date_key``."""
        return cls(
            id=event_id or event.id,
            date=date_key,
            name=event.name,
            start_time=event.start_time,
            end_time=event.end_time,
            description=event.description or None,
            category=event.category,
            user_id=user_id,
            position=position,
        )
