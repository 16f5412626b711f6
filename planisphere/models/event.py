"""Event model with Pydantic v2 validation."""

import re
import uuid
from enum import Enum
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from planisphere.exceptions import ValidationError

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class EventCategory(str, Enum):
    """Event category enumeration."""

    WORK = "work"
    PERSONAL = "personal"
    OTHER = "other"


def new_event_id() -> str:
    """Generate a client-side event id (offline mode)."""
    return uuid.uuid4().hex


class Event(BaseModel):
    """A single calendar event.

    Field declaration order is the export order. External names are the
    camelCase aliases (startTime, endTime).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    description: str = ""
    category: EventCategory = EventCategory.OTHER

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Require a non-empty event name."""
        if not v.strip():
            raise ValueError("Event name is required")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Accept HH:MM (24h) strings only."""
        if not _TIME_PATTERN.match(v):
            raise ValueError(f"Invalid time format: {v!r} (expected HH:MM)")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, v):
        """Store nullable descriptions as empty strings."""
        return "" if v is None else v

    def to_export_dict(self) -> dict[str, str]:
        """Serialize with external field names, in export order."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_form(cls, data: dict[str, Any]) -> "Event":
        """Build an event from form input, generating an id if absent.

        Raises:
            ValidationError: If a required field is missing or malformed.
        """
        values = dict(data)
        if not values.get("id"):
            values["id"] = new_event_id()
        try:
            return cls.model_validate(values)
        except pydantic.ValidationError as e:
            raise ValidationError(_describe(e)) from e


def _describe(error: pydantic.ValidationError) -> str:
    """Flatten a pydantic error into a single user-facing message."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else item.get("msg"))
    return "; ".join(parts)
