"""Drag-and-drop move handling."""

import logging
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from planisphere.dates import is_date_key
from planisphere.exceptions import ValidationError
from planisphere.models.calendar import CalendarModel
from planisphere.models.event import Event
from planisphere.sync.engine import SyncEngine

logger = logging.getLogger(__name__)


class MoveIntent(BaseModel):
    """Request to relocate one event to a new date and/or position."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_date: str = Field(alias="sourceDate")
    source_index: int = Field(alias="sourceIndex")
    dest_date: str = Field(alias="destDate")
    dest_index: int = Field(alias="destIndex")

    @field_validator("source_date", "dest_date")
    @classmethod
    def validate_date_key(cls, v: str) -> str:
        if not is_date_key(v):
            raise ValueError(f"Invalid date-key: {v!r}")
        return v

    @property
    def is_noop(self) -> bool:
        return self.source_date == self.dest_date and self.source_index == self.dest_index

    @classmethod
    def parse(cls, data: dict[str, Any]) -> "MoveIntent":
        """Build an intent from untrusted input.

        Raises:
            ValidationError: If a date-key or index is malformed.
        """
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid move: {e.error_count()} field error(s)") from e


class ReorderController:
    """Applies move intents to the model, then mirrors them to the store.

    The local move is optimistic: it is visible immediately and is kept
    even when the store update fails (the engine reports status ERROR).
    """

    def __init__(self, model: CalendarModel, engine: SyncEngine):
        self.model = model
        self.engine = engine

    def apply(self, intent: MoveIntent) -> Event | None:
        """Apply a move locally. Returns the moved event, or None if dropped."""
        if intent.is_noop:
            return None

        moved = self.model.move(
            intent.source_date, intent.source_index, intent.dest_date, intent.dest_index
        )
        if moved is None:
            logger.debug(
                f"Dropped move: no event at {intent.source_date}[{intent.source_index}]"
            )
        return moved

    async def move(self, intent: MoveIntent) -> bool:
        """Move an event and persist the change.

        Returns:
            True if the move was applied and persisted. False for a no-op, a
            dropped intent, or a store failure (the local move is kept).

        Raises:
            AuthRequiredError: If nobody is signed in; the model is untouched.
        """
        self.engine.require_user()

        moved = self.apply(intent)
        if moved is None:
            return False

        # Position after clamping, as stored in the model
        dest_date, dest_index = self.model.find(moved.id)
        logger.info(
            f"Moved event {moved.id} {intent.source_date}[{intent.source_index}]"
            f" -> {dest_date}[{dest_index}]"
        )
        return await self.engine.persist_move(
            moved.id, intent.source_date, dest_date, dest_index
        )
