"""Base classes for calendar writers."""

from pathlib import Path
from typing import Protocol

from planisphere.models.calendar import CalendarModel


class CalendarWriter(Protocol):
    """Protocol for calendar export writers."""

    mimetype: str

    def render(self, model: CalendarModel) -> str:
        """Render the whole model as text."""
        ...

    def write(self, model: CalendarModel, path: Path) -> None:
        """Write rendered model to file path."""
        ...

    def get_extension(self) -> str:
        """Returns file extension (e.g., 'json', 'csv')."""
        ...
