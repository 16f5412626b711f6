"""JSON export writer."""

import json
from pathlib import Path

from planisphere.exceptions import ExportError
from planisphere.models.calendar import CalendarModel


def to_json(model: CalendarModel) -> str:
    """Pretty-printed JSON object: date-key -> list of events.

    Event fields are emitted as id, name, startTime, endTime, description,
    category. Parsing the output back gives the same mapping.
    """
    data = {
        date_key: [event.to_export_dict() for event in events]
        for date_key, events in model.items()
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


class JSONWriter:
    """Writer for JSON exports."""

    mimetype = "application/json"

    def render(self, model: CalendarModel) -> str:
        return to_json(model)

    def write(self, model: CalendarModel, path: Path) -> None:
        """Write model to JSON file."""
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.render(model))
        except OSError as e:
            raise ExportError(f"Could not write {path}: {e}") from e

    def get_extension(self) -> str:
        """Returns file extension."""
        return "json"
