"""CSV export writer."""

from pathlib import Path

from planisphere.constants import CSV_HEADER
from planisphere.exceptions import ExportError
from planisphere.models.calendar import CalendarModel


def to_csv(model: CalendarModel) -> str:
    """One header line plus one line per event, joined with newlines.

    Fields are comma-joined without quoting, so a comma or newline inside a
    name or description corrupts its row. Consumers that need round-trip
    safety should use the JSON export.
    """
    rows = [CSV_HEADER]
    for date_key, events in model.items():
        for event in events:
            rows.append(
                [
                    date_key,
                    event.name,
                    event.start_time,
                    event.end_time,
                    event.category.value,
                    event.description or "",
                ]
            )
    return "\n".join(",".join(row) for row in rows)


class CSVWriter:
    """Writer for CSV exports."""

    mimetype = "text/csv"

    def render(self, model: CalendarModel) -> str:
        return to_csv(model)

    def write(self, model: CalendarModel, path: Path) -> None:
        """Write model to CSV file."""
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(self.render(model))
        except OSError as e:
            raise ExportError(f"Could not write {path}: {e}") from e

    def get_extension(self) -> str:
        """Returns file extension."""
        return "csv"
