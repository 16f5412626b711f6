"""Export layer for calendar files."""

from planisphere.constants import EXPORT_PREFIX
from planisphere.exceptions import UnsupportedFormatError
from planisphere.models.calendar import CalendarModel
from planisphere.output.base import CalendarWriter
from planisphere.output.csv_writer import CSVWriter, to_csv
from planisphere.output.json_writer import JSONWriter, to_json

_WRITERS = {
    "json": JSONWriter,
    "csv": CSVWriter,
}


def get_writer(format: str) -> CalendarWriter:
    """Get writer for format."""
    writer_cls = _WRITERS.get(format.lower())
    if writer_cls is None:
        raise UnsupportedFormatError(f"Unsupported export format: {format}")
    return writer_cls()


def export_filename(label: str, extension: str) -> str:
    """Download filename, e.g. 'calendar-events-June 2024.json'."""
    return f"{EXPORT_PREFIX}-{label}.{extension}"


def export_bytes(model: CalendarModel, format: str, label: str) -> tuple[str, bytes, str]:
    """Render a download: (filename, UTF-8 content, mimetype).

    The label only names the file; content is the whole model.
    """
    writer = get_writer(format)
    content = writer.render(model).encode("utf-8")
    return export_filename(label, writer.get_extension()), content, writer.mimetype


__all__ = [
    "CalendarWriter",
    "CSVWriter",
    "JSONWriter",
    "export_bytes",
    "export_filename",
    "get_writer",
    "to_csv",
    "to_json",
]
