"""Offline event store persisted to a JSON file."""

import json
import logging
from pathlib import Path

import pydantic

from planisphere.exceptions import StoreError
from planisphere.models.record import EventRecord
from planisphere.store.memory import InMemoryEventStore

logger = logging.getLogger(__name__)


class JSONFileEventStore(InMemoryEventStore):
    """Event store that keeps its records in a local JSON file.

    Used in offline mode: event ids are generated client-side and kept as
    is. The file is rewritten after every successful mutation.

    File format::

        {"events": [{"id": ..., "date": "2024-06-01", ...}, ...]}
    """

    def __init__(self, path: Path, latency: float = 0.0):
        self.path = path
        super().__init__(
            records=self._load(path), ordered=True, assign_ids=False, latency=latency
        )

    @staticmethod
    def _load(path: Path) -> list[EventRecord]:
        """Read records from disk (empty when the file does not exist)."""
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return [EventRecord.model_validate(item) for item in data.get("events", [])]
        except (OSError, ValueError, pydantic.ValidationError) as e:
            raise StoreError(f"Could not read events file {path}: {e}") from e

    def _persist(self, records: list[EventRecord]) -> None:
        data = {"events": [r.model_dump(mode="json") for r in self._sorted(records)]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StoreError(f"Could not write events file {self.path}: {e}") from e
        logger.debug(f"Wrote {len(data['events'])} events to {self.path}")
