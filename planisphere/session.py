"""Calendar session: one user's model, sync engine and move controller."""

import logging
from pathlib import Path
from typing import Any

from planisphere.auth import AuthProvider
from planisphere.models.calendar import CalendarModel
from planisphere.models.event import Event
from planisphere.output import export_filename, get_writer
from planisphere.reorder import MoveIntent, ReorderController
from planisphere.store.base import EventStore
from planisphere.sync.engine import SyncEngine
from planisphere.sync.status import SyncStatus

logger = logging.getLogger(__name__)


class CalendarSession:
    """Wires the calendar model to a store for the lifetime of a session.

    The model starts empty, is filled by ``start()`` and is discarded by
    ``close()`` (sign-out or unmount).

    Usage:
        async with CalendarSession(store, auth) as session:
            await session.create_event("2024-06-01", {...})
    """

    def __init__(self, store: EventStore, auth: AuthProvider):
        self.store = store
        self.auth = auth
        self.model = CalendarModel()
        self.engine = SyncEngine(store, self.model, auth)
        self.controller = ReorderController(self.model, self.engine)

    @property
    def status(self) -> SyncStatus:
        return self.engine.status

    async def start(self) -> bool:
        """Subscribe to changes and load all events."""
        return await self.engine.start()

    async def close(self) -> None:
        """Tear down the sync engine and drop the model."""
        await self.engine.close()
        self.model.clear()

    async def __aenter__(self) -> "CalendarSession":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def create_event(self, date_key: str, form: dict[str, Any]) -> Event:
        """Validate form input and create the event on ``date_key``."""
        event = Event.from_form(form)
        return await self.engine.create(date_key, event)

    async def delete_event(self, event_id: str) -> bool:
        return await self.engine.delete(event_id)

    async def move_event(self, intent: MoveIntent | dict[str, Any]) -> bool:
        if not isinstance(intent, MoveIntent):
            intent = MoveIntent.parse(intent)
        return await self.controller.move(intent)

    def export(self, format: str, label: str, directory: Path) -> Path:
        """Write the model to ``directory`` and return the file path."""
        writer = get_writer(format)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / export_filename(label, writer.get_extension())
        writer.write(self.model, path)
        logger.info(f"Exported {self.model.total()} events to {path}")
        return path
