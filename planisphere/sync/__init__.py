"""Synchronization between the calendar model and the event store."""

from planisphere.sync.engine import StatusListener, SyncEngine
from planisphere.sync.status import SyncStatus

__all__ = [
    "StatusListener",
    "SyncEngine",
    "SyncStatus",
]
