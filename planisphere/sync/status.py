"""Synchronization status."""

from enum import Enum


class SyncStatus(str, Enum):
    """State of the last completed or in-flight store operation."""

    SYNCED = "synced"
    SYNCING = "syncing"
    ERROR = "error"
