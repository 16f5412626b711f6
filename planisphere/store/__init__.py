"""Event store clients."""

from planisphere.config import PlanisphereConfig
from planisphere.store.base import ChangeCallback, EventStore, Subscription
from planisphere.store.json_store import JSONFileEventStore
from planisphere.store.memory import InMemoryEventStore


def create_store(config: PlanisphereConfig) -> EventStore:
    """Build the store selected by ``config.store_backend``."""
    if config.store_backend == "memory":
        return InMemoryEventStore()
    return JSONFileEventStore(config.events_path)


__all__ = [
    "ChangeCallback",
    "EventStore",
    "Subscription",
    "InMemoryEventStore",
    "JSONFileEventStore",
    "create_store",
]
