"""Event store contract and shared change-feed plumbing."""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from planisphere.models.event import Event
from planisphere.models.record import EventRecord

logger = logging.getLogger(__name__)

# Realtime callback. The payload shape is not guaranteed; consumers must
# treat any call as "something changed" and re-fetch.
ChangeCallback = Callable[[Any], None]


@dataclass
class Subscription:
    """Handle returned by ``subscribe``; pass it back to ``unsubscribe``."""

    callback: ChangeCallback = field(repr=False)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    active: bool = True


class EventStore(Protocol):
    """Async CRUD and change subscription against an event backend.

    All operations may fail independently with StoreError; there is no
    cross-operation transaction.
    """

    @property
    def supports_ordering(self) -> bool:
        """True if the store persists a display position per date."""
        ...

    async def list_events(self) -> list[EventRecord]:
        """All records, ordered by date then display order."""
        ...

    async def create_event(
        self, date_key: str, event: Event, user_id: str | None = None
    ) -> Event:
        """Insert an event and return it with its final id."""
        ...

    async def delete_event(self, event_id: str) -> None:
        """Delete an event by id."""
        ...

    async def update_event(
        self, event_id: str, date_key: str, position: int | None = None
    ) -> None:
        """Reassign an event's date and, if supported, its position."""
        ...

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        """Register for change notifications."""
        ...

    def unsubscribe(self, subscription: Subscription) -> None:
        """Release a subscription."""
        ...


class ChangeFeed:
    """In-process change notifications for local store implementations."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: dict[str, Subscription] = {}

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        subscription = Subscription(callback=callback)
        with self._lock:
            self._subscriptions[subscription.id] = subscription
        logger.debug(f"Subscribed to changes ({subscription.id})")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            removed = self._subscriptions.pop(subscription.id, None)
        if removed is None or not subscription.active:
            logger.warning(f"Subscription {subscription.id} already released")
            return
        subscription.active = False
        logger.debug(f"Unsubscribed from changes ({subscription.id})")

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def notify(self, change_type: str, record_id: str) -> None:
        """Invoke every active callback with a change payload."""
        with self._lock:
            subscriptions = list(self._subscriptions.values())
        payload = {"type": change_type, "id": record_id}
        for subscription in subscriptions:
            try:
                subscription.callback(payload)
            except Exception:
                logger.exception(f"Change callback {subscription.id} failed")
