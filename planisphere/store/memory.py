"""In-process event store."""

import asyncio
import logging
import threading
import uuid

from planisphere.exceptions import StoreError
from planisphere.models.event import Event
from planisphere.models.record import EventRecord
from planisphere.store.base import ChangeCallback, ChangeFeed, Subscription

logger = logging.getLogger(__name__)


class InMemoryEventStore:
    """Event store backed by a list of records held in memory.

    Behaves like the remote backend: ids are assigned by the store, every
    insert/update/delete is pushed to subscribers, and records come back
    grouped by date. With ``ordered=False`` the store ignores display
    positions and returns creation order, like a backend without an order
    column.
    """

    def __init__(
        self,
        records: list[EventRecord] | None = None,
        ordered: bool = True,
        assign_ids: bool = True,
        latency: float = 0.0,
    ):
        """
        Initialize store.

        Args:
            records: Initial records
            ordered: Persist display positions within a date
            assign_ids: Replace client ids with store-generated ones on create
            latency: Seconds each call sleeps before touching the records
        """
        self._lock = threading.Lock()
        self._records: list[EventRecord] = list(records or [])
        self._ordered = ordered
        self._assign_ids = assign_ids
        self.latency = latency
        self._feed = ChangeFeed()

    @property
    def supports_ordering(self) -> bool:
        return self._ordered

    @property
    def subscriber_count(self) -> int:
        return self._feed.subscriber_count

    def _sorted(self, records: list[EventRecord] | None = None) -> list[EventRecord]:
        if self._ordered:
            key = lambda r: (r.date, r.position, r.created_at)
        else:
            key = lambda r: (r.date, r.created_at)
        return sorted(self._records if records is None else records, key=key)

    def _day(
        self,
        date_key: str,
        exclude: str | None = None,
        records: list[EventRecord] | None = None,
    ) -> list[EventRecord]:
        return [
            r for r in self._sorted(records) if r.date == date_key and r.id != exclude
        ]

    def _renumber(
        self, records: list[EventRecord], day: list[EventRecord]
    ) -> list[EventRecord]:
        """Return ``records`` with one day's positions rewritten to 0..n-1."""
        positions = {r.id: i for i, r in enumerate(day)}
        return [
            r.model_copy(update={"position": positions[r.id]}) if r.id in positions else r
            for r in records
        ]

    def _commit(self, records: list[EventRecord]) -> None:
        """Persist ``records``, then make them current.

        A failed write raises before anything is replaced, so the store
        never reports a change it did not keep.
        """
        self._persist(records)
        self._records = records

    def _persist(self, records: list[EventRecord]) -> None:
        """Hook for stores that write records somewhere durable."""
        pass

    async def _simulate_network(self) -> None:
        await asyncio.sleep(self.latency)

    async def list_events(self) -> list[EventRecord]:
        await self._simulate_network()
        with self._lock:
            return [r.model_copy() for r in self._sorted()]

    async def create_event(
        self, date_key: str, event: Event, user_id: str | None = None
    ) -> Event:
        await self._simulate_network()
        with self._lock:
            event_id = uuid.uuid4().hex if self._assign_ids else event.id
            if any(r.id == event_id for r in self._records):
                raise StoreError(f"Event {event_id} already exists")
            record = EventRecord.from_event(
                date_key,
                event,
                user_id=user_id,
                position=len(self._day(date_key)),
                event_id=event_id,
            )
            self._commit(self._records + [record])
        logger.debug(f"Inserted event {event_id} on {date_key}")
        self._feed.notify("INSERT", event_id)
        return record.to_event()

    async def delete_event(self, event_id: str) -> None:
        await self._simulate_network()
        with self._lock:
            removed = next((r for r in self._records if r.id == event_id), None)
            if removed is None:
                raise StoreError(f"Event {event_id} not found")
            records = [r for r in self._records if r.id != event_id]
            if self._ordered:
                records = self._renumber(
                    records, self._day(removed.date, records=records)
                )
            self._commit(records)
        logger.debug(f"Deleted event {event_id}")
        self._feed.notify("DELETE", event_id)

    async def update_event(
        self, event_id: str, date_key: str, position: int | None = None
    ) -> None:
        await self._simulate_network()
        with self._lock:
            record = next((r for r in self._records if r.id == event_id), None)
            if record is None:
                raise StoreError(f"Event {event_id} not found")
            old_date = record.date
            dest = self._day(date_key, exclude=event_id)
            if not self._ordered or position is None:
                position = len(dest)
            position = max(0, min(position, len(dest)))
            dest.insert(position, record.model_copy(update={"date": date_key}))
            records = [r for r in self._records if r.id != event_id] + [dest[position]]
            if self._ordered:
                records = self._renumber(records, dest)
                if old_date != date_key:
                    records = self._renumber(
                        records, self._day(old_date, records=records)
                    )
            self._commit(records)
        logger.debug(f"Updated event {event_id} -> {date_key}[{position}]")
        self._feed.notify("UPDATE", event_id)

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        return self._feed.subscribe(callback)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._feed.unsubscribe(subscription)
