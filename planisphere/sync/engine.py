"""Sync engine: keeps the calendar model consistent with the event store."""

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Callable, Generator

from planisphere.auth import AuthProvider, require_user
from planisphere.dates import parse_date_key
from planisphere.exceptions import StoreError, ValidationError
from planisphere.models.calendar import CalendarModel
from planisphere.models.event import Event
from planisphere.models.record import EventRecord
from planisphere.store.base import EventStore, Subscription
from planisphere.sync.status import SyncStatus

logger = logging.getLogger(__name__)

StatusListener = Callable[[SyncStatus], None]


class SyncEngine:
    """The only component that talks to the event store.

    Runs on a single asyncio loop. Each operation awaits the store, then
    applies its model mutation in one synchronous step, so mutations never
    interleave. Store failures are caught here and turned into
    ``SyncStatus.ERROR``; the model is never left partially updated.

    Policies:
        - Load replaces the whole model, or leaves it untouched on failure.
        - Create and delete touch the model only after the store confirms.
        - Moves are applied locally first by the reorder controller and are
          not rolled back when ``persist_move`` fails.
        - Any realtime notification triggers a full reload; payloads are
          ignored. This trades bandwidth for consistency, which is fine
          for per-user calendar volumes.
    """

    def __init__(self, store: EventStore, model: CalendarModel, auth: AuthProvider):
        self.store = store
        self.model = model
        self.auth = auth

        self._status = SyncStatus.SYNCED
        self.last_error: str | None = None
        self._listeners: list[StatusListener] = []

        self._loop: asyncio.AbstractEventLoop | None = None
        self._subscription: Subscription | None = None
        self._pending: set[asyncio.Task] = set()
        self._closed = False
        self._in_flight = 0

        # Overlapping loads: a result older than the last applied one is dropped
        self._load_seq = 0
        self._applied_seq = 0

    @property
    def status(self) -> SyncStatus:
        return self._status

    @property
    def closed(self) -> bool:
        return self._closed

    def add_status_listener(self, listener: StatusListener) -> None:
        """Call ``listener`` with the new status on every change."""
        self._listeners.append(listener)

    def require_user(self) -> str:
        """Current user id for write attribution (AuthRequiredError if none)."""
        return require_user(self.auth)

    def _set_status(self, status: SyncStatus, error: str | None = None) -> None:
        if error is not None:
            self.last_error = error
        if status is self._status:
            return
        logger.debug(f"Sync status {self._status.value} -> {status.value}")
        self._status = status
        for listener in list(self._listeners):
            listener(status)

    @contextmanager
    def _tracked(self, action: str) -> Generator[None, None, None]:
        """Mark one store operation in flight and record its outcome."""
        if self._closed:
            raise RuntimeError("Sync engine is closed")
        self._in_flight += 1
        self._set_status(SyncStatus.SYNCING)
        try:
            yield
        except asyncio.CancelledError:
            # Outcome unknown (caller gave up); the next load reconciles
            if not self._closed:
                self._set_status(SyncStatus.ERROR, f"{action} cancelled")
            raise
        except Exception as e:
            if not self._closed:
                self._set_status(SyncStatus.ERROR, f"{action} failed: {e}")
            raise
        else:
            if not self._closed:
                self._set_status(
                    SyncStatus.SYNCED if self._in_flight == 1 else SyncStatus.SYNCING
                )
        finally:
            self._in_flight -= 1

    async def start(self) -> bool:
        """Subscribe to realtime changes and perform the initial load."""
        if self._closed:
            raise RuntimeError("Sync engine is closed")
        if self._subscription is None:
            self._loop = asyncio.get_running_loop()
            self._subscription = self.store.subscribe(self._on_change)
        return await self.load()

    @staticmethod
    def _group(records: list[EventRecord]) -> dict[str, list[Event]]:
        grouped: dict[str, list[Event]] = {}
        for record in records:
            grouped.setdefault(record.date, []).append(record.to_event())
        return grouped

    async def load(self) -> bool:
        """Fetch every event and replace the model with the result.

        Returns:
            False if the store call failed or the response was unusable;
            the previous model is then left exactly as it was.
        """
        if self._closed:
            return False
        self._load_seq += 1
        seq = self._load_seq

        try:
            with self._tracked("Load"):
                records = await self.store.list_events()
                if self._closed:
                    logger.debug("Engine closed during load, dropping result")
                    return False
                grouped = self._group(records)
                if seq < self._applied_seq:
                    logger.debug(f"Dropping stale load #{seq}")
                    return True
                self.model.replace_all(grouped)
                self._applied_seq = seq
        except (StoreError, ValidationError, ValueError) as e:
            logger.warning(f"Load failed: {e}")
            return False

        logger.debug(f"Loaded {self.model.total()} events on {len(self.model)} dates")
        return True

    async def create(self, date_key: str, event: Event) -> Event:
        """Store a new event and append it to its date once confirmed.

        Returns:
            The stored event, carrying the store-assigned id.

        Raises:
            AuthRequiredError: If nobody is signed in (nothing is sent).
            ValidationError: If ``date_key`` is malformed.
            StoreError: If the store rejects the insert; status is ERROR and
                the model is unchanged.
        """
        user_id = self.require_user()
        parse_date_key(date_key)

        with self._tracked("Create"):
            stored = await self.store.create_event(date_key, event, user_id)
            if self._closed:
                logger.debug(f"Engine closed during create of {stored.id}")
                return stored
            if self.model.contains(stored.id):
                # A realtime reload already brought it in
                logger.debug(f"Event {stored.id} already in model")
            else:
                self.model.append_to(date_key, stored)

        logger.info(f"Created event {stored.id} on {date_key}")
        return stored

    async def delete(self, event_id: str) -> bool:
        """Delete an event; it leaves the model only after confirmation.

        Returns:
            True on success. On failure the event stays where it was and
            status is ERROR.
        """
        self.require_user()

        try:
            with self._tracked("Delete"):
                await self.store.delete_event(event_id)
                if self._closed:
                    return True
                location = self.model.find(event_id)
                if location is not None:
                    self.model.remove_from(location[0], event_id)
        except StoreError as e:
            logger.warning(f"Delete of {event_id} failed: {e}")
            return False

        logger.info(f"Deleted event {event_id}")
        return True

    async def persist_move(
        self, event_id: str, source_date: str, dest_date: str, dest_index: int
    ) -> bool:
        """Mirror an already-applied local move to the store.

        Date changes are always sent. Intra-day reorders are only sent when
        the store keeps a display position; otherwise they stay local until
        the next load. A failure sets status ERROR but the local move stays.
        """
        ordered = self.store.supports_ordering
        if source_date == dest_date and not ordered:
            logger.debug(f"Reorder of {event_id} kept local (store has no order)")
            return True

        try:
            with self._tracked("Move"):
                await self.store.update_event(
                    event_id, dest_date, dest_index if ordered else None
                )
        except StoreError as e:
            logger.warning(f"Move of {event_id} not persisted: {e}")
            return False
        return True

    def _on_change(self, payload: Any) -> None:
        """Realtime callback; may run on any thread."""
        loop = self._loop
        if self._closed or loop is None or loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            self._schedule_reload()
        else:
            loop.call_soon_threadsafe(self._schedule_reload)

    def _schedule_reload(self) -> None:
        if self._closed or self._loop is None:
            return
        task = self._loop.create_task(self._reload())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _reload(self) -> None:
        try:
            await self.load()
        except Exception:
            # Background reloads only report through status
            logger.exception("Background reload failed")

    async def wait_for_pending(self) -> None:
        """Wait until every scheduled reload has finished."""
        await asyncio.sleep(0)
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
            await asyncio.sleep(0)

    async def close(self) -> None:
        """Unsubscribe (exactly once) and stop applying in-flight results."""
        if self._closed:
            return
        self._closed = True
        if self._subscription is not None:
            self.store.unsubscribe(self._subscription)
            self._subscription = None

        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.debug("Sync engine closed")
