import pytest

from planisphere import create_app, shutdown_app
from planisphere.auth import StaticAuthProvider
from planisphere.config import PlanisphereConfig
from planisphere.exceptions import StoreError
from planisphere.models.event import Event
from planisphere.models.record import EventRecord
from planisphere.session import CalendarSession
from planisphere.store.memory import InMemoryEventStore


class FlakyStore(InMemoryEventStore):
    """In-memory store whose operations can be made to fail on demand."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self.unsubscribe_calls = 0

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise StoreError(f"{operation}: backend unavailable")

    async def list_events(self):
        self._check("list")
        return await super().list_events()

    async def create_event(self, date_key, event, user_id=None):
        self._check("create")
        return await super().create_event(date_key, event, user_id)

    async def delete_event(self, event_id):
        self._check("delete")
        return await super().delete_event(event_id)

    async def update_event(self, event_id, date_key, position=None):
        self._check("update")
        return await super().update_event(event_id, date_key, position)

    def unsubscribe(self, subscription):
        self.unsubscribe_calls += 1
        super().unsubscribe(subscription)


@pytest.fixture
def make_event():
    """Factory for events with sensible defaults."""

    def _make(event_id="1", name="Standup", start="09:00", end="09:15", **kwargs):
        kwargs.setdefault("category", "work")
        return Event(id=event_id, name=name, start_time=start, end_time=end, **kwargs)

    return _make


@pytest.fixture
def make_record(make_event):
    """Factory for store records on a given date."""

    def _make(date_key, event_id, position=0, **kwargs):
        return EventRecord.from_event(
            date_key, make_event(event_id, **kwargs), user_id="user-1", position=position
        )

    return _make


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def auth():
    return StaticAuthProvider("user-1")


@pytest.fixture
def session(store, auth):
    """Session that has not been started yet."""
    return CalendarSession(store, auth)


@pytest.fixture
def app(tmp_path):
    """Create and configure a Flask app for testing."""
    config = PlanisphereConfig(
        data_dir=tmp_path / "data",
        store_backend="memory",
        user_id="user-1",
        export_dir=tmp_path / "exports",
        log_dir=tmp_path / "logs",
    )
    app = create_app(config)
    yield app
    shutdown_app(app)


@pytest.fixture
def make_store():
    """Factory for FlakyStore instances with custom records or ordering."""
    return FlakyStore
