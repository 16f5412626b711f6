import pytest

from planisphere import create_app, shutdown_app
from planisphere.auth import StaticAuthProvider
from planisphere.config import PlanisphereConfig
from planisphere.session import CalendarSession

FORM = {
    "date": "2024-06-01",
    "name": "Standup",
    "startTime": "09:00",
    "endTime": "09:15",
    "category": "work",
}


def make_config(tmp_path, user_id="user-1"):
    return PlanisphereConfig(
        data_dir=tmp_path / "data",
        store_backend="memory",
        user_id=user_id,
        export_dir=tmp_path / "exports",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def flaky_app(tmp_path, make_store):
    """App over a store whose calls can be made to fail."""
    store = make_store()
    session = CalendarSession(store, StaticAuthProvider("user-1"))
    app = create_app(make_config(tmp_path), session=session)
    yield app, store
    shutdown_app(app)


def test_app_factory_exists():
    """Test that the app factory function exists."""
    assert callable(create_app)


def test_list_events_empty(app):
    """GET /events on a fresh store returns an empty synced model."""
    response = app.test_client().get("/events")
    assert response.status_code == 200
    assert response.get_json() == {"status": "synced", "error": None, "events": {}}


def test_create_event(app):
    """POST /events stores the event and shows it on its date."""
    client = app.test_client()
    response = client.post("/events", json=FORM)
    assert response.status_code == 201

    body = response.get_json()
    assert body["status"] == "synced"
    assert body["event"]["name"] == "Standup"
    assert body["event"]["startTime"] == "09:00"

    events = client.get("/events").get_json()["events"]
    assert [e["id"] for e in events["2024-06-01"]] == [body["event"]["id"]]


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {"name": "No date", "startTime": "09:00", "endTime": "10:00"},
        dict(FORM, name=""),
        dict(FORM, startTime="9am"),
        dict(FORM, date="01/06/2024"),
    ],
)
def test_create_event_invalid(app, payload):
    """Malformed create requests return 400 without touching the model."""
    client = app.test_client()
    response = client.post("/events", json=payload)
    assert response.status_code == 400
    assert client.get("/events").get_json()["events"] == {}


def test_create_event_requires_user(tmp_path):
    """Without a signed-in user, writes return 401."""
    app = create_app(make_config(tmp_path, user_id=None))
    try:
        response = app.test_client().post("/events", json=FORM)
        assert response.status_code == 401
        assert "Sign in" in response.get_json()["error"]
    finally:
        shutdown_app(app)


def test_create_event_store_failure(flaky_app):
    """Store failures surface as 502 with status error."""
    app, store = flaky_app
    store.fail_on.add("create")

    response = app.test_client().post("/events", json=FORM)
    assert response.status_code == 502
    assert response.get_json()["status"] == "error"


def test_delete_event(app):
    """DELETE removes the event after the store confirms."""
    client = app.test_client()
    event_id = client.post("/events", json=FORM).get_json()["event"]["id"]

    response = client.delete(f"/events/{event_id}")
    assert response.status_code == 204
    events = client.get("/events").get_json()["events"]
    # The reload after the delete only lists dates that still hold events
    assert events.get("2024-06-01", []) == []


def test_delete_unknown_event(app):
    """Deleting an id the store does not know reports an error."""
    response = app.test_client().delete("/events/missing")
    assert response.status_code == 502
    assert app.test_client().get("/status").get_json()["status"] == "error"


def test_move_event(app):
    """POST /events/move relocates the event and returns the new model."""
    client = app.test_client()
    event_id = client.post("/events", json=FORM).get_json()["event"]["id"]

    response = client.post(
        "/events/move",
        json={"sourceDate": "2024-06-01", "sourceIndex": 0, "destDate": "2024-06-02", "destIndex": 0},
    )
    assert response.status_code == 200

    body = response.get_json()
    assert body["moved"] is True
    assert body["events"].get("2024-06-01", []) == []
    assert [e["id"] for e in body["events"]["2024-06-02"]] == [event_id]


def test_move_event_failure_keeps_local_move(flaky_app):
    """A failed store update keeps the move visible and reports error."""
    app, store = flaky_app
    client = app.test_client()
    client.post("/events", json=FORM)
    store.fail_on.add("update")

    response = client.post(
        "/events/move",
        json={"sourceDate": "2024-06-01", "sourceIndex": 0, "destDate": "2024-06-02", "destIndex": 0},
    )
    body = response.get_json()
    assert response.status_code == 200
    assert body["moved"] is False
    assert body["status"] == "error"
    assert len(body["events"]["2024-06-02"]) == 1


def test_move_event_invalid(app):
    """Malformed move intents return 400."""
    response = app.test_client().post("/events/move", json={"sourceDate": "June"})
    assert response.status_code == 400


def test_status(app):
    """GET /status reports the sync status."""
    response = app.test_client().get("/status")
    assert response.get_json() == {"status": "synced", "error": None}


def test_export_csv(app):
    """CSV export is an attachment named after the month."""
    client = app.test_client()
    client.post("/events", json=FORM)

    response = client.get("/export/csv?month=2024-06")
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert 'filename="calendar-events-June 2024.csv"' in response.headers["Content-Disposition"]
    lines = response.data.decode("utf-8").split("\n")
    assert lines[1] == "2024-06-01,Standup,09:00,09:15,work,"


def test_export_json(app):
    """JSON export contains the whole model."""
    client = app.test_client()
    client.post("/events", json=FORM)

    response = client.get("/export/json?month=2024-07")
    assert response.status_code == 200
    assert "calendar-events-July 2024.json" in response.headers["Content-Disposition"]
    assert list(response.get_json()) == ["2024-06-01"]


def test_export_errors(app):
    """Unknown formats are 404; bad month labels are 400."""
    client = app.test_client()
    assert client.get("/export/ics").status_code == 404
    assert client.get("/export/csv?month=June").status_code == 400


def test_slow_store_times_out_with_json_error(tmp_path, make_store):
    """A store slower than the request timeout gives 504 and status error."""
    store = make_store()
    session = CalendarSession(store, StaticAuthProvider("user-1"))
    config = make_config(tmp_path).model_copy(update={"request_timeout": 0.1})
    app = create_app(config, session=session)
    try:
        store.latency = 1.0
        client = app.test_client()

        response = client.post("/events", json=FORM)
        assert response.status_code == 504
        assert "Timed out" in response.get_json()["error"]

        events = client.get("/events").get_json()
        assert events["status"] == "error"
        assert events["events"] == {}
    finally:
        shutdown_app(app)
