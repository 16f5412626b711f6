from datetime import date

from flask import Flask, Response, jsonify, request

from .auth import StaticAuthProvider
from .config import PlanisphereConfig
from .dates import month_label, parse_month
from .exceptions import (
    AuthRequiredError,
    StoreError,
    UnsupportedFormatError,
    ValidationError,
)
from .output import export_bytes
from .reorder import MoveIntent
from .session import CalendarSession
from .store import create_store
from .worker import SessionWorker


def _serialize_model(session: CalendarSession) -> dict:
    return {
        date_key: [event.to_export_dict() for event in events]
        for date_key, events in session.model.items()
    }


def create_app(
    config: PlanisphereConfig | None = None, session: CalendarSession | None = None
):
    config = config or PlanisphereConfig.from_env()
    if session is None:
        session = CalendarSession(
            create_store(config), StaticAuthProvider(config.user_id)
        )

    # The session lives on its own loop so realtime reloads run between requests
    worker = SessionWorker(timeout=config.request_timeout)
    worker.run(session.start())

    app = Flask(__name__)
    app.extensions["planisphere"] = {"session": session, "worker": worker}

    def call(coro):
        """Run a session coroutine, then let triggered reloads settle."""
        try:
            return worker.run(coro)
        finally:
            worker.run(session.engine.wait_for_pending())

    async def snapshot():
        return {
            "status": session.status.value,
            "error": session.engine.last_error,
            "events": _serialize_model(session),
        }

    def error(message, code):
        return jsonify({"status": session.status.value, "error": message}), code

    @app.errorhandler(TimeoutError)
    def timed_out(e):
        return error(str(e), 504)

    @app.route("/events", methods=["GET"])
    def list_events():
        return jsonify(worker.run(snapshot()))

    @app.route("/events", methods=["POST"])
    def create_event():
        form = request.get_json(silent=True)
        if not isinstance(form, dict) or not form.get("date"):
            return error("Request body must be a JSON object with a date", 400)

        form = dict(form)
        date_key = form.pop("date")
        try:
            event = call(session.create_event(date_key, form))
        except ValidationError as e:
            return error(str(e), 400)
        except AuthRequiredError as e:
            return error(str(e), 401)
        except StoreError as e:
            return error(str(e), 502)

        return jsonify({"status": session.status.value, "event": event.to_export_dict()}), 201

    @app.route("/events/<event_id>", methods=["DELETE"])
    def delete_event(event_id):
        try:
            deleted = call(session.delete_event(event_id))
        except AuthRequiredError as e:
            return error(str(e), 401)

        if not deleted:
            return error(session.engine.last_error or "Delete failed", 502)
        return "", 204

    @app.route("/events/move", methods=["POST"])
    def move_event():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return error("Request body must be a JSON object", 400)
        try:
            intent = MoveIntent.parse(data)
            moved = call(session.move_event(intent))
        except ValidationError as e:
            return error(str(e), 400)
        except AuthRequiredError as e:
            return error(str(e), 401)

        # A failed store update keeps the local move; status reports it
        body = worker.run(snapshot())
        body["moved"] = moved
        return jsonify(body)

    @app.route("/status", methods=["GET"])
    def status():
        return jsonify(
            {"status": session.status.value, "error": session.engine.last_error}
        )

    @app.route("/export/<format>", methods=["GET"])
    def export(format):
        """Download all events; ``month`` (YYYY-MM) only names the file."""
        month = request.args.get("month")
        try:
            if month:
                label = month_label(*parse_month(month))
            else:
                today = date.today()
                label = month_label(today.year, today.month)
        except ValidationError as e:
            return error(str(e), 400)

        async def render():
            return export_bytes(session.model, format, label)

        try:
            filename, content, mimetype = worker.run(render())
        except UnsupportedFormatError as e:
            return error(str(e), 404)

        return Response(
            content,
            content_type=f"{mimetype}; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


def shutdown_app(app: Flask) -> None:
    """Close the app's calendar session and stop its worker loop."""
    state = app.extensions.get("planisphere")
    if not state:
        return
    worker = state["worker"]
    if worker.running:
        worker.run(state["session"].close())
        worker.shutdown()
