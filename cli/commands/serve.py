"""Run the HTTP API."""

import logging

import typer
from typing_extensions import Annotated

from cli.context import get_context
from planisphere import create_app, shutdown_app

logger = logging.getLogger(__name__)


def serve(
    host: Annotated[
        str,
        typer.Option("--host", help="Interface to bind"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to listen on"),
    ] = 5000,
) -> None:
    """Serve the calendar API (events, moves, exports)."""
    ctx = get_context()
    config = ctx.config
    if ctx.user_id:
        config = config.model_copy(update={"user_id": ctx.user_id})

    app = create_app(config)
    logger.info(f"Serving on http://{host}:{port}")
    try:
        app.run(host=host, port=port)
    finally:
        shutdown_app(app)
