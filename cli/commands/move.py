"""Move an event to another day and/or position."""

import logging

import typer
from typing_extensions import Annotated

from cli.display import console
from cli.utils import parse_date_argument, run_with_session
from planisphere.exceptions import AuthRequiredError
from planisphere.reorder import MoveIntent

logger = logging.getLogger(__name__)


def move(
    source_date: Annotated[
        str,
        typer.Argument(help="Date the event is on (YYYY-MM-DD)", callback=parse_date_argument),
    ],
    source_index: Annotated[
        int,
        typer.Argument(help="Position of the event on that date (as listed by show)"),
    ],
    dest_date: Annotated[
        str,
        typer.Argument(help="Target date (YYYY-MM-DD)", callback=parse_date_argument),
    ],
    dest_index: Annotated[
        int,
        typer.Argument(help="Target position (clamped to the day's length)"),
    ] = 0,
) -> None:
    """Move an event, like dragging it in the calendar.

    Example:
        planisphere move 2024-06-01 0 2024-06-02 0
    """
    intent = MoveIntent(
        source_date=source_date,
        source_index=source_index,
        dest_date=dest_date,
        dest_index=dest_index,
    )

    async def action(session):
        if intent.is_noop:
            return "noop", None
        if not 0 <= source_index < len(session.model.get(source_date)):
            return "missing", None
        persisted = await session.move_event(intent)
        return ("moved" if persisted else "unsaved"), session.engine.last_error

    try:
        outcome, last_error = run_with_session(action)
    except AuthRequiredError as e:
        logger.error(f"{e} (use --user or PLANISPHERE_USER)")
        raise typer.Exit(1)

    if outcome == "noop":
        console.print("Nothing to move.")
    elif outcome == "missing":
        logger.error(f"No event at position {source_index} on {source_date}")
        raise typer.Exit(1)
    elif outcome == "unsaved":
        logger.warning(f"Moved locally but not saved: {last_error}")
        raise typer.Exit(1)
    else:
        console.print(
            f"[bold green]✓[/bold green] Moved {source_date}[{source_index}] → {dest_date}"
        )
