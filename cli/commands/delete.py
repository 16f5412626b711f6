"""Delete an event."""

import logging

import typer
from typing_extensions import Annotated

from cli.display import console
from cli.utils import run_with_session
from planisphere.exceptions import AuthRequiredError

logger = logging.getLogger(__name__)


def delete(
    event_id: Annotated[
        str,
        typer.Argument(help="Id of the event to delete"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """Delete an event by id."""
    if not force and not typer.confirm(f"Delete event {event_id}?"):
        console.print("Delete cancelled.")
        return

    async def action(session):
        if not session.model.contains(event_id):
            return None
        deleted = await session.delete_event(event_id)
        return deleted, session.engine.last_error

    try:
        result = run_with_session(action)
    except AuthRequiredError as e:
        logger.error(f"{e} (use --user or PLANISPHERE_USER)")
        raise typer.Exit(1)

    if result is None:
        logger.error(f"Event '{event_id}' not found")
        raise typer.Exit(1)

    deleted, last_error = result
    if not deleted:
        logger.error(last_error or f"Could not delete event '{event_id}'")
        raise typer.Exit(1)

    console.print(f"[bold green]✓[/bold green] Deleted event {event_id}")
