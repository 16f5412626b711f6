"""Create an event."""

import logging

import typer
from typing_extensions import Annotated

from cli.display import console
from cli.utils import parse_date_argument, run_with_session
from planisphere.exceptions import AuthRequiredError, StoreError, ValidationError
from planisphere.models.event import EventCategory

logger = logging.getLogger(__name__)


def add(
    date_key: Annotated[
        str,
        typer.Argument(help="Event date (YYYY-MM-DD)", callback=parse_date_argument),
    ],
    name: Annotated[
        str,
        typer.Argument(help="Event name"),
    ],
    start: Annotated[
        str,
        typer.Option("--start", "-s", help="Start time (HH:MM)"),
    ],
    end: Annotated[
        str,
        typer.Option("--end", "-e", help="End time (HH:MM)"),
    ],
    category: Annotated[
        EventCategory,
        typer.Option("--category", "-c", help="Event category"),
    ] = EventCategory.OTHER,
    description: Annotated[
        str,
        typer.Option("--description", "-d", help="Event description"),
    ] = "",
) -> None:
    """Add an event to a day.

    Example:
        planisphere add 2024-06-01 Standup --start 09:00 --end 09:15 -c work
    """
    form = {
        "name": name,
        "startTime": start,
        "endTime": end,
        "category": category,
        "description": description,
    }

    try:
        event = run_with_session(lambda session: session.create_event(date_key, form))
    except ValidationError as e:
        logger.error(f"Invalid event: {e}")
        raise typer.Exit(1)
    except AuthRequiredError as e:
        logger.error(f"{e} (use --user or PLANISPHERE_USER)")
        raise typer.Exit(1)
    except StoreError as e:
        logger.error(f"Could not save event: {e}")
        raise typer.Exit(1)

    console.print(
        f"[bold green]✓[/bold green] Added '{event.name}' on {date_key} [dim]({event.id})[/dim]"
    )
