"""Export calendar events to JSON or CSV."""

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display import console
from cli.utils import parse_month_option, run_with_session
from planisphere.dates import month_label
from planisphere.exceptions import ExportError, UnsupportedFormatError

logger = logging.getLogger(__name__)


def export(
    format: Annotated[
        str,
        typer.Argument(help="Export format: 'json' or 'csv'"),
    ],
    month: Annotated[
        str | None,
        typer.Option("--month", "-m", help="Month used in the file name (YYYY-MM)"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory for the export file"),
    ] = None,
) -> None:
    """Export all events to a file named after the month.

    Example:
        planisphere export csv --month 2024-06
    """
    ctx = get_context()
    label = month_label(*parse_month_option(month))
    directory = output_dir or ctx.config.export_dir

    async def action(session):
        return session.export(format, label, directory)

    try:
        path = run_with_session(action)
    except UnsupportedFormatError as e:
        logger.error(str(e))
        raise typer.Exit(1)
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        raise typer.Exit(1)

    console.print("[bold green]✓[/bold green] Exported events")
    console.print(f"  {path.resolve()}")
