"""Display a month of calendar events."""

import logging

import typer
from typing_extensions import Annotated

from cli.display import MonthRenderer
from cli.utils import parse_month_option, run_with_session

logger = logging.getLogger(__name__)


def show(
    month: Annotated[
        str | None,
        typer.Option("--month", "-m", help="Month to show (YYYY-MM, default: current)"),
    ] = None,
) -> None:
    """Show the month grid and that month's events.

    Example:
        planisphere show --month 2024-06
    """
    year, month_num = parse_month_option(month)

    async def action(session):
        MonthRenderer().render(session.model, year, month_num, session.status)

    run_with_session(action)
