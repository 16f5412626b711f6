"""CLI helpers for running session actions and parsing arguments."""

import asyncio
import logging
from datetime import date
from typing import Awaitable, Callable, TypeVar

import typer

from cli.context import get_context
from planisphere.dates import parse_date_key, parse_month
from planisphere.exceptions import ValidationError
from planisphere.session import CalendarSession
from planisphere.sync.status import SyncStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_session(action: Callable[[CalendarSession], Awaitable[T]]) -> T:
    """Open a session, load events, run ``action`` and tear down.

    Realtime reloads triggered by the action are allowed to finish before
    the session closes.
    """
    ctx = get_context()

    async def _run() -> T:
        async with ctx.open_session() as session:
            if session.status is SyncStatus.ERROR:
                logger.warning(f"Could not load events: {session.engine.last_error}")
            result = await action(session)
            await session.engine.wait_for_pending()
            return result

    return asyncio.run(_run())


def parse_date_argument(value: str) -> str:
    """Validate a YYYY-MM-DD argument and return it as a date-key.

    Raises:
        typer.BadParameter: If the date format is invalid.
    """
    try:
        parse_date_key(value)
    except ValidationError as e:
        raise typer.BadParameter(str(e))
    return value


def parse_month_option(value: str | None) -> tuple[int, int]:
    """Parse --month (YYYY-MM); defaults to the current month."""
    if value is None:
        today = date.today()
        return today.year, today.month
    try:
        return parse_month(value)
    except ValidationError as e:
        raise typer.BadParameter(str(e))
