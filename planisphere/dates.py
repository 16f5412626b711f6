"""Date-key helpers and month grid computation."""

import calendar
from datetime import date, datetime, timedelta

from planisphere.constants import DATE_KEY_FORMAT
from planisphere.exceptions import ValidationError


def format_date(value: date) -> str:
    """Return the date-key (YYYY-MM-DD) for a date."""
    return value.strftime(DATE_KEY_FORMAT)


def parse_date_key(date_key: str) -> date:
    """Parse a YYYY-MM-DD date-key.

    Raises:
        ValidationError: If the string is not a valid ISO date.
    """
    try:
        return datetime.strptime(date_key, DATE_KEY_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date-key: {date_key!r}. Use YYYY-MM-DD.")


def is_date_key(value: object) -> bool:
    """True if value is a well-formed date-key string."""
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        parse_date_key(value)
    except ValidationError:
        return False
    return True


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM month string into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month: {value!r}. Use YYYY-MM.")
    return parsed.year, parsed.month


def month_label(year: int, month: int) -> str:
    """Human label for a month, e.g. 'June 2024'."""
    return f"{calendar.month_name[month]} {year}"


def get_days_in_month(year: int, month: int) -> list[date]:
    """All days of the given month, in order."""
    day = date(year, month, 1)
    days = []
    while day.month == month:
        days.append(day)
        day += timedelta(days=1)
    return days


def get_month_grid(year: int, month: int) -> list[date | None]:
    """Days of a month laid out in Sunday-first weeks.

    Slots before the first day and after the last day are None, so the
    result length is always a multiple of 7.
    """
    days = get_days_in_month(year, month)
    # date.weekday() is Monday=0; shift to Sunday=0
    leading = (days[0].weekday() + 1) % 7

    grid: list[date | None] = [None] * leading
    grid.extend(days)
    while len(grid) % 7 != 0:
        grid.append(None)
    return grid
