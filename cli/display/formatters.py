"""Formatting helpers for terminal display."""

from planisphere.models.event import Event, EventCategory
from planisphere.sync.status import SyncStatus

CATEGORY_STYLES = {
    EventCategory.WORK: "blue",
    EventCategory.PERSONAL: "green",
    EventCategory.OTHER: "magenta",
}

STATUS_STYLES = {
    SyncStatus.SYNCED: "green",
    SyncStatus.SYNCING: "yellow",
    SyncStatus.ERROR: "bold red",
}


def format_status(status: SyncStatus) -> str:
    """Status as Rich markup, e.g. '[green]synced[/green]'."""
    style = STATUS_STYLES[status]
    return f"[{style}]{status.value}[/{style}]"


def format_time_range(event: Event) -> str:
    """Format event times (e.g., '09:00-09:15')."""
    return f"{event.start_time}-{event.end_time}"


def format_category(event: Event) -> str:
    style = CATEGORY_STYLES[event.category]
    return f"[{style}]{event.category.value}[/{style}]"
