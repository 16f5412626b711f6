"""Month grid and agenda renderer."""

from datetime import date

from rich.console import Console
from rich.table import Table

from cli.display.console import console as shared_console
from cli.display.formatters import format_category, format_status, format_time_range
from planisphere.dates import format_date, get_month_grid, month_label
from planisphere.models.calendar import CalendarModel
from planisphere.sync.status import SyncStatus

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class MonthRenderer:
    """Render a month of the calendar model using Rich.

    The grid shows each day with its event count; the agenda below lists
    the month's events per day in stored (drag-and-drop) order, with the
    index used by the ``move`` command.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or shared_console

    def render(
        self, model: CalendarModel, year: int, month: int, status: SyncStatus
    ) -> None:
        self.console.print(
            f"[bold]{month_label(year, month)}[/bold]  sync: {format_status(status)}"
        )
        self.console.print()
        self.render_grid(model, year, month)
        self.console.print()
        self.render_agenda(model.month(year, month))

    def render_grid(self, model: CalendarModel, year: int, month: int) -> None:
        today = date.today()
        table = Table(show_header=True, header_style="bold", show_lines=True)
        for name in WEEKDAYS:
            table.add_column(name, justify="center", min_width=5)

        cells = []
        for day in get_month_grid(year, month):
            if day is None:
                cells.append("")
                continue
            label = f"[reverse]{day.day}[/reverse]" if day == today else str(day.day)
            count = len(model.get(format_date(day)))
            cells.append(f"{label}\n[cyan]{count}●[/cyan]" if count else label)

        for start in range(0, len(cells), 7):
            table.add_row(*cells[start : start + 7])

        self.console.print(table)

    def render_agenda(self, model: CalendarModel) -> None:
        days = [(k, events) for k, events in sorted(model.items()) if events]
        if not days:
            self.console.print("[dim]No events this month[/dim]")
            return

        for date_key, events in days:
            self.console.print(f"[cyan]{date_key}[/cyan]")
            for index, event in enumerate(events):
                line = (
                    f"  {index}. [dim]{format_time_range(event)}[/dim] "
                    f"{event.name} ({format_category(event)}) [dim]{event.id}[/dim]"
                )
                self.console.print(line)
                if event.description:
                    self.console.print(f"     [dim italic]{event.description}[/dim italic]")
