"""Rich console shared by the calendar commands and the month renderer."""

from rich.console import Console

# Auto-highlighting would recolor dates, times and ids inside agenda lines
console = Console(highlight=False)
