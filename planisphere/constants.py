"""Shared constants for planisphere."""

# Offline store file (events persisted locally)
EVENTS_FILENAME = "events.json"

# Export filename prefix, e.g. calendar-events-June 2024.csv
EXPORT_PREFIX = "calendar-events"

# CSV header row, in column order
CSV_HEADER = ["Date", "Event Name", "Start Time", "End Time", "Category", "Description"]

DATE_KEY_FORMAT = "%Y-%m-%d"
