"""In-memory calendar model: date-key to ordered events."""

from typing import Iterable, Iterator, Mapping

from planisphere.dates import parse_date_key
from planisphere.models.event import Event


class CalendarModel:
    """Mapping from date-key to an ordered list of events.

    This is the single source of truth for rendering. Readers get copies;
    only the sync engine and the reorder controller mutate it. Every
    mutation is a single synchronous step, so a reader never sees an event
    in two lists or in none.

    Invariant: an event id appears at most once across all dates.
    """

    def __init__(self, days: Mapping[str, Iterable[Event]] | None = None):
        self._days: dict[str, list[Event]] = {}
        self.revision = 0
        if days:
            self.replace_all(days)

    def get(self, date_key: str) -> list[Event]:
        """Events for a date in stored order (empty list if none)."""
        return list(self._days.get(date_key, ()))

    def date_keys(self) -> list[str]:
        """Date-keys in insertion order, including empty days."""
        return list(self._days)

    def items(self) -> Iterator[tuple[str, list[Event]]]:
        for date_key, events in self._days.items():
            yield date_key, list(events)

    def total(self) -> int:
        """Total number of events across all dates."""
        return sum(len(events) for events in self._days.values())

    def find(self, event_id: str) -> tuple[str, int] | None:
        """Locate an event by id, returning (date_key, index)."""
        for date_key, events in self._days.items():
            for index, event in enumerate(events):
                if event.id == event_id:
                    return date_key, index
        return None

    def contains(self, event_id: str) -> bool:
        return self.find(event_id) is not None

    def to_dict(self) -> dict[str, list[Event]]:
        """Shallow copy of the whole mapping."""
        return {date_key: list(events) for date_key, events in self._days.items()}

    def month(self, year: int, month: int) -> "CalendarModel":
        """Read-only copy restricted to one month's date-keys."""
        prefix = f"{year:04d}-{month:02d}-"
        return CalendarModel(
            {k: v for k, v in self._days.items() if k.startswith(prefix)}
        )

    def replace_all(self, mapping: Mapping[str, Iterable[Event]]) -> None:
        """Atomically replace the whole model.

        The new mapping is fully built and checked before it is swapped in,
        so a rejected mapping leaves the model untouched.

        Raises:
            ValueError: If an event id appears more than once.
        """
        new_days: dict[str, list[Event]] = {}
        seen: set[str] = set()
        for date_key, events in mapping.items():
            parse_date_key(date_key)
            day = []
            for event in events:
                if event.id in seen:
                    raise ValueError(f"Duplicate event id in calendar: {event.id}")
                seen.add(event.id)
                day.append(event)
            new_days[date_key] = day

        self._days = new_days
        self.revision += 1

    def append_to(self, date_key: str, event: Event) -> None:
        """Append an event to a date, creating the list if absent.

        Raises:
            ValueError: If the event id is already in the model.
        """
        parse_date_key(date_key)
        if self.contains(event.id):
            raise ValueError(f"Event {event.id} already in calendar")
        self._days[date_key] = self.get(date_key) + [event]
        self.revision += 1

    def remove_from(self, date_key: str, event_id: str) -> Event | None:
        """Remove an event from a date. Returns the removed event, if any."""
        events = self._days.get(date_key)
        if not events:
            return None
        for index, event in enumerate(events):
            if event.id == event_id:
                self._days[date_key] = events[:index] + events[index + 1 :]
                self.revision += 1
                return event
        return None

    def move(
        self, source_date: str, source_index: int, dest_date: str, dest_index: int
    ) -> Event | None:
        """Move one event between (or within) dates.

        ``dest_index`` is clamped to ``[0, len(dest)]`` after the event has
        been taken out of the source. Returns the moved event, or None when
        the move is a no-op or ``source_index`` is out of range.
        """
        if source_date == dest_date and source_index == dest_index:
            return None

        source = self.get(source_date)
        if not 0 <= source_index < len(source):
            return None
        parse_date_key(dest_date)

        moved = source.pop(source_index)
        dest = source if dest_date == source_date else self.get(dest_date)
        dest_index = max(0, min(dest_index, len(dest)))
        dest.insert(dest_index, moved)

        # Both lists are swapped in together
        self._days.update({source_date: source, dest_date: dest})
        self.revision += 1
        return moved

    def clear(self) -> None:
        """Discard all events (sign-out / teardown)."""
        self._days = {}
        self.revision += 1

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CalendarModel):
            return self._days == other._days
        return NotImplemented

    def __repr__(self) -> str:
        return f"CalendarModel(dates={len(self._days)}, events={self.total()})"
