"""Monday-start week windows.

Stored dates are compared as ``YYYY-MM-DD`` strings or ``date`` objects, so a
window carries both forms alongside the full boundary instants.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from shopdesk.utils.date_parser import parse_date

WEEK_RANGE_SEPARATOR = " to "

# Sunday 23:59:59.999
_END_OF_DAY = time(23, 59, 59, 999000)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(value: date | datetime) -> date:
    """Return the Monday on or before the given date."""
    day = _as_date(value)
    return day - timedelta(days=day.weekday())


def week_end(value: date | datetime) -> date:
    """Return the Sunday closing the week of the given date."""
    return week_start(value) + timedelta(days=6)


@dataclass(frozen=True)
class WeekWindow:
    """Inclusive Monday..Sunday window."""

    start: date
    end: date

    @classmethod
    def containing(cls, value: date | datetime) -> "WeekWindow":
        start = week_start(value)
        return cls(start=start, end=start + timedelta(days=6))

    @property
    def start_str(self) -> str:
        return self.start.isoformat()

    @property
    def end_str(self) -> str:
        return self.end.isoformat()

    @property
    def start_instant(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def end_instant(self) -> datetime:
        return datetime.combine(self.end, _END_OF_DAY)

    @property
    def range_string(self) -> str:
        """Selection value, e.g. ``2024-01-15 to 2024-01-21``."""
        return f"{self.start_str}{WEEK_RANGE_SEPARATOR}{self.end_str}"

    @property
    def label(self) -> str:
        return f"Week of {self.start_str} to {self.end_str}"

    def contains(self, value: date | datetime | None) -> bool:
        """Inclusive range check; ``None`` is never inside a window."""
        if value is None:
            return False
        if isinstance(value, datetime):
            return self.start_instant <= value <= self.end_instant
        return self.start <= value <= self.end

    def previous(self, weeks: int = 1) -> "WeekWindow":
        return WeekWindow.containing(self.start - timedelta(days=7 * weeks))


def week_window(reference: date | datetime | None = None, weeks_back: int = 0) -> WeekWindow:
    """Return the window of the week ``weeks_back`` weeks before the reference week.

    Args:
        reference: Any date inside the reference week (defaults to today)
        weeks_back: Number of whole weeks to step back (0 = reference week)

    Returns:
        WeekWindow for the requested week
    """
    if reference is None:
        reference = date.today()
    return WeekWindow.containing(week_start(reference) - timedelta(days=7 * weeks_back))


def recent_weeks(reference: date | datetime | None = None, count: int = 5) -> list[WeekWindow]:
    """Return the reference week followed by the ``count - 1`` weeks before it."""
    return [week_window(reference, weeks_back=offset) for offset in range(max(count, 0))]


def parse_week_selection(value: str) -> WeekWindow:
    """Parse a week selection into the window containing it.

    Accepts ``"YYYY-MM-DD to YYYY-MM-DD"`` (only the first date is used) or
    any single date string understood by ``parse_date``.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if value is None or not value.strip():
        raise ValueError("Empty week selection")
    first = value.split(WEEK_RANGE_SEPARATOR)[0]
    return WeekWindow.containing(parse_date(first))
