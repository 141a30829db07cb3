"""Pure calendar domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

DAYS_PER_WEEK = 7
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


@dataclass
class PeriodDay:
    """A day within a timesheet period."""

    day_name: str
    date: date

    def format_short(self) -> str:
        return format_date_short(self.date)


def _check_month(year: int, month: int) -> None:
    if not isinstance(year, int) or not isinstance(month, int):
        raise ValueError(f"Year and month must be integers, got {year!r}, {month!r}")
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be 0-11, got {month}")
    if not 1 <= year <= 9999:
        raise ValueError(f"Year out of range: {year}")


def sunday_index(d: date) -> int:
    """Weekday with Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """
    First day of the month and first day of the following month.

    Month is 0-11. The range is half-open: [first, next_first).
    """
    _check_month(year, month)
    first = date(year, month + 1, 1)
    if month == 11:
        return first, date(year + 1, 1, 1)
    return first, date(year, month + 2, 1)


def month_days(year: int, month: int) -> list[date]:
    """Every date in the month (0-11), ascending."""
    first, next_first = month_bounds(year, month)
    return [first + timedelta(days=i) for i in range((next_first - first).days)]


def build_grid(year: int, month: int) -> list[list[date | None]]:
    """
    Month view as week rows of 7 slots, Sunday first.

    Pure function - no I/O.

    Slots before the 1st and after the last day are None, so every date
    sits in the column matching its weekday.
    """
    days = month_days(year, month)
    grid: list[list[date | None]] = []
    week: list[date | None] = [None] * sunday_index(days[0])

    for d in days:
        week.append(d)
        if len(week) == DAYS_PER_WEEK:
            grid.append(week)
            week = []

    if week:
        week.extend([None] * (DAYS_PER_WEEK - len(week)))
        grid.append(week)

    return grid


def period_days(period_ending: date, days: int = DAYS_PER_WEEK) -> list[PeriodDay]:
    """The `days` consecutive dates ending on period_ending, oldest first."""
    result = []
    for offset in range(days - 1, -1, -1):
        d = period_ending - timedelta(days=offset)
        result.append(PeriodDay(day_name=DAY_NAMES[sunday_index(d)], date=d))
    return result


def period_ending_for(as_of: date, week_ending_day: str) -> date:
    """The first date on or after as_of that falls on week_ending_day."""
    target = DAY_NAMES.index(week_ending_day.capitalize())
    return as_of + timedelta(days=(target - sunday_index(as_of)) % 7)


def group_by_date(items: Iterable[T], key: Callable[[T], date | None]) -> dict[date, list[T]]:
    """Group items by date, skipping undated ones."""
    grouped: dict[date, list[T]] = {}
    for item in items:
        d = key(item)
        if d is None:
            continue
        grouped.setdefault(d, []).append(item)
    return grouped


def format_date(d: date | None) -> str:
    """Long display format, e.g. 05 Mar 2024."""
    if d is None:
        return ""
    return d.strftime("%d %b %Y")


def format_date_short(d: date | None) -> str:
    """Short display format, e.g. 05/03."""
    if d is None:
        return ""
    return d.strftime("%d/%m")
