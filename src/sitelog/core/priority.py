"""Pure priority classification - no I/O dependencies."""

from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

HIGH_WITHIN_DAYS = 3
MEDIUM_WITHIN_DAYS = 7


class DateParseError(ValueError):
    """Raised when a raw date string cannot be converted to a date."""

    pass


class Priority(Enum):
    """Urgency tier for an outstanding item."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Display order: high first."""
        return _RANK[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def parse_due_date(raw: str | None) -> date | None:
    """
    Convert a raw form or storage value into a date.

    Accepts YYYY-MM-DD or an ISO datetime (date part is kept).
    Empty values mean "no due date".
    """
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw.split("T")[0].split(" ")[0])
    except ValueError as e:
        raise DateParseError(f"Invalid date: {raw!r}") from e


def days_until(due_date: date, as_of: date | None = None) -> int:
    """Whole days from as_of to due_date (negative if overdue)."""
    if isinstance(due_date, datetime):
        due_date = due_date.date()
    if isinstance(as_of, datetime):
        as_of = as_of.date()
    as_of = as_of or date.today()
    return (due_date - as_of).days


def classify(due_date: date | None, as_of: date | None = None) -> Priority:
    """
    Bucket a due date into a priority tier.

    <= 3 days (including overdue) is high, <= 7 is medium, anything later
    or no due date at all is low.
    """
    if due_date is None:
        return Priority.LOW
    days = days_until(due_date, as_of)
    if days <= HIGH_WITHIN_DAYS:
        return Priority.HIGH
    if days <= MEDIUM_WITHIN_DAYS:
        return Priority.MEDIUM
    return Priority.LOW


def sort_by_priority(items: Iterable[T], key: Callable[[T], Priority]) -> list[T]:
    """Stable sort, high first. Items with equal priority keep their order."""
    return sorted(items, key=lambda item: key(item).rank)


def count_by_priority(priorities: Iterable[Priority]) -> dict[Priority, int]:
    """Count occurrences of each tier (all tiers present, zero if unused)."""
    counts = {p: 0 for p in Priority}
    for p in priorities:
        counts[p] += 1
    return counts
