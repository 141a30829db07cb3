"""Pure worked-hours arithmetic - no I/O dependencies."""

import math
import re

MINUTES_PER_DAY = 24 * 60
DEFAULT_ROUNDING_MINUTES = 15

_TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


def parse_time(value: str | None) -> int | None:
    """Minutes since midnight for a strict HH:MM value, else None."""
    if not isinstance(value, str):
        return None
    match = _TIME_PATTERN.fullmatch(value)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def compute_hours(
    start: str | None,
    finish: str | None,
    lunch_minutes: int = 0,
    rounding_minutes: int = DEFAULT_ROUNDING_MINUTES,
) -> float:
    """
    Worked hours between two HH:MM times.

    Pure function - no I/O, never raises.

    Malformed or missing times give 0 so half-filled timesheet rows simply
    don't count. A finish earlier than the start is an overnight shift.
    The result is rounded half-up to the nearest rounding_minutes.
    """
    start_mins = parse_time(start)
    finish_mins = parse_time(finish)
    if start_mins is None or finish_mins is None:
        return 0.0

    if finish_mins < start_mins:
        finish_mins += MINUTES_PER_DAY

    lunch = lunch_minutes if lunch_minutes and lunch_minutes > 0 else 0
    total = max(0, finish_mins - start_mins - lunch)

    increment = rounding_minutes if rounding_minutes and rounding_minutes > 0 else 1
    rounded = math.floor(total / increment + 0.5) * increment
    return rounded / 60


def format_time_12(hhmm: str | None) -> str:
    """Format HH:MM as a 12-hour time, e.g. 13:05 -> 1:05pm."""
    mins = parse_time(hhmm)
    if mins is None:
        return ""
    hh, mm = divmod(mins, 60)
    suffix = "pm" if hh >= 12 else "am"
    h12 = hh % 12 or 12
    return f"{h12}:{mm:02d}{suffix}"


def format_hours(hours: float) -> str:
    """Two-decimal hours for display."""
    return f"{hours:.2f}"
