"""Timesheet draft storage interface."""

from datetime import date
from typing import Protocol

from sitelog.core.timesheet import Timesheet


class TimesheetStore(Protocol):
    """Interface for saving timesheets in progress."""

    def load(self, period_ending: date) -> Timesheet | None:
        """Load the timesheet for a period. Returns None if not found."""
        ...

    def save(self, timesheet: Timesheet) -> None:
        """Write/overwrite the timesheet for its period."""
        ...
