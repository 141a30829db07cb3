"""File-based timesheet storage adapter."""

import json
import logging
from datetime import date
from pathlib import Path

from sitelog.core.timesheet import Timesheet

logger = logging.getLogger(__name__)


class FileTimesheetStore:
    """
    File-based timesheet storage.

    Implements TimesheetStore protocol. Each period gets a JSON file named
    after its ending date.
    """

    def __init__(self, timesheet_dir: Path | str):
        self.timesheet_dir = Path(timesheet_dir).expanduser()
        self.timesheet_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_date(self, period_ending: date) -> Path:
        """Get the file path for a given period ending."""
        return self.timesheet_dir / f"{period_ending.isoformat()}.json"

    def load(self, period_ending: date) -> Timesheet | None:
        """Load the timesheet for a period. Returns None if not found or unreadable."""
        path = self._path_for_date(period_ending)
        if not path.exists():
            return None
        try:
            return Timesheet.from_dict(json.loads(path.read_text()))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable timesheet {path}: {e}")
            return None

    def save(self, timesheet: Timesheet) -> None:
        """Write/overwrite the timesheet for its period."""
        path = self._path_for_date(timesheet.period_ending)
        path.write_text(json.dumps(timesheet.to_dict(), indent=2))

    def list_periods(self) -> list[date]:
        """Period endings with a saved timesheet, oldest first."""
        periods = []
        for path in self.timesheet_dir.glob("*.json"):
            try:
                periods.append(date.fromisoformat(path.stem))
            except ValueError:
                continue
        return sorted(periods)
