"""Site record repository interface."""

from typing import Protocol

from sitelog.core.models import CalendarNote, DailyLog, IncompleteItems, Material, Project, WorkActivity


class SiteRepository(Protocol):
    """Interface for reading and writing site records in any backend."""

    def fetch_projects(self) -> list[Project]:
        """Fetch all projects, newest first."""
        ...

    def fetch_daily_logs(self, log_date=None, project_id: str | None = None) -> list[DailyLog]:
        """Fetch daily logs, newest first, optionally for one date or project."""
        ...

    def fetch_activities(self) -> list[WorkActivity]:
        """Fetch all work activities."""
        ...

    def fetch_materials(self) -> list[Material]:
        """Fetch all materials."""
        ...

    def fetch_calendar_notes(self, year: int | None = None, month: int | None = None) -> list[CalendarNote]:
        """Fetch calendar notes, optionally limited to one month (0-11)."""
        ...

    def fetch_incomplete_items(self) -> IncompleteItems:
        """Fetch incomplete activities, materials, equipment and crew rows."""
        ...

    def create(self, table: str, values: dict) -> dict:
        """Insert a row and return it."""
        ...

    def update(self, table: str, row_id: str, values: dict) -> dict:
        """Update a row by id and return it."""
        ...

    def delete(self, table: str, row_id: str) -> None:
        """Delete a row by id."""
        ...
