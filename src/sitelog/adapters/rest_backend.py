"""REST backend adapter - HTTP client for row-level CRUD."""

import logging
from datetime import date

import requests

from sitelog.config import Config, load_config
from sitelog.core.calendar import month_bounds
from sitelog.core.models import (
    CalendarNote,
    CrewAttendance,
    DailyLog,
    EquipmentLog,
    IncompleteItems,
    Material,
    Project,
    WorkActivity,
)

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"
REQUEST_TIMEOUT = 30
LOG_WITH_PROJECT = "*,projects(*)"
ITEM_WITH_LOG = "*,daily_logs(*,projects(*))"


class BackendError(Exception):
    """Raised when the backend rejects a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(Exception):
    """Raised when the backend connection is not configured."""

    pass


class RestBackend:
    """
    Generic row-level CRUD client.

    Speaks the PostgREST dialect: one endpoint per table, column filters as
    query parameters (col=eq.value), embedded relations through `select`.
    No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        if not self.config.backend_url or not self.config.backend_key:
            raise ConfigurationError("BACKEND_URL and BACKEND_KEY must be set in sitelog.conf")
        self._session = session or requests.Session()
        self._base = f"{self.config.backend_url}{REST_PATH}"

    def _headers(self) -> dict[str, str]:
        token = self.config.access_token or self.config.backend_key
        return {
            "apikey": self.config.backend_key,
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def _request(self, method: str, table: str, params: dict | None = None, json: dict | None = None):
        """Make an authenticated request against a table."""
        url = f"{self._base}/{table}"
        logger.debug(f"{method} {url} {params or ''}")
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise BackendError(f"{method} {table} failed: {e}") from e

        if not resp.ok:
            raise BackendError(f"{method} {table} failed ({resp.status_code}): {resp.text}", resp.status_code)
        if not resp.content:
            return None
        return resp.json()

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: str | None = None,
    ) -> list[dict]:
        """
        Fetch rows.

        filters maps column to a PostgREST operator expression, e.g.
        {"is_completed": "eq.false", "note_date": "gte.2024-02-01"}.
        order is "column" or "column.desc".
        """
        params = {"select": columns}
        for column, expr in (filters or {}).items():
            params[column] = expr
        if order:
            params["order"] = order
        return self._request("GET", table, params=params) or []

    def insert(self, table: str, values: dict) -> dict:
        rows = self._request("POST", table, json=values)
        return rows[0] if rows else {}

    def update(self, table: str, row_id: str, values: dict) -> dict:
        rows = self._request("PATCH", table, params={"id": f"eq.{row_id}"}, json=values)
        return rows[0] if rows else {}

    def delete(self, table: str, row_id: str) -> None:
        self._request("DELETE", table, params={"id": f"eq.{row_id}"})


class RestSiteRepository:
    """
    Site records over a RestBackend.

    Implements SiteRepository protocol. Rows are converted to core models
    here; malformed dates surface as DateParseError.
    """

    def __init__(self, backend: RestBackend):
        self.backend = backend

    def fetch_projects(self) -> list[Project]:
        rows = self.backend.select("projects", order="created_at.desc")
        return [Project.from_api(r) for r in rows]

    def fetch_daily_logs(self, log_date: date | None = None, project_id: str | None = None) -> list[DailyLog]:
        filters = {}
        if log_date:
            filters["log_date"] = f"eq.{log_date.isoformat()}"
        if project_id:
            filters["project_id"] = f"eq.{project_id}"
        rows = self.backend.select("daily_logs", LOG_WITH_PROJECT, filters, order="log_date.desc")
        return [DailyLog.from_api(r) for r in rows]

    def fetch_activities(self) -> list[WorkActivity]:
        return [WorkActivity.from_api(r) for r in self.backend.select("work_activities")]

    def fetch_materials(self) -> list[Material]:
        return [Material.from_api(r) for r in self.backend.select("materials")]

    def fetch_calendar_notes(self, year: int | None = None, month: int | None = None) -> list[CalendarNote]:
        filters = {}
        if year is not None and month is not None:
            start, end = month_bounds(year, month)
            # Two conditions on one column need PostgREST's `and` form
            filters["and"] = f"(note_date.gte.{start.isoformat()},note_date.lt.{end.isoformat()})"
        rows = self.backend.select("calendar_notes", filters=filters, order="note_date")
        return [CalendarNote.from_api(r) for r in rows]

    def fetch_incomplete_items(self) -> IncompleteItems:
        """Fetch incomplete child rows, each with its daily log and project."""
        incomplete = {"is_completed": "eq.false"}
        items = IncompleteItems()

        def fetch(table: str, order: str, model):
            rows = self.backend.select(table, ITEM_WITH_LOG, incomplete, order=order)
            for row in rows:
                log = row.get("daily_logs")
                if log and log.get("id") not in items.logs:
                    items.logs[log["id"]] = DailyLog.from_api(log)
            return [model.from_api(r) for r in rows]

        items.activities = fetch("work_activities", "due_date", WorkActivity)
        items.materials = fetch("materials", "required_date", Material)
        items.equipment = fetch("equipment_logs", "due_date", EquipmentLog)
        items.crew = fetch("crew_attendance", "due_date", CrewAttendance)
        return items

    def create(self, table: str, values: dict) -> dict:
        return self.backend.insert(table, values)

    def update(self, table: str, row_id: str, values: dict) -> dict:
        return self.backend.update(table, row_id, values)

    def delete(self, table: str, row_id: str) -> None:
        self.backend.delete(table, row_id)
