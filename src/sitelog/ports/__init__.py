"""Ports - interfaces/protocols for external dependencies."""

from .site_repo import SiteRepository
from .timesheet_store import TimesheetStore

__all__ = [
    "SiteRepository",
    "TimesheetStore",
]
