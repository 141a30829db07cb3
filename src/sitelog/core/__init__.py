"""Functional core - pure business logic with no I/O."""

from .priority import Priority, DateParseError, classify, parse_due_date, sort_by_priority
from .hours import compute_hours, format_time_12
from .calendar import build_grid, month_days, month_bounds, period_days
from .timesheet import Timesheet, TimesheetDay, TimesheetLine, build_period
from .dashboard import OutstandingItem, DashboardStats, collect_outstanding, compute_stats
from .reports import ReportFilter, ReportSummary, filter_logs, summarize

__all__ = [
    # Priority
    "Priority",
    "DateParseError",
    "classify",
    "parse_due_date",
    "sort_by_priority",
    # Hours
    "compute_hours",
    "format_time_12",
    # Calendar
    "build_grid",
    "month_days",
    "month_bounds",
    "period_days",
    # Timesheet
    "Timesheet",
    "TimesheetDay",
    "TimesheetLine",
    "build_period",
    # Dashboard
    "OutstandingItem",
    "DashboardStats",
    "collect_outstanding",
    "compute_stats",
    # Reports
    "ReportFilter",
    "ReportSummary",
    "filter_logs",
    "summarize",
]
