"""Pure daily-log reporting - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .models import DailyLog
from .priority import Priority, count_by_priority


@dataclass
class ReportFilter:
    """Criteria for selecting daily logs. None/empty means no restriction."""

    date_from: date | None = None
    date_to: date | None = None
    project_id: str | None = None
    priority: Priority | None = None
    search: str = ""
    weather: str = ""


@dataclass
class ReportSummary:
    total: int
    high: int
    medium: int
    low: int
    with_safety: int
    with_critical: int
    unique_projects: int


def _matches_search(log: DailyLog, query: str) -> bool:
    project = log.project
    haystack = [
        project.name if project else "",
        project.job_number if project else "",
        log.notes,
        log.weather,
        log.critical_items,
        log.safety_incidents,
    ]
    return any(query in field.lower() for field in haystack)


def filter_logs(logs: list[DailyLog], flt: ReportFilter) -> list[DailyLog]:
    """
    Select logs matching every criterion in the filter.

    Pure function - no I/O. The date range is inclusive at both ends.
    """
    query = flt.search.strip().lower()
    result = []
    for log in logs:
        if flt.date_from and log.log_date < flt.date_from:
            continue
        if flt.date_to and log.log_date > flt.date_to:
            continue
        if flt.project_id and log.project_id != flt.project_id:
            continue
        if flt.priority and log.priority != flt.priority:
            continue
        if flt.weather and log.weather.lower() != flt.weather.lower():
            continue
        if query and not _matches_search(log, query):
            continue
        result.append(log)
    return result


def summarize(logs: list[DailyLog]) -> ReportSummary:
    """Counts over a set of logs."""
    counts = count_by_priority(log.priority for log in logs)
    return ReportSummary(
        total=len(logs),
        high=counts[Priority.HIGH],
        medium=counts[Priority.MEDIUM],
        low=counts[Priority.LOW],
        with_safety=sum(1 for log in logs if log.has_safety_incident),
        with_critical=sum(1 for log in logs if log.has_critical_items),
        unique_projects=len({log.project_id for log in logs}),
    )
