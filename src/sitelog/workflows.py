"""Shared workflow layer between CLI and Telegram.

Each function wires a repository or store from config, runs the pure core
over what it fetched, and returns the result or formatted text.
"""

import logging
from datetime import date
from pathlib import Path

from .adapters.file_timesheet import FileTimesheetStore
from .adapters.rest_backend import RestBackend, RestSiteRepository
from .config import DATA_DIR, Config
from .core.calendar import build_grid, format_date, group_by_date
from .core.dashboard import (
    DashboardStats,
    OutstandingItem,
    collect_outstanding,
    compute_stats,
    filter_by_priority,
    format_item_line,
)
from .core.hours import format_hours
from .core.models import ANALYSIS_CODES, CalendarNote, DailyLog
from .core.priority import Priority
from .core.reports import ReportFilter, ReportSummary, filter_logs, summarize
from .core.timesheet import Timesheet, build_period
from .ports import SiteRepository, TimesheetStore

logger = logging.getLogger(__name__)


def get_repository(config: Config) -> SiteRepository:
    """Build the backend repository from config."""
    return RestSiteRepository(RestBackend(config))


def get_timesheet_store(config: Config) -> FileTimesheetStore:
    """Resolve timesheet directory from config."""
    if config.timesheet_dir:
        return FileTimesheetStore(Path(config.timesheet_dir).expanduser())
    return FileTimesheetStore(DATA_DIR / "timesheets")


# ============== Dashboard ==============


def outstanding_items(
    repo: SiteRepository,
    priority: Priority | None = None,
    as_of: date | None = None,
) -> list[OutstandingItem]:
    """Incomplete items across all logs, high priority first."""
    items = collect_outstanding(repo.fetch_incomplete_items(), as_of)
    return filter_by_priority(items, priority)


def dashboard_stats(repo: SiteRepository, as_of: date | None = None) -> DashboardStats:
    return compute_stats(
        repo.fetch_projects(),
        repo.fetch_daily_logs(),
        repo.fetch_activities(),
        repo.fetch_materials(),
        as_of,
    )


def format_digest(items: list[OutstandingItem], as_of: date | None = None) -> str:
    """Markdown digest of outstanding items, grouped by tier."""
    as_of = as_of or date.today()
    if not items:
        return "Nothing outstanding."

    sections = []
    for tier in Priority:
        tier_items = [i for i in items if i.priority == tier]
        if not tier_items:
            continue
        lines = "\n".join(format_item_line(i, as_of) for i in tier_items)
        sections.append(f"### {tier.label} ({len(tier_items)})\n{lines}")
    return "\n\n".join(sections)


def format_stats(stats: DashboardStats) -> str:
    return "\n".join(
        [
            f"Active projects:   {stats.active_projects}",
            f"High priority:     {stats.high_priority_logs}",
            f"Overdue items:     {stats.total_overdue}",
            f"Pending materials: {stats.pending_materials}",
            f"Safety incidents:  {stats.safety_incidents}",
            f"Total logs:        {stats.total_logs}",
        ]
    )


# ============== Reports ==============


def build_report(repo: SiteRepository, flt: ReportFilter) -> tuple[list[DailyLog], ReportSummary]:
    """Filtered logs and their summary."""
    logs = filter_logs(repo.fetch_daily_logs(), flt)
    return logs, summarize(logs)


# ============== Calendar ==============


def format_month(
    year: int,
    month: int,
    notes: list[CalendarNote] | None = None,
    logs: list[DailyLog] | None = None,
    today: date | None = None,
) -> str:
    """
    Text month view. Days with notes or logs are marked with `*`, today with
    brackets.
    """
    today = today or date.today()
    marked = set(group_by_date(notes or [], lambda n: n.note_date))
    marked |= set(group_by_date(logs or [], lambda log: log.log_date))

    grid = build_grid(year, month)
    first = next(d for d in grid[0] if d is not None)
    lines = [first.strftime("%B %Y").center(35), " Sun  Mon  Tue  Wed  Thu  Fri  Sat"]
    for week in grid:
        cells = []
        for d in week:
            if d is None:
                cells.append("     ")
                continue
            mark = "*" if d in marked else " "
            cell = f"[{d.day:2d}]" if d == today else f" {d.day:2d} "
            cells.append(f"{cell}{mark}")
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)


def format_notes(notes: list[CalendarNote]) -> str:
    if not notes:
        return "No notes."
    lines = []
    for note_date, day_notes in sorted(group_by_date(notes, lambda n: n.note_date).items()):
        lines.append(f"### {format_date(note_date)}")
        for n in day_notes:
            done = "x" if n.is_completed else " "
            lines.append(f"  [{done}] {n.note_type.label}: {n.title} ({n.priority.label})")
    return "\n".join(lines)


# ============== Timesheets ==============


def load_timesheet(store: TimesheetStore, config: Config, period_ending: date) -> Timesheet:
    """Saved timesheet for the period laid out to the configured length."""
    existing = store.load(period_ending)
    return build_period(
        period_ending,
        config.timesheet_period,
        config.lunch_default_minutes,
        existing,
    )


def format_timesheet(timesheet: Timesheet, rounding_minutes: int = 15, company_name: str = "") -> str:
    header = timesheet.employee_name or "Timesheet"
    lines = [company_name] if company_name else []
    lines += [f"{header} - period ending {format_date(timesheet.period_ending)}", ""]
    for day in timesheet.days:
        filled = [line for line in day.lines if line.is_filled]
        if not filled:
            lines.append(f"{day.day_name[:3]} {day.date.strftime('%d/%m')}  -")
            continue
        for i, line in enumerate(filled):
            label = f"{day.day_name[:3]} {day.date.strftime('%d/%m')}" if i == 0 else ""
            lunch = f" lunch {line.lunch_minutes}m" if line.lunch else ""
            job = f" job {line.job_no}" if line.job_no else ""
            code = ""
            if line.analysis_code:
                name = ANALYSIS_CODES.get(line.analysis_code)
                code = f" [{line.analysis_code} {name}]" if name else f" [{line.analysis_code}]"
            lines.append(
                f"{label:10} {line.start_time}-{line.finish_time}{lunch}"
                f"  {format_hours(line.hours(rounding_minutes))}h{job}{code}"
            )
    lines.append("")
    lines.append(f"Total: {format_hours(timesheet.total(rounding_minutes))} hrs")
    return "\n".join(lines)
