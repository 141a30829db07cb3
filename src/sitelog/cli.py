"""sitelog CLI - construction site daily logs and timesheets."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.rest_backend import BackendError, ConfigurationError
from .config import load_config
from .core.calendar import format_date, period_ending_for
from .core.hours import compute_hours, format_hours, format_time_12
from .core.models import ANALYSIS_CODES, WEATHER_OPTIONS
from .core.priority import DateParseError, Priority, classify, days_until, parse_due_date
from .core.reports import ReportFilter
from .core.timesheet import TimesheetLine, add_line
from .workflows import (
    build_report,
    dashboard_stats,
    format_digest,
    format_month,
    format_notes,
    format_stats,
    format_timesheet,
    get_repository,
    get_timesheet_store,
    load_timesheet,
    outstanding_items,
)

PRIORITY_CHOICE = click.Choice([p.value for p in Priority])


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_date_option(value: str | None, name: str) -> date | None:
    try:
        return parse_due_date(value)
    except DateParseError as e:
        raise click.BadParameter(str(e), param_hint=name)


def _repository(config):
    try:
        return get_repository(config)
    except ConfigurationError as e:
        _fail(str(e))


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """sitelog - Site daily logs, calendar and timesheets."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


# ============== Pure calculators ==============


@main.command()
@click.argument("due_date", required=False)
@click.option("--as-of", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
def priority(due_date: str | None, as_of: str | None):
    """Show the priority tier for a due date."""
    due = _parse_date_option(due_date, "DUE_DATE")
    today = _parse_date_option(as_of, "--as-of") or date.today()
    tier = classify(due, today)
    if due is None:
        click.echo(f"{tier.label} (no due date)")
    else:
        click.echo(f"{tier.label} ({days_until(due, today)}d until {format_date(due)})")


@main.command()
@click.argument("start")
@click.argument("finish")
@click.option("--lunch", "lunch_minutes", type=int, default=0, help="Lunch deduction in minutes")
@click.option("--rounding", type=int, default=None, help="Rounding increment in minutes")
def hours(start: str, finish: str, lunch_minutes: int, rounding: int | None):
    """Calculate worked hours between START and FINISH (HH:MM)."""
    config = load_config()
    rounding = rounding or config.rounding_minutes
    result = compute_hours(start, finish, lunch_minutes, rounding)
    span = f"{format_time_12(start) or start}-{format_time_12(finish) or finish}"
    click.echo(f"{format_hours(result)} hrs ({span})")


# ============== Backend views ==============


@main.command()
@click.option("--year", type=int, default=None, help="Year, defaults to this year")
@click.option("--month", type=click.IntRange(1, 12), default=None, help="Month 1-12, defaults to this month")
@click.option("--offline", is_flag=True, help="Don't fetch notes and logs")
def calendar(year: int | None, month: int | None, offline: bool):
    """Show a month calendar with days that have notes or logs marked."""
    today = date.today()
    year = year or today.year
    month_index = (month or today.month) - 1

    notes, logs = [], []
    if not offline:
        config = load_config()
        repo = _repository(config)
        try:
            notes = repo.fetch_calendar_notes(year, month_index)
            logs = repo.fetch_daily_logs()
        except BackendError as e:
            _fail(str(e))

    click.echo(format_month(year, month_index, notes, logs, today))


@main.command()
@click.option("--year", type=int, default=None, help="Year, defaults to this year")
@click.option("--month", type=click.IntRange(1, 12), default=None, help="Month 1-12, defaults to this month")
def notes(year: int | None, month: int | None):
    """List calendar notes for a month."""
    today = date.today()
    config = load_config()
    repo = _repository(config)
    try:
        month_notes = repo.fetch_calendar_notes(year or today.year, (month or today.month) - 1)
    except BackendError as e:
        _fail(str(e))
    click.echo(format_notes(month_notes))


@main.command()
@click.option("--priority", "tier", type=PRIORITY_CHOICE, default=None, help="Only show one tier")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def outstanding(tier: str | None, as_json: bool):
    """List incomplete activities, materials, equipment and crew items."""
    config = load_config()
    repo = _repository(config)
    today = date.today()
    try:
        items = outstanding_items(repo, Priority(tier) if tier else None, today)
    except (BackendError, DateParseError) as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "kind": i.kind,
                        "id": i.id,
                        "title": i.title,
                        "due_date": i.due_date.isoformat() if i.due_date else None,
                        "priority": i.priority.value,
                        "project": i.project_name,
                        "job_number": i.job_number,
                    }
                    for i in items
                ],
                indent=2,
            )
        )
    else:
        click.echo(format_digest(items, today))


@main.command()
def stats():
    """Dashboard headline counts."""
    config = load_config()
    repo = _repository(config)
    try:
        result = dashboard_stats(repo)
    except (BackendError, DateParseError) as e:
        _fail(str(e))
    click.echo(format_stats(result))


@main.command()
@click.option("--from", "date_from", default=None, help="First log date (YYYY-MM-DD)")
@click.option("--to", "date_to", default=None, help="Last log date (YYYY-MM-DD)")
@click.option("--project", "project_id", default=None, help="Project id")
@click.option("--priority", "tier", type=PRIORITY_CHOICE, default=None, help="Stored log priority")
@click.option("--search", default="", help="Search project, job number, notes, weather and incidents")
@click.option(
    "--weather",
    type=click.Choice(WEATHER_OPTIONS, case_sensitive=False),
    default=None,
    help="Only logs with this weather",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def report(date_from, date_to, project_id, tier, search, weather, as_json: bool):
    """Summarize daily logs."""
    flt = ReportFilter(
        date_from=_parse_date_option(date_from, "--from"),
        date_to=_parse_date_option(date_to, "--to"),
        project_id=project_id,
        priority=Priority(tier) if tier else None,
        search=search,
        weather=weather or "",
    )
    config = load_config()
    repo = _repository(config)
    try:
        logs, summary = build_report(repo, flt)
    except (BackendError, DateParseError) as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "summary": vars(summary),
                    "logs": [
                        {
                            "id": log.id,
                            "log_date": log.log_date.isoformat(),
                            "project": log.project.name if log.project else None,
                            "priority": log.priority.value,
                            "weather": log.weather,
                            "safety_incidents": log.safety_incidents,
                            "critical_items": log.critical_items,
                        }
                        for log in logs
                    ],
                },
                indent=2,
            )
        )
        return

    click.echo(
        f"{summary.total} logs across {summary.unique_projects} projects "
        f"(high {summary.high}, medium {summary.medium}, low {summary.low}); "
        f"{summary.with_safety} with safety incidents, {summary.with_critical} with critical items\n"
    )
    for log in logs:
        project = log.project.name if log.project else "Unknown"
        click.echo(f"  {format_date(log.log_date)}  [{log.priority.label:6}] {project}  {log.weather}")


# ============== Timesheets ==============


@main.group(invoke_without_command=True)
@click.option("--ending", default=None, help="Period ending date (YYYY-MM-DD)")
@click.pass_context
def timesheet(ctx, ending: str | None):
    """Show or edit the timesheet for a period."""
    config = load_config()
    period_ending = _parse_date_option(ending, "--ending") or period_ending_for(
        date.today(), config.week_ending_day
    )
    ctx.obj = {"config": config, "period_ending": period_ending}
    if ctx.invoked_subcommand is None:
        ctx.invoke(timesheet_show)


@timesheet.command("show")
@click.pass_context
def timesheet_show(ctx):
    """Show the timesheet with daily and period totals."""
    config = ctx.obj["config"]
    store = get_timesheet_store(config)
    sheet = load_timesheet(store, config, ctx.obj["period_ending"])
    click.echo(format_timesheet(sheet, config.rounding_minutes, config.company_name))


@timesheet.command("add")
@click.argument("day")
@click.argument("start")
@click.argument("finish")
@click.option("--lunch/--no-lunch", default=False, help="Deduct the default lunch break")
@click.option("--lunch-minutes", type=int, default=None, help="Lunch length (defaults to config)")
@click.option("--job", "job_no", default="", help="Job number")
@click.option("--code", "analysis_code", type=click.Choice(list(ANALYSIS_CODES)), default=None, help="Analysis code")
@click.option("--employee", default=None, help="Set the employee name")
@click.pass_context
def timesheet_add(ctx, day, start, finish, lunch, lunch_minutes, job_no, analysis_code, employee):
    """Add a START-FINISH line on DAY (YYYY-MM-DD)."""
    config = ctx.obj["config"]
    target = _parse_date_option(day, "DAY")
    store = get_timesheet_store(config)
    sheet = load_timesheet(store, config, ctx.obj["period_ending"])

    line = TimesheetLine(
        start_time=start,
        finish_time=finish,
        lunch=lunch,
        lunch_minutes=lunch_minutes or config.lunch_default_minutes,
        job_no=job_no,
        analysis_code=analysis_code or "",
    )
    try:
        add_line(sheet, target, line)
    except ValueError as e:
        _fail(str(e))

    if employee is not None:
        sheet.employee_name = employee
    store.save(sheet)
    click.echo(
        f"Added {start}-{finish} on {format_date(target)}: "
        f"{format_hours(line.hours(config.rounding_minutes))} hrs "
        f"(period total {format_hours(sheet.total(config.rounding_minutes))})"
    )


# ============== Bot ==============


@main.command()
def bot():
    """Run the Telegram bot."""
    try:
        from .telegram_bot import run_bot
        click.echo("Starting sitelog Telegram bot...")
        click.echo("Press Ctrl+C to stop")
        run_bot()
    except ImportError as e:
        click.echo("Error: Missing dependencies. Run 'pip install python-telegram-bot apscheduler'", err=True)
        click.echo(f"Details: {e}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nBot stopped.")


if __name__ == "__main__":
    main()
