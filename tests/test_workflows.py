"""Tests for the shared workflow layer."""

from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

from sitelog.config import Config
from sitelog.core.models import (
    CalendarNote,
    DailyLog,
    IncompleteItems,
    Material,
    NoteType,
    Project,
    WorkActivity,
)
from sitelog.core.priority import Priority
from sitelog.core.reports import ReportFilter
from sitelog.core.timesheet import TimesheetLine, add_line
from sitelog.workflows import (
    build_report,
    dashboard_stats,
    format_digest,
    format_month,
    format_notes,
    format_timesheet,
    get_timesheet_store,
    load_timesheet,
    outstanding_items,
)


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def repo(today):
    project = Project(id="p1", name="Harbour Tower", job_number="4411")
    log = DailyLog(id="l1", project_id="p1", log_date=today, priority=Priority.HIGH, project=project)
    repo = MagicMock()
    repo.fetch_incomplete_items.return_value = IncompleteItems(
        activities=[
            WorkActivity(id="a1", daily_log_id="l1", description="Frame level 3", due_date=today + timedelta(days=20)),
        ],
        materials=[
            Material(id="m1", daily_log_id="l1", description="Plasterboard", required_date=today + timedelta(days=1)),
        ],
        logs={"l1": log},
    )
    repo.fetch_projects.return_value = [project]
    repo.fetch_daily_logs.return_value = [log]
    repo.fetch_activities.return_value = []
    repo.fetch_materials.return_value = []
    return repo


class TestGetTimesheetStore:
    def test_uses_configured_dir(self, tmp_path):
        store = get_timesheet_store(Config(timesheet_dir=str(tmp_path)))
        assert store.timesheet_dir == tmp_path

    def test_falls_back_to_default(self, monkeypatch, tmp_path):
        monkeypatch.setattr("sitelog.workflows.DATA_DIR", tmp_path)
        store = get_timesheet_store(Config(timesheet_dir=""))
        assert store.timesheet_dir == tmp_path / "timesheets"


class TestOutstanding:
    def test_sorted_and_filtered(self, repo, today):
        items = outstanding_items(repo, as_of=today)
        assert [i.id for i in items] == ["m1", "a1"]

        high = outstanding_items(repo, Priority.HIGH, as_of=today)
        assert [i.id for i in high] == ["m1"]

    def test_digest_groups_by_tier(self, repo, today):
        digest = format_digest(outstanding_items(repo, as_of=today), today)
        assert "### High (1)" in digest
        assert "### Low (1)" in digest
        assert "### Medium" not in digest
        assert digest.index("Plasterboard") < digest.index("Frame level 3")

    def test_empty_digest(self, today):
        assert format_digest([], today) == "Nothing outstanding."

    def test_stats(self, repo, today):
        stats = dashboard_stats(repo, as_of=today)
        assert stats.active_projects == 1
        assert stats.high_priority_logs == 1


class TestReport:
    def test_build_report(self, repo):
        logs, summary = build_report(repo, ReportFilter(search="harbour"))
        assert len(logs) == 1
        assert summary.high == 1


class TestFormatMonth:
    def test_header_and_markers(self, today):
        notes = [CalendarNote(id="n1", note_date=date(2025, 1, 20), title="Inspection")]
        text = format_month(2025, 0, notes=notes, today=today)
        lines = text.splitlines()

        assert "January 2025" in lines[0]
        assert lines[1].split() == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        assert "[15]" in text
        assert " 20 *" in text
        assert len(lines) == 2 + 5

    def test_format_notes(self):
        notes = [
            CalendarNote(
                id="n1",
                note_date=date(2025, 1, 20),
                title="Council inspection",
                note_type=NoteType.INSPECTION,
                priority=Priority.MEDIUM,
            )
        ]
        text = format_notes(notes)
        assert "### 20 Jan 2025" in text
        assert "[ ] Inspection: Council inspection (Medium)" in text

    def test_format_no_notes(self):
        assert format_notes([]) == "No notes."


class TestTimesheet:
    def test_load_lays_out_configured_period(self, tmp_path):
        config = Config(timesheet_dir=str(tmp_path), timesheet_period=2, lunch_default_minutes=60)
        store = get_timesheet_store(config)
        sheet = load_timesheet(store, config, date(2025, 1, 19))
        assert len(sheet.days) == 14
        assert sheet.days[0].lines[0].lunch_minutes == 60

    def test_load_keeps_saved_lines(self, tmp_path):
        config = Config(timesheet_dir=str(tmp_path))
        store = get_timesheet_store(config)
        sheet = load_timesheet(store, config, date(2025, 1, 19))
        add_line(sheet, date(2025, 1, 15), TimesheetLine(start_time="07:00", finish_time="16:30", lunch=True))
        store.save(sheet)

        reloaded = load_timesheet(store, config, date(2025, 1, 19))
        assert reloaded.total() == 9.0

    def test_format(self, tmp_path):
        config = Config(timesheet_dir=str(tmp_path))
        sheet = load_timesheet(get_timesheet_store(config), config, date(2025, 1, 19))
        sheet.employee_name = "Sam"
        add_line(sheet, date(2025, 1, 15), TimesheetLine(start_time="07:00", finish_time="16:30", lunch=True, job_no="4411"))

        text = format_timesheet(sheet)
        assert text.startswith("Sam - period ending 19 Jan 2025")
        assert "Wed 15/01" in text
        assert "9.00h job 4411" in text
        assert text.endswith("Total: 9.00 hrs")

    def test_format_with_company_and_code_names(self, tmp_path):
        config = Config(timesheet_dir=str(tmp_path))
        sheet = load_timesheet(get_timesheet_store(config), config, date(2025, 1, 19))
        add_line(sheet, date(2025, 1, 13), TimesheetLine(start_time="07:00", finish_time="15:00", analysis_code="103"))
        add_line(sheet, date(2025, 1, 14), TimesheetLine(start_time="07:00", finish_time="15:00", analysis_code="999"))

        text = format_timesheet(sheet, company_name="Southern Interiors Ltd")

        assert text.splitlines()[0] == "Southern Interiors Ltd"
        assert "Timesheet - period ending 19 Jan 2025" in text
        assert "[103 Partition Walls]" in text
        assert "[999]" in text
