"""Tests for daily-log reports."""

from datetime import date

import pytest

from sitelog.core.models import DailyLog, Project
from sitelog.core.priority import Priority
from sitelog.core.reports import ReportFilter, filter_logs, summarize


@pytest.fixture
def logs():
    tower = Project(id="p1", name="Harbour Tower", job_number="4411")
    depot = Project(id="p2", name="Bus Depot", job_number="5020")
    return [
        DailyLog(
            id="l1",
            project_id="p1",
            log_date=date(2025, 1, 10),
            weather="Heavy Rain",
            priority=Priority.HIGH,
            safety_incidents="Slip on scaffold",
            project=tower,
        ),
        DailyLog(
            id="l2",
            project_id="p1",
            log_date=date(2025, 1, 14),
            weather="Clear",
            priority=Priority.MEDIUM,
            critical_items="Crane booking",
            project=tower,
        ),
        DailyLog(
            id="l3",
            project_id="p2",
            log_date=date(2025, 1, 20),
            weather="Wind",
            priority=Priority.LOW,
            notes="Pour postponed",
            project=depot,
        ),
    ]


class TestFilterLogs:
    def test_no_filter_keeps_everything(self, logs):
        assert filter_logs(logs, ReportFilter()) == logs

    def test_date_range_inclusive(self, logs):
        flt = ReportFilter(date_from=date(2025, 1, 10), date_to=date(2025, 1, 14))
        assert [log.id for log in filter_logs(logs, flt)] == ["l1", "l2"]

    def test_project(self, logs):
        assert [log.id for log in filter_logs(logs, ReportFilter(project_id="p2"))] == ["l3"]

    def test_priority(self, logs):
        assert [log.id for log in filter_logs(logs, ReportFilter(priority=Priority.MEDIUM))] == ["l2"]

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("harbour", ["l1", "l2"]),
            ("5020", ["l3"]),
            ("SCAFFOLD", ["l1"]),
            ("crane", ["l2"]),
            ("postponed", ["l3"]),
            ("rain", ["l1"]),
            ("nothing like this", []),
        ],
    )
    def test_search(self, logs, query, expected):
        assert [log.id for log in filter_logs(logs, ReportFilter(search=query))] == expected

    def test_weather_case_insensitive(self, logs):
        assert [log.id for log in filter_logs(logs, ReportFilter(weather="heavy rain"))] == ["l1"]

    def test_search_without_project(self):
        log = DailyLog(id="x", project_id="p9", log_date=date(2025, 1, 1), notes="Inspection passed")
        assert filter_logs([log], ReportFilter(search="inspection")) == [log]


class TestSummarize:
    def test_counts(self, logs):
        summary = summarize(logs)
        assert summary.total == 3
        assert (summary.high, summary.medium, summary.low) == (1, 1, 1)
        assert summary.with_safety == 1
        assert summary.with_critical == 1
        assert summary.unique_projects == 2

    def test_empty(self):
        summary = summarize([])
        assert summary.total == 0
        assert summary.unique_projects == 0
