"""Tests for timesheet logic."""

from datetime import date

import pytest

from sitelog.core.timesheet import (
    SignOff,
    Timesheet,
    TimesheetDay,
    TimesheetLine,
    add_line,
    build_period,
    remove_line,
)


@pytest.fixture
def period_ending():
    return date(2025, 1, 19)


class TestTimesheetLine:
    def test_hours_with_lunch_ticked(self):
        line = TimesheetLine(start_time="07:00", finish_time="16:30", lunch=True, lunch_minutes=30)
        assert line.hours() == 9.0

    def test_lunch_minutes_ignored_when_not_ticked(self):
        line = TimesheetLine(start_time="07:00", finish_time="16:30", lunch=False, lunch_minutes=30)
        assert line.hours() == 9.5

    def test_is_filled(self):
        assert TimesheetLine(start_time="07:00", finish_time="15:00").is_filled
        assert not TimesheetLine(start_time="07:00").is_filled


class TestTotals:
    def test_day_total_skips_unfilled_lines(self):
        day = TimesheetDay(
            day_name="Monday",
            date=date(2025, 1, 13),
            lines=[
                TimesheetLine(start_time="07:00", finish_time="12:00"),
                TimesheetLine(start_time="12:30", finish_time="16:00"),
                TimesheetLine(start_time="17:00"),
            ],
        )
        assert day.total() == 8.5

    def test_period_total(self, period_ending):
        sheet = build_period(period_ending)
        add_line(sheet, date(2025, 1, 13), TimesheetLine(start_time="07:00", finish_time="15:00"))
        add_line(sheet, date(2025, 1, 14), TimesheetLine(start_time="22:00", finish_time="06:00"))
        assert sheet.total() == 16.0


class TestBuildPeriod:
    def test_weekly(self, period_ending):
        sheet = build_period(period_ending, period_weeks=1, lunch_default_minutes=60)
        assert len(sheet.days) == 7
        assert sheet.days[0].date == date(2025, 1, 13)
        assert sheet.days[-1].date == period_ending
        assert all(len(d.lines) == 1 for d in sheet.days)
        assert sheet.days[0].lines[0].lunch_minutes == 60

    def test_fortnightly(self, period_ending):
        sheet = build_period(period_ending, period_weeks=2)
        assert len(sheet.days) == 14
        assert sheet.days[0].date == date(2025, 1, 6)

    def test_invalid_period(self, period_ending):
        with pytest.raises(ValueError):
            build_period(period_ending, period_weeks=3)

    def test_carries_over_existing_lines(self, period_ending):
        existing = build_period(period_ending)
        existing.employee_name = "Sam"
        add_line(existing, date(2025, 1, 15), TimesheetLine(start_time="07:00", finish_time="15:00"))

        # Switching to a fortnight keeps what was entered
        sheet = build_period(period_ending, period_weeks=2, existing=existing)
        assert sheet.employee_name == "Sam"
        assert sheet.day_for(date(2025, 1, 15)).lines[0].start_time == "07:00"
        assert sheet.total() == 8.0

    def test_editing_new_period_leaves_existing_alone(self, period_ending):
        existing = build_period(period_ending)
        existing.staff_sign_off = SignOff(name="Sam")
        add_line(existing, date(2025, 1, 13), TimesheetLine(start_time="07:00", finish_time="15:00"))

        sheet = build_period(period_ending, existing=existing)
        add_line(sheet, date(2025, 1, 13), TimesheetLine(start_time="16:00", finish_time="18:00"))
        sheet.day_for(date(2025, 1, 13)).lines[0].job_no = "4411"
        sheet.staff_sign_off.signed_on = date(2025, 1, 20)

        lines = existing.day_for(date(2025, 1, 13)).lines
        assert len(lines) == 1
        assert lines[0].job_no == ""
        assert existing.staff_sign_off.signed_on is None


class TestEditing:
    def test_add_fills_blank_line_first(self, period_ending):
        sheet = build_period(period_ending)
        add_line(sheet, date(2025, 1, 13), TimesheetLine(start_time="07:00", finish_time="12:00"))
        add_line(sheet, date(2025, 1, 13), TimesheetLine(start_time="13:00", finish_time="16:00"))
        assert len(sheet.day_for(date(2025, 1, 13)).lines) == 2

    def test_add_outside_period(self, period_ending):
        sheet = build_period(period_ending)
        with pytest.raises(ValueError):
            add_line(sheet, date(2025, 1, 20), TimesheetLine())

    def test_remove_last_line_leaves_blank(self, period_ending):
        sheet = build_period(period_ending, lunch_default_minutes=60)
        add_line(sheet, date(2025, 1, 13), TimesheetLine(start_time="07:00", finish_time="12:00"))
        remove_line(sheet, date(2025, 1, 13), 0, lunch_default_minutes=60)
        lines = sheet.day_for(date(2025, 1, 13)).lines
        assert len(lines) == 1
        assert not lines[0].is_filled
        assert lines[0].lunch_minutes == 60

    def test_remove_bad_index(self, period_ending):
        sheet = build_period(period_ending)
        with pytest.raises(ValueError):
            remove_line(sheet, date(2025, 1, 13), 5)


class TestSerialization:
    def test_to_dict_and_back_keeps_sign_offs(self, period_ending):
        sheet = build_period(period_ending)
        sheet.manager_sign_off = SignOff(name="Alex", signed_on=date(2025, 1, 20))
        add_line(sheet, date(2025, 1, 13), TimesheetLine(start_time="07:00", finish_time="15:00", job_no="4411"))

        restored = Timesheet.from_dict(sheet.to_dict())

        assert restored.manager_sign_off == SignOff(name="Alex", signed_on=date(2025, 1, 20))
        assert restored.staff_sign_off == SignOff()
        assert restored.day_for(date(2025, 1, 13)).lines[0].job_no == "4411"
        assert restored.total() == sheet.total()

    def test_from_dict_ignores_unknown_line_keys(self, period_ending):
        data = build_period(period_ending).to_dict()
        data["days"][0]["lines"] = [{"start_time": "07:00", "finish_time": "15:00", "travel_km": 12}]

        restored = Timesheet.from_dict(data)

        assert restored.days[0].lines == [TimesheetLine(start_time="07:00", finish_time="15:00")]
