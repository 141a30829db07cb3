"""Pure timesheet logic - no I/O dependencies."""

from dataclasses import dataclass, field, fields, replace
from datetime import date

from .calendar import DAYS_PER_WEEK, period_days
from .hours import DEFAULT_ROUNDING_MINUTES, compute_hours


@dataclass
class TimesheetLine:
    """One start/finish entry against a job."""

    start_time: str = ""
    finish_time: str = ""
    lunch: bool = False
    lunch_minutes: int = 30
    job_no: str = ""
    analysis_code: str = ""
    other: str = ""

    @property
    def is_filled(self) -> bool:
        return bool(self.start_time and self.finish_time)

    def hours(self, rounding_minutes: int = DEFAULT_ROUNDING_MINUTES) -> float:
        """Worked hours; lunch is only deducted when ticked."""
        lunch = self.lunch_minutes if self.lunch else 0
        return compute_hours(self.start_time, self.finish_time, lunch, rounding_minutes)


@dataclass
class TimesheetDay:
    day_name: str
    date: date
    lines: list[TimesheetLine] = field(default_factory=list)

    def total(self, rounding_minutes: int = DEFAULT_ROUNDING_MINUTES) -> float:
        return sum(line.hours(rounding_minutes) for line in self.lines if line.is_filled)


@dataclass
class SignOff:
    name: str = ""
    signed_on: date | None = None


@dataclass
class Timesheet:
    """A weekly or fortnightly timesheet for one employee."""

    period_ending: date
    days: list[TimesheetDay]
    employee_name: str = ""
    messages: str = ""
    nights_away: str = ""
    staff_sign_off: SignOff = field(default_factory=SignOff)
    manager_sign_off: SignOff = field(default_factory=SignOff)

    def total(self, rounding_minutes: int = DEFAULT_ROUNDING_MINUTES) -> float:
        return sum(day.total(rounding_minutes) for day in self.days)

    def day_for(self, target: date) -> TimesheetDay | None:
        return next((d for d in self.days if d.date == target), None)

    def to_dict(self) -> dict:
        return {
            "employee_name": self.employee_name,
            "period_ending": self.period_ending.isoformat(),
            "messages": self.messages,
            "nights_away": self.nights_away,
            "staff_sign_off": _sign_off_to_dict(self.staff_sign_off),
            "manager_sign_off": _sign_off_to_dict(self.manager_sign_off),
            "days": [
                {
                    "day": d.day_name,
                    "date": d.date.isoformat(),
                    "lines": [
                        {
                            "start_time": line.start_time,
                            "finish_time": line.finish_time,
                            "lunch": line.lunch,
                            "lunch_minutes": line.lunch_minutes,
                            "job_no": line.job_no,
                            "analysis_code": line.analysis_code,
                            "other": line.other,
                        }
                        for line in d.lines
                    ],
                }
                for d in self.days
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Timesheet":
        days = [
            TimesheetDay(
                day_name=d["day"],
                date=date.fromisoformat(d["date"]),
                lines=[_line_from_dict(line) for line in d.get("lines", [])],
            )
            for d in data.get("days", [])
        ]
        return cls(
            period_ending=date.fromisoformat(data["period_ending"]),
            days=days,
            employee_name=data.get("employee_name", ""),
            messages=data.get("messages", ""),
            nights_away=data.get("nights_away", ""),
            staff_sign_off=_sign_off_from_dict(data.get("staff_sign_off")),
            manager_sign_off=_sign_off_from_dict(data.get("manager_sign_off")),
        )


_LINE_FIELDS = {f.name for f in fields(TimesheetLine)}


def _line_from_dict(data: dict) -> TimesheetLine:
    return TimesheetLine(**{k: v for k, v in data.items() if k in _LINE_FIELDS})


def _sign_off_to_dict(sign_off: SignOff) -> dict:
    return {
        "name": sign_off.name,
        "date": sign_off.signed_on.isoformat() if sign_off.signed_on else None,
    }


def _sign_off_from_dict(data: dict | None) -> SignOff:
    if not data:
        return SignOff()
    return SignOff(
        name=data.get("name", ""),
        signed_on=date.fromisoformat(data["date"]) if data.get("date") else None,
    )


def build_period(
    period_ending: date,
    period_weeks: int = 1,
    lunch_default_minutes: int = 30,
    existing: Timesheet | None = None,
) -> Timesheet:
    """
    Lay out a timesheet period ending on period_ending.

    Pure function - no I/O.

    Lines already entered for a date in `existing` are carried over; other
    days start with a single blank line using the default lunch length.
    """
    if period_weeks not in (1, 2):
        raise ValueError(f"Timesheet period must be 1 or 2 weeks, got {period_weeks}")

    days = []
    for pd in period_days(period_ending, DAYS_PER_WEEK * period_weeks):
        previous = existing.day_for(pd.date) if existing else None
        if previous and previous.lines:
            lines = [replace(line) for line in previous.lines]
        else:
            lines = [TimesheetLine(lunch_minutes=lunch_default_minutes)]
        days.append(TimesheetDay(day_name=pd.day_name, date=pd.date, lines=lines))

    timesheet = Timesheet(period_ending=period_ending, days=days)
    if existing:
        timesheet.employee_name = existing.employee_name
        timesheet.messages = existing.messages
        timesheet.nights_away = existing.nights_away
        timesheet.staff_sign_off = replace(existing.staff_sign_off)
        timesheet.manager_sign_off = replace(existing.manager_sign_off)
    return timesheet


def add_line(timesheet: Timesheet, target: date, line: TimesheetLine) -> None:
    """Add a line to the day, filling its blank placeholder line first."""
    day = timesheet.day_for(target)
    if day is None:
        raise ValueError(f"{target.isoformat()} is not in the period ending {timesheet.period_ending}")
    blanks = [i for i, existing in enumerate(day.lines) if not existing.start_time and not existing.finish_time]
    if blanks:
        day.lines[blanks[0]] = line
    else:
        day.lines.append(line)


def remove_line(timesheet: Timesheet, target: date, index: int, lunch_default_minutes: int = 30) -> None:
    """Remove a line; a day is never left without a line to fill in."""
    day = timesheet.day_for(target)
    if day is None or not 0 <= index < len(day.lines):
        raise ValueError(f"No line {index} on {target.isoformat()}")
    del day.lines[index]
    if not day.lines:
        day.lines.append(TimesheetLine(lunch_minutes=lunch_default_minutes))
