"""Site record types - pure data, converted from backend rows."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .priority import DateParseError, Priority, parse_due_date


class ProjectStatus(Enum):
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"


class MaterialStatus(Enum):
    PENDING = "pending"
    ORDERED = "ordered"
    IN_TRANSIT = "in-transit"
    DELIVERED = "delivered"


class EquipmentCondition(Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    NEEDS_REPAIR = "needs-repair"


class NoteType(Enum):
    NOTE = "note"
    REMINDER = "reminder"
    MEETING = "meeting"
    DEADLINE = "deadline"
    INSPECTION = "inspection"
    DELIVERY = "delivery"

    @property
    def label(self) -> str:
        return _NOTE_LABELS[self]


_NOTE_LABELS = {
    NoteType.NOTE: "General Note",
    NoteType.REMINDER: "Reminder",
    NoteType.MEETING: "Meeting",
    NoteType.DEADLINE: "Deadline",
    NoteType.INSPECTION: "Inspection",
    NoteType.DELIVERY: "Delivery",
}

# Timesheet analysis codes (code -> label)
ANALYSIS_CODES = {
    "101": "Suspended Ceilings / 2-way",
    "102": "Rondo Ceilings",
    "103": "Partition Walls",
    "104": "Aluminium",
    "105": "Plasterboard / Linings",
    "106": "Stopping",
    "107": "Insulation",
    "108": "Carpentry",
    "109": "Other",
    "110": "Carpet",
    "111": "FIRE RATING",
    "115": "Timber Partitions",
    "ACCOM": "Accommodation Allowance",
    "Other": "Other (please specify)",
    "P&G": "Preliminary and General",
    "P&Gs": "P&G Supervision",
    "P&Gt": "P&G Travel",
    "R/M": "Repairs and Maintenance",
    "Safety": "Safety Equipment",
    "Staff": "Staff Purchases on Company account",
    "Tools": "Tools",
    "training": "Staff Training",
}

WEATHER_OPTIONS = [
    "Clear",
    "Partly Cloudy",
    "Overcast",
    "Light Rain",
    "Heavy Rain",
    "Wind",
    "Storm",
    "Snow",
    "Fog",
    "Hot",
    "Cold",
]


def _enum(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass
class Project:
    """A construction job."""

    id: str
    name: str
    job_number: str = ""
    location: str = ""
    client: str = ""
    status: ProjectStatus | None = ProjectStatus.ACTIVE
    start_date: date | None = None
    end_date: date | None = None

    @property
    def is_active(self) -> bool:
        return self.status == ProjectStatus.ACTIVE

    @classmethod
    def from_api(cls, data: dict) -> "Project":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            job_number=data.get("job_number") or "",
            location=data.get("location") or "",
            client=data.get("client") or "",
            status=_enum(ProjectStatus, data.get("status"), None),
            start_date=parse_due_date(data.get("start_date")),
            end_date=parse_due_date(data.get("end_date")),
        )


@dataclass
class DailyLog:
    """One day's site record for a project."""

    id: str
    project_id: str
    log_date: date
    weather: str = ""
    temperature: str = ""
    wind: str = ""
    site_conditions: str = ""
    safety_incidents: str = ""
    critical_items: str = ""
    priority: Priority = Priority.LOW
    notes: str = ""
    is_completed: bool = False
    project: Project | None = None

    @property
    def has_safety_incident(self) -> bool:
        return bool(self.safety_incidents.strip())

    @property
    def has_critical_items(self) -> bool:
        return bool(self.critical_items.strip())

    @classmethod
    def from_api(cls, data: dict) -> "DailyLog":
        """Create from a row, with the project embedded under "projects"."""
        project = data.get("projects")
        log_date = parse_due_date(data.get("log_date"))
        if log_date is None:
            raise DateParseError(f"Daily log {data['id']} has no log_date")
        return cls(
            id=data["id"],
            project_id=data.get("project_id") or "",
            log_date=log_date,
            weather=data.get("weather") or "",
            temperature=data.get("temperature") or "",
            wind=data.get("wind") or "",
            site_conditions=data.get("site_conditions") or "",
            safety_incidents=data.get("safety_incidents") or "",
            critical_items=data.get("critical_items") or "",
            priority=_enum(Priority, data.get("priority"), Priority.LOW),
            notes=data.get("notes") or "",
            is_completed=bool(data.get("is_completed")),
            project=Project.from_api(project) if project else None,
        )


@dataclass
class CrewAttendance:
    id: str
    daily_log_id: str
    worker_name: str
    trade: str = ""
    start_time: str = ""
    finish_time: str = ""
    lunch_minutes: int = 0
    hours_worked: float = 0.0
    due_date: date | None = None
    is_completed: bool = False
    notes: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "CrewAttendance":
        return cls(
            id=data["id"],
            daily_log_id=data.get("daily_log_id") or "",
            worker_name=data.get("worker_name") or "",
            trade=data.get("trade") or "",
            start_time=data.get("start_time") or "",
            finish_time=data.get("finish_time") or "",
            lunch_minutes=int(data.get("lunch_minutes") or 0),
            hours_worked=float(data.get("hours_worked") or 0),
            due_date=parse_due_date(data.get("due_date")),
            is_completed=bool(data.get("is_completed")),
            notes=data.get("notes") or "",
        )


@dataclass
class WorkActivity:
    id: str
    daily_log_id: str
    description: str
    location: str = ""
    trade: str = ""
    progress_pct: int = 0
    due_date: date | None = None
    is_completed: bool = False
    notes: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "WorkActivity":
        return cls(
            id=data["id"],
            daily_log_id=data.get("daily_log_id") or "",
            description=data.get("description") or "",
            location=data.get("location") or "",
            trade=data.get("trade") or "",
            progress_pct=int(data.get("progress_pct") or 0),
            due_date=parse_due_date(data.get("due_date")),
            is_completed=bool(data.get("is_completed")),
            notes=data.get("notes") or "",
        )


@dataclass
class Material:
    id: str
    daily_log_id: str
    description: str
    quantity: str = ""
    unit: str = ""
    supplier: str = ""
    required_date: date | None = None
    status: MaterialStatus = MaterialStatus.PENDING
    is_completed: bool = False
    notes: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "Material":
        return cls(
            id=data["id"],
            daily_log_id=data.get("daily_log_id") or "",
            description=data.get("description") or "",
            quantity=str(data.get("quantity") or ""),
            unit=data.get("unit") or "",
            supplier=data.get("supplier") or "",
            required_date=parse_due_date(data.get("required_date")),
            status=_enum(MaterialStatus, data.get("status"), MaterialStatus.PENDING),
            is_completed=bool(data.get("is_completed")),
            notes=data.get("notes") or "",
        )


@dataclass
class EquipmentLog:
    id: str
    daily_log_id: str
    equipment_name: str
    equipment_type: str = ""
    hours_used: float = 0.0
    condition: EquipmentCondition = EquipmentCondition.GOOD
    due_date: date | None = None
    is_completed: bool = False
    notes: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "EquipmentLog":
        return cls(
            id=data["id"],
            daily_log_id=data.get("daily_log_id") or "",
            equipment_name=data.get("equipment_name") or "",
            equipment_type=data.get("equipment_type") or "",
            hours_used=float(data.get("hours_used") or 0),
            condition=_enum(EquipmentCondition, data.get("condition"), EquipmentCondition.GOOD),
            due_date=parse_due_date(data.get("due_date")),
            is_completed=bool(data.get("is_completed")),
            notes=data.get("notes") or "",
        )


@dataclass
class Visitor:
    id: str
    daily_log_id: str
    visitor_name: str
    company: str = ""
    purpose: str = ""
    time_in: str = ""
    time_out: str = ""
    due_date: date | None = None
    is_completed: bool = False
    notes: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "Visitor":
        return cls(
            id=data["id"],
            daily_log_id=data.get("daily_log_id") or "",
            visitor_name=data.get("visitor_name") or "",
            company=data.get("company") or "",
            purpose=data.get("purpose") or "",
            time_in=data.get("time_in") or "",
            time_out=data.get("time_out") or "",
            due_date=parse_due_date(data.get("due_date")),
            is_completed=bool(data.get("is_completed")),
            notes=data.get("notes") or "",
        )


@dataclass
class CalendarNote:
    """A note, reminder or scheduled site event on a calendar day."""

    id: str
    note_date: date
    title: str
    description: str = ""
    note_type: NoteType = NoteType.NOTE
    priority: Priority = Priority.LOW
    project_id: str | None = None
    is_completed: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "CalendarNote":
        return cls(
            id=data["id"],
            note_date=parse_due_date(data["note_date"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            note_type=_enum(NoteType, data.get("note_type"), NoteType.NOTE),
            priority=_enum(Priority, data.get("priority"), Priority.LOW),
            project_id=data.get("project_id") or None,
            is_completed=bool(data.get("is_completed")),
        )


@dataclass
class IncompleteItems:
    """Incomplete rows across the daily-log child tables, with their logs."""

    activities: list[WorkActivity] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)
    equipment: list[EquipmentLog] = field(default_factory=list)
    crew: list[CrewAttendance] = field(default_factory=list)
    logs: dict[str, DailyLog] = field(default_factory=dict)
