"""Pure dashboard aggregation - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .models import DailyLog, IncompleteItems, Material, MaterialStatus, Project, WorkActivity
from .priority import Priority, classify, sort_by_priority


@dataclass
class OutstandingItem:
    """An incomplete activity, material, equipment check or crew task."""

    kind: str
    id: str
    title: str
    due_date: date | None
    project_name: str
    job_number: str
    priority: Priority

    @property
    def kind_label(self) -> str:
        return self.kind.capitalize()


@dataclass
class DashboardStats:
    active_projects: int
    total_logs: int
    high_priority_logs: int
    safety_incidents: int
    overdue_activities: int
    overdue_materials: int
    pending_materials: int

    @property
    def total_overdue(self) -> int:
        return self.overdue_activities + self.overdue_materials


def collect_outstanding(items: IncompleteItems, as_of: date | None = None) -> list[OutstandingItem]:
    """
    Flatten incomplete items into a single list, high priority first.

    Pure function - no I/O. Materials are classified on their required date.
    """
    as_of = as_of or date.today()

    def project_of(daily_log_id: str) -> tuple[str, str]:
        log = items.logs.get(daily_log_id)
        if log is None or log.project is None:
            return "Unknown", ""
        return log.project.name or "Unknown", log.project.job_number

    flat = []
    rows = (
        [("activity", a.id, a.description, a.due_date, a.daily_log_id) for a in items.activities]
        + [("material", m.id, m.description, m.required_date, m.daily_log_id) for m in items.materials]
        + [("equipment", e.id, e.equipment_name, e.due_date, e.daily_log_id) for e in items.equipment]
        + [("crew", c.id, c.worker_name, c.due_date, c.daily_log_id) for c in items.crew]
    )
    for kind, item_id, title, due, log_id in rows:
        project_name, job_number = project_of(log_id)
        flat.append(
            OutstandingItem(
                kind=kind,
                id=item_id,
                title=title,
                due_date=due,
                project_name=project_name,
                job_number=job_number,
                priority=classify(due, as_of),
            )
        )

    return sort_by_priority(flat, key=lambda i: i.priority)


def filter_by_priority(items: list[OutstandingItem], priority: Priority | None) -> list[OutstandingItem]:
    """Keep one tier, or everything when priority is None."""
    if priority is None:
        return list(items)
    return [i for i in items if i.priority == priority]


def compute_stats(
    projects: list[Project],
    logs: list[DailyLog],
    activities: list[WorkActivity],
    materials: list[Material],
    as_of: date | None = None,
) -> DashboardStats:
    """
    Headline counts for the dashboard.

    Pure function - no I/O. Overdue means incomplete and due strictly
    before as_of.
    """
    as_of = as_of or date.today()
    return DashboardStats(
        active_projects=sum(1 for p in projects if p.is_active),
        total_logs=len(logs),
        high_priority_logs=sum(1 for log in logs if log.priority == Priority.HIGH),
        safety_incidents=sum(1 for log in logs if log.has_safety_incident),
        overdue_activities=sum(
            1 for a in activities if not a.is_completed and a.due_date and a.due_date < as_of
        ),
        overdue_materials=sum(
            1 for m in materials if not m.is_completed and m.required_date and m.required_date < as_of
        ),
        pending_materials=sum(1 for m in materials if m.status == MaterialStatus.PENDING),
    )


def format_item_line(item: OutstandingItem, as_of: date | None = None) -> str:
    """
    Format a single outstanding item for display.

    Pure function - no I/O.
    """
    as_of = as_of or date.today()
    urgency = "no due date"
    if item.due_date:
        days = (item.due_date - as_of).days
        if days < 0:
            urgency = f"OVERDUE by {-days}d"
        elif days == 0:
            urgency = "due TODAY"
        else:
            urgency = f"due in {days}d"

    job = f" #{item.job_number}" if item.job_number else ""
    return f"- [{item.priority.label}] {item.kind_label}: {item.title} ({urgency}, {item.project_name}{job})"
