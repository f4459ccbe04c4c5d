"""Projects and derived progress."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .stats import percent
from .tasks import TaskStatus, ValidationError, parse_instant

logger = logging.getLogger(__name__)


class ProjectStatus(Enum):
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    ARCHIVED = "Archived"


def _coerce_status(value: str | None) -> ProjectStatus:
    try:
        return ProjectStatus(value or ProjectStatus.ACTIVE.value)
    except ValueError:
        logger.warning(f"Unknown project status {value!r}, treating as Active")
        return ProjectStatus.ACTIVE


@dataclass
class Project:
    """A container for tasks. Progress is derived from linked task statuses."""

    id: str
    name: str
    category_id: str | None = None
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: date | None = None
    target_end_date: date | None = None
    created_at: datetime | None = None
    task_statuses: list[TaskStatus] = field(default_factory=list)

    @property
    def task_count(self) -> int:
        return len(self.task_statuses)

    @property
    def completed_count(self) -> int:
        return sum(1 for s in self.task_statuses if s == TaskStatus.DONE)

    @property
    def progress(self) -> int:
        """Completed share of linked tasks as a rounded percentage."""
        return percent(self.completed_count, self.task_count)

    @classmethod
    def from_api(cls, data: dict) -> "Project":
        """Create Project from a store row, optionally embedding `tasks(id, status)`."""
        statuses = []
        for row in data.get("tasks") or []:
            try:
                statuses.append(TaskStatus(row.get("status")))
            except ValueError:
                statuses.append(TaskStatus.TODO)
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category_id=data.get("type_id"),
            description=data.get("description"),
            status=_coerce_status(data.get("status")),
            start_date=date.fromisoformat(data["start_date"]) if data.get("start_date") else None,
            target_end_date=(
                date.fromisoformat(data["target_end_date"]) if data.get("target_end_date") else None
            ),
            created_at=parse_instant(data.get("created_at")),
            task_statuses=statuses,
        )


def project_payload(
    name: str,
    category_id: str | None,
    description: str | None = None,
    status: ProjectStatus = ProjectStatus.ACTIVE,
    start_date: date | None = None,
    target_end_date: date | None = None,
) -> dict:
    """Validated insert/update fields for a project."""
    if not name.strip():
        raise ValidationError("Project name is required")
    if not category_id:
        raise ValidationError("Please select a project type")
    return {
        "name": name.strip(),
        "description": (description or "").strip() or None,
        "type_id": category_id,
        "status": status.value,
        "start_date": start_date.isoformat() if start_date else None,
        "target_end_date": target_end_date.isoformat() if target_end_date else None,
    }


def filter_projects(
    projects: list[Project],
    search: str = "",
    status: ProjectStatus | None = None,
) -> list[Project]:
    """
    Search by name and filter by status.

    Without a status filter, archived projects are hidden.
    """
    search = search.lower()
    result = []
    for p in projects:
        if search and search not in p.name.lower():
            continue
        if status is not None:
            if p.status != status:
                continue
        elif p.status == ProjectStatus.ARCHIVED:
            continue
        result.append(p)
    return result
