"""Pure task domain logic - no I/O dependencies."""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when user input is rejected before reaching the store."""

    pass


class TaskStatus(Enum):
    """Task lifecycle status."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"
    CANCELLED = "Cancelled"


class Priority(Enum):
    """Task priority."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class SyncState(Enum):
    """Whether a record is confirmed by the store or only held locally."""

    CONFIRMED = "confirmed"
    PENDING = "pending"  # Store write failed, record exists only on this device


CLOSED_STATUSES = frozenset({TaskStatus.DONE, TaskStatus.CANCELLED})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_instant(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive values are taken to be UTC, which is how the store writes them.
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_instant(value: datetime | None) -> str | None:
    return value.astimezone(timezone.utc).isoformat() if value else None


def build_due_at(
    day: date | None,
    at: time | None = None,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> datetime | None:
    """
    Combine a local calendar date and time of day into a UTC instant.

    A missing time of day defaults to the current local time (minute precision).
    """
    if day is None:
        return None
    if at is None:
        local_now = (now or utcnow()).astimezone(tz)
        at = time(local_now.hour, local_now.minute)
    local = datetime.combine(day, at)
    local = local.replace(tzinfo=tz) if tz else local.astimezone()
    return local.astimezone(timezone.utc)


def _coerce_status(value: str | None) -> TaskStatus:
    try:
        return TaskStatus(value or TaskStatus.TODO.value)
    except ValueError:
        logger.warning(f"Unknown task status {value!r}, treating as To Do")
        return TaskStatus.TODO


def _coerce_priority(value: str | None) -> Priority:
    try:
        return Priority(value or Priority.MEDIUM.value)
    except ValueError:
        logger.warning(f"Unknown task priority {value!r}, treating as Medium")
        return Priority.MEDIUM


@dataclass
class Task:
    """A unit of work owned by one user."""

    id: str
    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due_at: datetime | None = None
    description: str | None = None
    category_id: str | None = None
    project_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None
    owner_id: str = ""
    sync: SyncState = SyncState.CONFIRMED

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    @property
    def is_closed(self) -> bool:
        """Done or Cancelled."""
        return self.status in CLOSED_STATUSES

    @property
    def is_pending_sync(self) -> bool:
        return self.sync == SyncState.PENDING

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a store row."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            status=_coerce_status(data.get("status")),
            priority=_coerce_priority(data.get("priority")),
            due_at=parse_instant(data.get("due_at")),
            description=data.get("description"),
            category_id=data.get("type_id"),
            project_id=data.get("project_id"),
            created_at=parse_instant(data.get("created_at")),
            updated_at=parse_instant(data.get("updated_at")),
            completed_at=parse_instant(data.get("completed_at")),
            owner_id=data.get("user_id", ""),
        )

    def to_record(self) -> dict:
        """Serialize to the store's row shape."""
        return {
            "id": self.id,
            "user_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "type_id": self.category_id,
            "project_id": self.project_id,
            "status": self.status.value,
            "priority": self.priority.value,
            "due_at": format_instant(self.due_at),
            "created_at": format_instant(self.created_at),
            "updated_at": format_instant(self.updated_at),
            "completed_at": format_instant(self.completed_at),
        }


@dataclass
class TaskDraft:
    """User input for a new task, or for the editable fields of an existing one."""

    title: str
    category_id: str | None = None
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due_at: datetime | None = None
    project_id: str | None = None

    def validate(self) -> None:
        """Reject drafts missing a title or category."""
        if not self.title.strip():
            raise ValidationError("Please enter a task title.")
        if not self.category_id:
            raise ValidationError("Please select a task type.")

    def to_payload(self, owner_id: str, now: datetime | None = None) -> dict:
        """Build the insert payload. Completion stamp follows the status."""
        now = now or utcnow()
        return {
            "user_id": owner_id,
            "title": self.title.strip(),
            "description": (self.description or "").strip() or None,
            "type_id": self.category_id,
            "project_id": self.project_id,
            "status": self.status.value,
            "priority": self.priority.value,
            "due_at": format_instant(self.due_at),
            "completed_at": format_instant(now) if self.status == TaskStatus.DONE else None,
            "created_at": format_instant(now),
            "updated_at": format_instant(now),
        }

    def to_local_task(self, owner_id: str, now: datetime | None = None) -> Task:
        """Synthesize a pending record for a draft the store did not accept."""
        now = now or utcnow()
        return Task(
            id=f"local-{uuid.uuid4().hex}",
            title=self.title.strip(),
            status=self.status,
            priority=self.priority,
            due_at=self.due_at,
            description=(self.description or "").strip() or None,
            category_id=self.category_id,
            project_id=self.project_id,
            created_at=now,
            updated_at=now,
            completed_at=now if self.status == TaskStatus.DONE else None,
            owner_id=owner_id,
            sync=SyncState.PENDING,
        )


def transition_status(task: Task, status: TaskStatus, now: datetime | None = None) -> Task:
    """
    Move a task to `status`, keeping the completion stamp consistent.

    Entering Done stamps completed_at (an already-Done task keeps its stamp);
    leaving Done clears it. Every status change goes through here.
    """
    now = now or utcnow()
    if status == TaskStatus.DONE:
        completed_at = task.completed_at if task.is_done and task.completed_at else now
    else:
        completed_at = None
    return replace(task, status=status, completed_at=completed_at, updated_at=now)


def toggle_complete(task: Task, now: datetime | None = None) -> Task:
    """Done goes back to To Do; anything else becomes Done."""
    target = TaskStatus.TODO if task.is_done else TaskStatus.DONE
    return transition_status(task, target, now)


def apply_edit(task: Task, draft: TaskDraft, now: datetime | None = None) -> Task:
    """Apply edited fields to a task. Status changes go through transition_status."""
    draft.validate()
    now = now or utcnow()
    edited = replace(
        task,
        title=draft.title.strip(),
        description=(draft.description or "").strip() or None,
        category_id=draft.category_id,
        project_id=draft.project_id,
        priority=draft.priority,
        due_at=draft.due_at,
        updated_at=now,
    )
    if draft.status != task.status:
        return transition_status(edited, draft.status, now)
    return edited


def changes_between(before: Task, after: Task) -> dict:
    """Store update payload for the fields that differ between two versions."""
    old, new = before.to_record(), after.to_record()
    changes = {k: v for k, v in new.items() if k not in ("id", "user_id", "created_at") and old[k] != v}
    changes["updated_at"] = new["updated_at"]
    return changes


def duplicate_draft(task: Task) -> TaskDraft:
    """Clone a task's fields into a new To Do draft."""
    return TaskDraft(
        title=f"{task.title} (copy)",
        category_id=task.category_id,
        description=task.description,
        status=TaskStatus.TODO,
        priority=task.priority,
        due_at=task.due_at,
        project_id=task.project_id,
    )
