"""Task list pipeline: filter, sort, then group into display sections.

Pure functions - no I/O. Inputs are never mutated.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from enum import Enum

from .tasks import Priority, Task, TaskStatus, utcnow
from .timing import UPCOMING_DAYS, is_due_today, is_overdue, is_upcoming

PRIORITY_RANK = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}

_NO_DUE = datetime.max.replace(tzinfo=timezone.utc)
_NO_CREATED = datetime.min.replace(tzinfo=timezone.utc)


class SortKey(Enum):
    """Sort orders offered by the task list."""

    DUE = "due_at"
    PRIORITY = "priority"
    CREATED = "created_at"


class Section(Enum):
    """Display buckets, in display order."""

    OVERDUE = "Overdue"
    TODAY = "Today"
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"
    OTHER = "Other"


@dataclass
class TaskFilter:
    """User-selected predicates. Empty values match every task."""

    search: str = ""
    status: TaskStatus | None = None
    category_id: str | None = None
    priority: Priority | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.search or self.status or self.category_id or self.priority)

    def matches(self, task: Task) -> bool:
        if self.search and self.search.lower() not in task.title.lower():
            return False
        if self.status and task.status != self.status:
            return False
        if self.category_id and task.category_id != self.category_id:
            return False
        if self.priority and task.priority != self.priority:
            return False
        return True


def filter_tasks(tasks: list[Task], criteria: TaskFilter | None = None) -> list[Task]:
    """Keep tasks matching every active predicate, in input order."""
    if criteria is None or criteria.is_empty:
        return list(tasks)
    return [t for t in tasks if criteria.matches(t)]


def priority_rank(task: Task) -> int:
    return PRIORITY_RANK.get(task.priority, PRIORITY_RANK[Priority.MEDIUM])


def sort_tasks(tasks: list[Task], key: SortKey = SortKey.DUE) -> list[Task]:
    """
    Order tasks by a single key. Stable, so ties keep their input order.

    DUE: ascending, tasks without a due date last.
    PRIORITY: Urgent first, Low last.
    CREATED: newest first.
    """
    if key == SortKey.PRIORITY:
        return sorted(tasks, key=priority_rank)
    if key == SortKey.CREATED:
        return sorted(tasks, key=lambda t: t.created_at or _NO_CREATED, reverse=True)
    return sorted(tasks, key=lambda t: t.due_at or _NO_DUE)


def section_for(
    task: Task,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    upcoming_days: int = UPCOMING_DAYS,
) -> Section:
    """Bucket a single task. First match wins."""
    now = now or utcnow()
    if task.is_closed:
        return Section.COMPLETED
    if is_overdue(task, now):
        return Section.OVERDUE
    if is_due_today(task, now, tz):
        return Section.TODAY
    if is_upcoming(task, now, tz, upcoming_days):
        return Section.UPCOMING
    return Section.OTHER


def group_by_section(
    tasks: list[Task],
    now: datetime | None = None,
    tz: tzinfo | None = None,
    upcoming_days: int = UPCOMING_DAYS,
) -> dict[Section, list[Task]]:
    """
    Partition tasks into every section, preserving relative order.

    Keys follow display order; every task lands in exactly one section.
    """
    now = now or utcnow()
    sections: dict[Section, list[Task]] = {s: [] for s in Section}
    for task in tasks:
        sections[section_for(task, now, tz, upcoming_days)].append(task)
    return sections


def visible_sections(sections: dict[Section, list[Task]]) -> list[tuple[Section, list[Task]]]:
    """Sections with at least one task, in display order."""
    return [(s, sections[s]) for s in Section if sections.get(s)]


def build_task_list(
    tasks: list[Task],
    criteria: TaskFilter | None = None,
    sort_key: SortKey = SortKey.DUE,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    upcoming_days: int = UPCOMING_DAYS,
) -> list[tuple[Section, list[Task]]]:
    """Filter, sort and group tasks for the list view."""
    ordered = sort_tasks(filter_tasks(tasks, criteria), sort_key)
    return visible_sections(group_by_section(ordered, now, tz, upcoming_days))
