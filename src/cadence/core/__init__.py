"""Functional core - pure business logic with no I/O."""

from .tasks import (
    Priority,
    SyncState,
    Task,
    TaskDraft,
    TaskStatus,
    ValidationError,
    transition_status,
    toggle_complete,
)
from .timing import TimeState, classify, is_due_soon, is_due_today, is_overdue, is_upcoming
from .listing import Section, SortKey, TaskFilter, build_task_list, filter_tasks, group_by_section, sort_tasks
from .stats import TaskStats, compute_stats
from .categories import Category, CategoryStatus
from .projects import Project, ProjectStatus

__all__ = [
    # Tasks
    "Priority",
    "SyncState",
    "Task",
    "TaskDraft",
    "TaskStatus",
    "ValidationError",
    "transition_status",
    "toggle_complete",
    # Timing
    "TimeState",
    "classify",
    "is_due_soon",
    "is_due_today",
    "is_overdue",
    "is_upcoming",
    # Listing
    "Section",
    "SortKey",
    "TaskFilter",
    "build_task_list",
    "filter_tasks",
    "group_by_section",
    "sort_tasks",
    # Stats
    "TaskStats",
    "compute_stats",
    # Categories and projects
    "Category",
    "CategoryStatus",
    "Project",
    "ProjectStatus",
]
