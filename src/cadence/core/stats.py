"""Dashboard summary counters over the full task collection."""

import math
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from .tasks import Priority, Task, TaskStatus, utcnow
from .timing import is_due_today, is_overdue


def percent(part: int, whole: int) -> int:
    """Rounded percentage (half up), 0 for an empty whole."""
    if whole <= 0:
        return 0
    return math.floor(100 * part / whole + 0.5)


@dataclass
class TaskStats:
    """Summary counts for dashboard cards."""

    total: int = 0
    by_status: dict[TaskStatus, int] = field(default_factory=lambda: {s: 0 for s in TaskStatus})
    overdue: int = 0
    due_today: int = 0
    high_priority_open: int = 0

    @property
    def completed(self) -> int:
        return self.by_status[TaskStatus.DONE]

    @property
    def completion_rate(self) -> int:
        return percent(self.completed, self.total)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "by_status": {s.value: n for s, n in self.by_status.items()},
            "overdue": self.overdue,
            "due_today": self.due_today,
            "high_priority_open": self.high_priority_open,
            "completion_rate": self.completion_rate,
        }


def compute_stats(
    tasks: list[Task],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> TaskStats:
    """
    Count tasks for the summary view.

    Always given the unfiltered collection; search and filter state do not apply.
    """
    now = now or utcnow()
    stats = TaskStats(total=len(tasks))
    for task in tasks:
        stats.by_status[task.status] += 1
        if is_overdue(task, now):
            stats.overdue += 1
        if is_due_today(task, now, tz):
            stats.due_today += 1
        if task.priority in (Priority.HIGH, Priority.URGENT) and not task.is_done:
            stats.high_priority_open += 1
    return stats
