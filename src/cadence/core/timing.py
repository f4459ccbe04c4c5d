"""Time classification of tasks relative to the current instant.

Pure functions of (task, now). Calendar-date comparisons are made in the
display timezone `tz`; None means the system local zone.
"""

from datetime import date, datetime, timedelta, tzinfo
from enum import Enum

from .tasks import Task, utcnow

DUE_SOON_WINDOW = timedelta(hours=2)
UPCOMING_DAYS = 7


class TimeState(Enum):
    """Temporal state of a task, most pressing first."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    DUE_TODAY = "due_today"
    UPCOMING = "upcoming"
    NONE = "none"  # No due date, or due beyond the upcoming window


def local_date(instant: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of an instant in the display timezone."""
    return instant.astimezone(tz).date()


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """Open task whose due instant is strictly in the past."""
    if not task.due_at or task.is_closed:
        return False
    now = now or utcnow()
    return task.due_at < now


def is_due_soon(
    task: Task,
    now: datetime | None = None,
    window: timedelta = DUE_SOON_WINDOW,
) -> bool:
    """Open, not overdue, and due no later than `window` from now."""
    if not task.due_at or task.is_closed:
        return False
    now = now or utcnow()
    if is_overdue(task, now):
        return False
    return task.due_at <= now + window


def is_due_today(task: Task, now: datetime | None = None, tz: tzinfo | None = None) -> bool:
    """Open task whose due date is today's date."""
    if not task.due_at or task.is_closed:
        return False
    now = now or utcnow()
    return local_date(task.due_at, tz) == local_date(now, tz)


def is_upcoming(
    task: Task,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    days: int = UPCOMING_DAYS,
) -> bool:
    """Due date after today and no more than `days` calendar days out."""
    if not task.due_at:
        return False
    now = now or utcnow()
    today = local_date(now, tz)
    due = local_date(task.due_at, tz)
    return today < due <= today + timedelta(days=days)


def classify(
    task: Task,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    window: timedelta = DUE_SOON_WINDOW,
    days: int = UPCOMING_DAYS,
) -> TimeState:
    """First matching state in OVERDUE, DUE_SOON, DUE_TODAY, UPCOMING order."""
    now = now or utcnow()
    if is_overdue(task, now):
        return TimeState.OVERDUE
    if is_due_soon(task, now, window):
        return TimeState.DUE_SOON
    if is_due_today(task, now, tz):
        return TimeState.DUE_TODAY
    if is_upcoming(task, now, tz, days):
        return TimeState.UPCOMING
    return TimeState.NONE
