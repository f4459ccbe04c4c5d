"""Pure calendar view logic - no I/O dependencies."""

import calendar as _calendar
from datetime import date, datetime, timedelta, tzinfo

from .tasks import Task, utcnow
from .timing import DUE_SOON_WINDOW, is_due_soon, is_overdue, local_date

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def tasks_on(tasks: list[Task], day: date, tz: tzinfo | None = None) -> list[Task]:
    """Tasks whose due date falls on `day`, in input order."""
    return [t for t in tasks if t.due_at and local_date(t.due_at, tz) == day]


def day_agenda(tasks: list[Task], day: date, tz: tzinfo | None = None) -> list[Task]:
    """Tasks due on `day`, earliest first."""
    return sorted(tasks_on(tasks, day, tz), key=lambda t: t.due_at)


def week_of(day: date) -> list[date]:
    """The Monday-to-Sunday week containing `day`."""
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def month_grid(year: int, month: int) -> list[date | None]:
    """
    Cells for a month view with weeks starting on Sunday.

    Leading None cells pad the first week up to the month's first weekday.
    """
    first_weekday, days_in_month = _calendar.monthrange(year, month)
    # monthrange counts Monday as 0; the grid starts on Sunday
    leading = (first_weekday + 1) % 7
    cells: list[date | None] = [None] * leading
    cells.extend(date(year, month, d) for d in range(1, days_in_month + 1))
    return cells


def shift_month(day: date, months: int) -> date:
    """First day of the month `months` away from `day`'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def badge(
    task: Task,
    now: datetime | None = None,
    window: timedelta = DUE_SOON_WINDOW,
) -> str | None:
    """Calendar pill marker: overdue wins over due soon."""
    now = now or utcnow()
    if is_overdue(task, now):
        return "overdue"
    if is_due_soon(task, now, window):
        return "due-soon"
    return None
