"""Tests for time classification."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from cadence.core.tasks import TaskStatus
from cadence.core.timing import (
    TimeState,
    classify,
    is_due_soon,
    is_due_today,
    is_overdue,
    is_upcoming,
)

UTC = timezone.utc


class TestOverdueAndDueSoon:
    def test_past_due_is_overdue(self, make_task, now):
        task = make_task(due_at=now - timedelta(hours=1))
        assert is_overdue(task, now) is True
        assert is_due_soon(task, now) is False

    @pytest.mark.parametrize("status", [TaskStatus.DONE, TaskStatus.CANCELLED])
    def test_closed_tasks_never_overdue_or_due_soon(self, make_task, now, status):
        for offset in (timedelta(days=-3), timedelta(0), timedelta(hours=1)):
            task = make_task(status=status, due_at=now + offset)
            assert is_overdue(task, now) is False
            assert is_due_soon(task, now) is False

    def test_due_exactly_now_is_due_soon_not_overdue(self, make_task, now):
        task = make_task(due_at=now)
        assert is_overdue(task, now) is False
        assert is_due_soon(task, now) is True

    def test_due_soon_upper_bound_inclusive(self, make_task, now):
        assert is_due_soon(make_task(due_at=now + timedelta(hours=2)), now) is True

    def test_beyond_window_not_due_soon(self, make_task, now):
        assert is_due_soon(make_task(due_at=now + timedelta(hours=2, seconds=1)), now) is False

    def test_custom_window(self, make_task, now):
        task = make_task(due_at=now + timedelta(hours=3))
        assert is_due_soon(task, now, window=timedelta(hours=4)) is True

    def test_no_due_date(self, make_task, now):
        task = make_task()
        assert is_overdue(task, now) is False
        assert is_due_soon(task, now) is False


class TestDueToday:
    def test_later_today(self, make_task, now):
        assert is_due_today(make_task(due_at=now + timedelta(hours=6)), now, UTC) is True

    @pytest.mark.parametrize("status", [TaskStatus.DONE, TaskStatus.CANCELLED])
    def test_closed_excluded(self, make_task, now, status):
        assert is_due_today(make_task(status=status, due_at=now + timedelta(hours=1)), now, UTC) is False

    def test_tomorrow(self, make_task, now):
        assert is_due_today(make_task(due_at=now + timedelta(days=1)), now, UTC) is False

    def test_uses_display_timezone(self, make_task):
        toronto = ZoneInfo("America/Toronto")
        now = datetime(2025, 1, 15, 3, 0, tzinfo=UTC)  # Jan 14, 22:00 in Toronto
        task = make_task(due_at=datetime(2025, 1, 15, 6, 0, tzinfo=UTC))  # Jan 15, 01:00 in Toronto

        assert is_due_today(task, now, UTC) is True
        assert is_due_today(task, now, toronto) is False
        assert is_upcoming(task, now, toronto) is True


class TestUpcoming:
    @pytest.mark.parametrize("days", [1, 3, 7])
    def test_within_week(self, make_task, now, days):
        assert is_upcoming(make_task(due_at=now + timedelta(days=days)), now, UTC) is True

    def test_seventh_day_late_evening_still_upcoming(self, make_task, now):
        due = (now + timedelta(days=7)).replace(hour=23, minute=59)
        assert is_upcoming(make_task(due_at=due), now, UTC) is True

    def test_eighth_day(self, make_task, now):
        assert is_upcoming(make_task(due_at=now + timedelta(days=8)), now, UTC) is False

    def test_today_is_not_upcoming(self, make_task, now):
        assert is_upcoming(make_task(due_at=now + timedelta(hours=1)), now, UTC) is False


class TestClassify:
    def test_states(self, make_task, now):
        cases = [
            (now - timedelta(minutes=1), TimeState.OVERDUE),
            (now + timedelta(hours=1), TimeState.DUE_SOON),
            (now + timedelta(hours=5), TimeState.DUE_TODAY),
            (now + timedelta(days=2), TimeState.UPCOMING),
            (now + timedelta(days=30), TimeState.NONE),
            (None, TimeState.NONE),
        ]
        for due, expected in cases:
            assert classify(make_task(due_at=due), now, UTC) == expected, due

    def test_done_task_due_earlier_today(self, make_task, now):
        task = make_task(status=TaskStatus.DONE, due_at=now - timedelta(hours=1))
        assert classify(task, now, UTC) == TimeState.NONE
