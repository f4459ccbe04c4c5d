"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from cadence.core.tasks import Task


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_task(now):
    """Factory for creating tasks."""
    counter = iter(range(1, 10_000))

    def _make(title: str = "Task", **kwargs) -> Task:
        kwargs.setdefault("id", f"t{next(counter)}")
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        return Task(title=title, **kwargs)

    return _make
