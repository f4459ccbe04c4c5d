"""Tests for the task list pipeline."""

from datetime import datetime, timedelta, timezone

import pytest

from cadence.core.listing import (
    Section,
    SortKey,
    TaskFilter,
    build_task_list,
    filter_tasks,
    group_by_section,
    section_for,
    sort_tasks,
    visible_sections,
)
from cadence.core.tasks import Priority, TaskStatus

UTC = timezone.utc


@pytest.fixture
def sample_tasks(make_task, now):
    """Sample tasks covering every section."""
    return [
        make_task("Pay rent", due_at=now - timedelta(hours=1), priority=Priority.URGENT, category_id="home"),
        make_task("Standup notes", due_at=now + timedelta(hours=4), category_id="work"),
        make_task("Dentist", due_at=now + timedelta(days=3), priority=Priority.LOW, category_id="home"),
        make_task("Read book", category_id="home"),
        make_task("Plan trip", due_at=now + timedelta(days=20), category_id="home"),
        make_task("Ship release", status=TaskStatus.DONE, completed_at=now, due_at=now - timedelta(days=1),
                  category_id="work"),
        make_task("Old idea", status=TaskStatus.CANCELLED, due_at=now + timedelta(hours=1), category_id="work"),
        make_task("Review PR", status=TaskStatus.IN_PROGRESS, priority=Priority.HIGH, category_id="work",
                  description="rent the projector"),
    ]


class TestFilterTasks:
    def test_empty_filter_returns_input_in_order(self, sample_tasks):
        result = filter_tasks(sample_tasks, TaskFilter())
        assert result == sample_tasks
        assert result is not sample_tasks

    def test_none_filter(self, sample_tasks):
        assert filter_tasks(sample_tasks) == sample_tasks

    def test_search_is_case_insensitive_on_title(self, sample_tasks):
        result = filter_tasks(sample_tasks, TaskFilter(search="RENT"))
        assert [t.title for t in result] == ["Pay rent"]

    def test_search_ignores_description(self, sample_tasks):
        result = filter_tasks(sample_tasks, TaskFilter(search="projector"))
        assert result == []

    def test_status(self, sample_tasks):
        result = filter_tasks(sample_tasks, TaskFilter(status=TaskStatus.DONE))
        assert [t.title for t in result] == ["Ship release"]

    def test_predicates_are_anded(self, sample_tasks):
        result = filter_tasks(sample_tasks, TaskFilter(category_id="home", priority=Priority.MEDIUM))
        assert [t.title for t in result] == ["Read book", "Plan trip"]

    def test_no_match(self, sample_tasks):
        assert filter_tasks(sample_tasks, TaskFilter(search="zzz", category_id="home")) == []


class TestSortTasks:
    def test_priority_rank(self, make_task):
        tasks = [
            make_task("Low", priority=Priority.LOW),
            make_task("Urgent", priority=Priority.URGENT),
            make_task("Medium", priority=Priority.MEDIUM),
        ]
        assert [t.title for t in sort_tasks(tasks, SortKey.PRIORITY)] == ["Urgent", "Medium", "Low"]

    def test_missing_priority_ranks_as_medium(self, make_task):
        tasks = [
            make_task("Low", priority=Priority.LOW),
            make_task("Unset", priority=None),
            make_task("High", priority=Priority.HIGH),
        ]
        assert [t.title for t in sort_tasks(tasks, SortKey.PRIORITY)] == ["High", "Unset", "Low"]

    def test_due_ascending_with_missing_last(self, make_task, now):
        tasks = [
            make_task("None"),
            make_task("Later", due_at=now + timedelta(days=400)),
            make_task("Sooner", due_at=now - timedelta(days=1)),
        ]
        assert [t.title for t in sort_tasks(tasks)] == ["Sooner", "Later", "None"]

    def test_due_is_default(self, sample_tasks):
        assert sort_tasks(sample_tasks) == sort_tasks(sample_tasks, SortKey.DUE)

    def test_created_descending(self, make_task, now):
        tasks = [
            make_task("Old", created_at=now - timedelta(days=2)),
            make_task("New", created_at=now),
            make_task("Mid", created_at=now - timedelta(days=1)),
        ]
        assert [t.title for t in sort_tasks(tasks, SortKey.CREATED)] == ["New", "Mid", "Old"]

    @pytest.mark.parametrize("key", list(SortKey))
    def test_ties_keep_input_order(self, make_task, now, key):
        tasks = [make_task(f"T{i}", due_at=now, created_at=now) for i in range(5)]
        assert sort_tasks(tasks, key) == tasks

    def test_input_not_mutated(self, sample_tasks):
        before = list(sample_tasks)
        sort_tasks(sample_tasks, SortKey.PRIORITY)
        assert sample_tasks == before


class TestGroupBySection:
    def test_every_task_in_exactly_one_section(self, sample_tasks, now):
        sections = group_by_section(sample_tasks, now, UTC)
        placed = [t.id for items in sections.values() for t in items]
        assert sorted(placed) == sorted(t.id for t in sample_tasks)
        assert len(placed) == len(set(placed))

    def test_assignment(self, sample_tasks, now):
        sections = group_by_section(sample_tasks, now, UTC)
        titles = {s: [t.title for t in items] for s, items in sections.items()}
        assert titles[Section.OVERDUE] == ["Pay rent"]
        assert titles[Section.TODAY] == ["Standup notes"]
        assert titles[Section.UPCOMING] == ["Dentist"]
        assert titles[Section.COMPLETED] == ["Ship release", "Old idea"]
        assert titles[Section.OTHER] == ["Read book", "Plan trip", "Review PR"]

    def test_overdue_today_goes_to_overdue_only(self, make_task, now):
        task = make_task(status=TaskStatus.TODO, due_at=now - timedelta(hours=1))
        sections = group_by_section([task], now, UTC)
        assert sections[Section.OVERDUE] == [task]
        assert sections[Section.TODAY] == []
        assert sections[Section.UPCOMING] == []

    def test_done_past_due_goes_to_completed(self, make_task, now):
        task = make_task(status=TaskStatus.DONE, completed_at=now, due_at=now - timedelta(hours=1))
        assert section_for(task, now, UTC) == Section.COMPLETED

    def test_due_now_is_today(self, make_task, now):
        assert section_for(make_task(due_at=now), now, UTC) == Section.TODAY

    def test_preserves_sorted_order(self, make_task, now):
        tasks = [make_task(f"Up{i}", due_at=now + timedelta(days=i)) for i in (3, 1, 2)]
        ordered = sort_tasks(tasks)
        assert group_by_section(ordered, now, UTC)[Section.UPCOMING] == ordered

    def test_keys_in_display_order(self, now):
        assert list(group_by_section([], now, UTC)) == [
            Section.OVERDUE,
            Section.TODAY,
            Section.UPCOMING,
            Section.COMPLETED,
            Section.OTHER,
        ]


class TestVisibleSections:
    def test_empty_sections_omitted(self, make_task, now):
        tasks = [make_task("Someday"), make_task("Late", due_at=now - timedelta(days=1))]
        visible = visible_sections(group_by_section(tasks, now, UTC))
        assert [s for s, _ in visible] == [Section.OVERDUE, Section.OTHER]

    def test_nothing_visible_for_no_tasks(self, now):
        assert visible_sections(group_by_section([], now, UTC)) == []


class TestBuildTaskList:
    def test_filter_sort_group(self, sample_tasks, now):
        result = build_task_list(
            sample_tasks,
            TaskFilter(category_id="work"),
            SortKey.PRIORITY,
            now,
            UTC,
        )
        assert [(s, [t.title for t in items]) for s, items in result] == [
            (Section.TODAY, ["Standup notes"]),
            (Section.COMPLETED, ["Ship release", "Old idea"]),
            (Section.OTHER, ["Review PR"]),
        ]

    def test_upcoming_window(self, make_task, now):
        tasks = [make_task("Soonish", due_at=now + timedelta(days=5))]
        result = build_task_list(tasks, now=now, tz=UTC, upcoming_days=3)
        assert result[0][0] == Section.OTHER
