"""Shared workflow layer between the CLI and the data store.

TaskBoard owns the current task snapshot. Reads fall back to the local cache;
writes are applied optimistically and report a Notice instead of raising.
Records the store rejected are kept in the cache as pending until deleted.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from .adapters.file_cache import FileTaskCache
from .adapters.supabase_api import StoreError, SupabaseStore
from .adapters.supabase_auth import AuthenticationError
from .config import Config
from .core.listing import Section, SortKey, TaskFilter, build_task_list
from .core.stats import TaskStats, compute_stats
from .core.tasks import (
    Task,
    TaskDraft,
    TaskStatus,
    apply_edit,
    changes_between,
    duplicate_draft,
    toggle_complete,
    transition_status,
    utcnow,
)
from .ports import TaskCache, TaskRepository

logger = logging.getLogger(__name__)

# A rejected session fails a write the same way an unreachable store does
WRITE_ERRORS = (StoreError, AuthenticationError)


@dataclass(frozen=True)
class Notice:
    """User-facing outcome of a write."""

    text: str
    level: str = "info"  # info, warning, error

    @property
    def is_error(self) -> bool:
        return self.level == "error"


class TaskBoard:
    """
    Current task snapshot for one owner plus the operations that change it.

    The snapshot is an immutable tuple replaced wholesale. Fetches carry a
    sequence number and only the most recently issued one may replace it.
    """

    def __init__(
        self,
        repo: TaskRepository,
        cache: TaskCache,
        owner_id: str,
        config: Config | None = None,
    ):
        self.repo = repo
        self.cache = cache
        self.owner_id = owner_id
        self.config = config or Config()
        self.tasks: tuple[Task, ...] = ()
        self.from_cache = False
        self._issued = 0

    # ---- reads ----

    def begin_refresh(self) -> int:
        """Issue a new fetch sequence number."""
        self._issued += 1
        return self._issued

    def complete_refresh(self, seq: int, tasks: list[Task], from_cache: bool = False) -> bool:
        """
        Install a fetched snapshot unless a newer fetch has been issued since.

        Pending local records, stored and in memory, stay ahead of the snapshot.
        """
        if seq != self._issued:
            logger.debug(f"Discarding stale fetch #{seq} (latest is #{self._issued})")
            return False
        pending = {t.id: t for t in self.cache.load_pending(self.owner_id)}
        pending.update((t.id, t) for t in self.tasks if t.is_pending_sync)
        self.tasks = tuple(list(pending.values()) + list(tasks))
        self.from_cache = from_cache
        return True

    def load(self) -> tuple[list[Task], bool]:
        """Fetch from the store, falling back to the cache. Returns (tasks, from_cache)."""
        try:
            tasks = self.repo.fetch_tasks()
        except StoreError as e:
            logger.warning(f"Task fetch failed, using local cache: {e}")
            cached = self.cache.load(self.owner_id)
            return (cached or [], True)

        self.cache.save(self.owner_id, tasks)
        return (tasks, False)

    def refresh(self) -> tuple[Task, ...]:
        seq = self.begin_refresh()
        tasks, from_cache = self.load()
        self.complete_refresh(seq, tasks, from_cache)
        return self.tasks

    def find(self, ref: str) -> Task:
        """Look up a task by id or unique id prefix."""
        matches = [t for t in self.tasks if t.id == ref]
        if not matches:
            matches = [t for t in self.tasks if t.id.startswith(ref)]
        if len(matches) != 1:
            raise KeyError(ref)
        return matches[0]

    def sections(
        self,
        criteria: TaskFilter | None = None,
        sort_key: SortKey = SortKey.DUE,
        now: datetime | None = None,
    ) -> list[tuple[Section, list[Task]]]:
        return build_task_list(
            list(self.tasks),
            criteria,
            sort_key,
            now,
            self.config.tzinfo,
            self.config.upcoming_days,
        )

    def stats(self, now: datetime | None = None) -> TaskStats:
        return compute_stats(list(self.tasks), now, self.config.tzinfo)

    # ---- writes ----

    def _replace(self, task: Task) -> None:
        self.tasks = tuple(task if t.id == task.id else t for t in self.tasks)

    def _save_pending(self) -> None:
        self.cache.save_pending(self.owner_id, [t for t in self.tasks if t.is_pending_sync])

    def create(self, draft: TaskDraft, now: datetime | None = None) -> tuple[Task, Notice]:
        """
        Create a task. Invalid drafts raise ValidationError before any store call.

        If the store rejects the insert, a PENDING local record is kept instead.
        """
        draft.validate()
        now = now or utcnow()
        try:
            task = self.repo.create_task(draft.to_payload(self.owner_id, now))
            notice = Notice("Task created.")
        except WRITE_ERRORS as e:
            logger.warning(f"Task insert failed, keeping local copy: {e}")
            task = draft.to_local_task(self.owner_id, now)
            notice = Notice("Saved locally — server insert failed.", "warning")
        self.tasks = (task,) + self.tasks
        if task.is_pending_sync:
            self._save_pending()
        return task, notice

    def _push_update(self, before: Task, after: Task) -> Notice:
        self._replace(after)
        if after.is_pending_sync:
            self._save_pending()
            return Notice("Task updated locally.", "warning")
        try:
            self.repo.update_task(after.id, changes_between(before, after))
        except WRITE_ERRORS as e:
            logger.warning(f"Task update failed for {after.id}: {e}")
            return Notice("Failed to update task.", "error")
        return Notice("Task updated.")

    def edit(self, task_id: str, draft: TaskDraft, now: datetime | None = None) -> Notice:
        before = self.find(task_id)
        return self._push_update(before, apply_edit(before, draft, now))

    def set_status(self, task_id: str, status: TaskStatus, now: datetime | None = None) -> Notice:
        before = self.find(task_id)
        return self._push_update(before, transition_status(before, status, now))

    def toggle_complete(self, task_id: str, now: datetime | None = None) -> Notice:
        before = self.find(task_id)
        return self._push_update(before, toggle_complete(before, now))

    def duplicate(self, task_id: str, now: datetime | None = None) -> tuple[Task | None, Notice]:
        source = self.find(task_id)
        draft = duplicate_draft(source)
        try:
            task = self.repo.create_task(draft.to_payload(self.owner_id, now))
        except WRITE_ERRORS as e:
            logger.warning(f"Task duplicate failed for {task_id}: {e}")
            return None, Notice("Failed to duplicate task.", "error")
        self.tasks = (task,) + self.tasks
        return task, Notice("Task duplicated.")

    def delete(self, task_id: str) -> Notice:
        """Remove a task. The local removal stands even if the store call fails."""
        task = self.find(task_id)
        self.tasks = tuple(t for t in self.tasks if t.id != task.id)
        if task.is_pending_sync:
            self._save_pending()
            return Notice("Task deleted.")
        try:
            self.repo.delete_task(task.id)
        except WRITE_ERRORS as e:
            logger.warning(f"Task delete failed for {task.id}: {e}")
            return Notice("Failed to delete task.", "error")
        return Notice("Task deleted.")


def get_store(config: Config) -> SupabaseStore:
    return SupabaseStore(config)


def get_board(config: Config, store: SupabaseStore | None = None) -> TaskBoard:
    """Build a board for the signed-in user with the configured cache."""
    store = store or get_store(config)
    return TaskBoard(store, FileTaskCache(config.cache_path), store.owner_id, config)

