"""Task repository interface."""

from typing import Protocol

from cadence.core.tasks import Task


class TaskRepository(Protocol):
    """Owner-scoped task storage. Every call is limited to the signed-in user."""

    def fetch_tasks(self) -> list[Task]:
        """Fetch all of the owner's tasks, newest first."""
        ...

    def create_task(self, payload: dict) -> Task:
        """Insert a task and return the stored record."""
        ...

    def update_task(self, task_id: str, changes: dict) -> None:
        """Update fields of one task. Implementations stamp updated_at."""
        ...

    def delete_task(self, task_id: str) -> None:
        """Permanently delete one task."""
        ...
