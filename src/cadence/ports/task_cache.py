"""Offline task cache interface."""

from typing import Protocol

from cadence.core.tasks import Task


class TaskCache(Protocol):
    """Durable last-known-good task snapshot, keyed by owner."""

    def load(self, owner_id: str) -> list[Task] | None:
        """Return the cached snapshot, or None if nothing is cached."""
        ...

    def save(self, owner_id: str, tasks: list[Task]) -> None:
        """Overwrite the cached snapshot."""
        ...

    def load_pending(self, owner_id: str) -> list[Task]:
        """Return records that exist only on this device."""
        ...

    def save_pending(self, owner_id: str, tasks: list[Task]) -> None:
        """Overwrite the stored pending records."""
        ...
