"""File-based offline task cache adapter."""

import json
import logging
from dataclasses import replace
from pathlib import Path

from cadence.core.tasks import SyncState, Task

logger = logging.getLogger(__name__)


class FileTaskCache:
    """
    File-based task cache.

    Implements TaskCache protocol. Each owner gets one JSON file holding the
    last successfully fetched rows, and one holding records the store never
    accepted.
    """

    def __init__(self, cache_dir: Path | str):
        self.cache_dir = Path(cache_dir).expanduser()
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_owner(self, owner_id: str) -> Path:
        return self.cache_dir / f"tasks_{owner_id}.json"

    def _pending_path(self, owner_id: str) -> Path:
        return self.cache_dir / f"pending_{owner_id}.json"

    def _read(self, path: Path) -> list[Task] | None:
        if not path.exists():
            return None
        try:
            rows = json.loads(path.read_text())
            return [Task.from_api(r) for r in rows]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable task cache {path}: {e}")
            return None

    def _write(self, path: Path, tasks: list[Task]) -> None:
        path.write_text(json.dumps([t.to_record() for t in tasks], indent=2))

    def load(self, owner_id: str) -> list[Task] | None:
        """Read the cached snapshot. Returns None if not found or unreadable."""
        return self._read(self._path_for_owner(owner_id))

    def save(self, owner_id: str, tasks: list[Task]) -> None:
        """Overwrite the cached snapshot."""
        self._write(self._path_for_owner(owner_id), tasks)

    def load_pending(self, owner_id: str) -> list[Task]:
        """Read unsynced local records, tagged PENDING."""
        tasks = self._read(self._pending_path(owner_id)) or []
        return [replace(t, sync=SyncState.PENDING) for t in tasks]

    def save_pending(self, owner_id: str, tasks: list[Task]) -> None:
        path = self._pending_path(owner_id)
        if tasks:
            self._write(path, tasks)
        elif path.exists():
            path.unlink()
