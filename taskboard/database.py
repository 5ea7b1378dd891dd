import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, List

from fastapi import Request

logger = logging.getLogger(__name__)


class JsonCollection:
    """A whole JSON array kept in one file.

    ``read`` always returns the full list and ``write`` always replaces the
    full document; there are no partial updates.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> List[Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt document {self.path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Ignoring document {self.path}: expected a JSON array")
            return []
        return data

    def write(self, items: List[Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class Database:
    """The three JSON documents plus the lock serializing their writers"""

    def __init__(self, tasks_file: Path, assignees_file: Path, users_file: Path):
        self.tasks = JsonCollection(tasks_file)
        self.assignees = JsonCollection(assignees_file)
        self.users = JsonCollection(users_file)
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings) -> "Database":
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return cls(settings.tasks_file, settings.assignees_file, settings.users_file)

    @contextmanager
    def transaction(self):
        # read-modify-write sequences must run entirely inside this block
        with self._lock:
            yield self


# Request-scoped access to the database created by the app factory
def get_db(request: Request) -> Database:
    return request.app.state.db
