"""Task Store — whole-collection JSON file persistence for task records.

Invariants:
    - The backing file is always a JSON array of Task objects (2-space indent, camelCase)
    - load() on a missing file returns [] and does NOT create the file
    - load() on anything that is not a JSON array of valid tasks raises CorruptedStoreError
    - save() replaces the file atomically: readers see the old or the new array, never a mix
    - save() keeps the existing file mode; a new file gets 0o666 minus the umask
    - Every OSError surfaces as PersistenceError; nothing is swallowed

Design Decisions:
    - Write temp sibling + os.replace: rename is atomic on the same filesystem
    - Store owns only its path, no open handles: each call opens and closes the file,
      so several stores (tests, tools) can point at different paths in one process
    - No locking here: serializing read-modify-write is the service's job
"""

import contextlib
import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from tasktracker.core.errors import CorruptedStoreError, PersistenceError
from tasktracker.schemas.task import Task, TaskList

logger = logging.getLogger(__name__)


class TaskStore:
    """File-backed TaskRepository."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> list[Task]:
        """Read the full collection. Missing file means an empty collection."""
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            logger.debug(f"Task store {self._path} absent, treating as empty")
            return []
        except OSError as e:
            raise PersistenceError(str(self._path), "read", str(e)) from e

        try:
            return TaskList.validate_json(raw)
        except ValidationError as e:
            raise CorruptedStoreError(
                str(self._path), _summarize(e),
            ) from e

    def save(self, tasks: Sequence[Task]) -> None:
        """Serialize the full collection and atomically replace the file."""
        payload = TaskList.dump_json(list(tasks), indent=2, by_alias=True)
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "wb") as f:
                os.chmod(tmp_name, self._file_mode())
                f.write(payload)
                f.write(b"\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise PersistenceError(str(self._path), "write", str(e)) from e
        logger.debug(f"Task store {self._path} saved ({len(tasks)} tasks)")

    def _file_mode(self) -> int:
        """Mode of the current file, else what a plain open() would create."""
        try:
            return stat.S_IMODE(self._path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask


def _summarize(exc: ValidationError) -> str:
    """First validation problem, e.g. "missing at 0.title (1 error(s))"."""
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"{first['type']} at {loc or '<root>'} ({exc.error_count()} error(s))"
