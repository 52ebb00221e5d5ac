"""Task Service — validates input and orchestrates store reads/writes for create/list.

Invariants:
    - Validation runs before any store access; invalid input never touches the file
    - create_task holds one asyncio.Lock across load → append → save (no lost updates)
    - Store errors propagate unchanged; a failed save records nothing
    - list_tasks returns the collection exactly as stored, in insertion order

Design Decisions:
    - Impureim sandwich: pure rules (core/task_rules.py) between async store calls
    - Blocking file IO runs via asyncio.to_thread so the event loop keeps serving
    - Lock per service instance: one instance per app, single-process deployment
      (ADR: multi-process writers are not coordinated)
    - Save shielded from cancellation: a cancelled request still waits for its
      worker thread before releasing the lock, so the next create loads the new file
    - Clock injectable for deterministic tests
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from tasktracker.core.repository_protocols import TaskRepository
from tasktracker.core.task_rules import (
    build_task_record, epoch_millis, format_created_at, next_task_id,
    validate_new_task,
)
from tasktracker.schemas.task import Task, TaskCreate

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    """Create and list tasks against a TaskRepository."""

    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._repository = repository
        self._clock = clock
        self._write_lock = asyncio.Lock()

    async def create_task(self, data: TaskCreate) -> Task:
        """Validate, append a new pending task, persist the whole collection."""
        valid = validate_new_task(
            data.title, data.priority, description=data.description,
        )
        async with self._write_lock:
            tasks = await asyncio.to_thread(self._repository.load)
            now = self._clock()
            task_id = next_task_id(
                (t.task_id for t in tasks), epoch_millis(now),
            )
            task = Task.model_validate(
                build_task_record(valid, task_id, format_created_at(now)),
            )
            await self._save_holding_lock([*tasks, task])
        logger.info(
            f"Task created: {task.task_id} ({task.priority.value})",
            extra={"task_id": task.task_id},
        )
        return task

    async def _save_holding_lock(self, tasks: list[Task]) -> None:
        """Run save in a thread; on cancellation keep the lock until it lands."""
        save = asyncio.ensure_future(
            asyncio.to_thread(self._repository.save, tasks),
        )
        try:
            await asyncio.shield(save)
        except asyncio.CancelledError:
            await save
            raise

    async def list_tasks(self) -> list[Task]:
        """Return every stored task in insertion order."""
        return await asyncio.to_thread(self._repository.load)
