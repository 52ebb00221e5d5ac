"""Task Rules — pure validation and construction of new task records.

Invariants:
    - validate_new_task raises before anything touches the store (fail fast, no side effects)
    - Title is checked before priority; the first failing rule wins
    - next_task_id is strictly greater than every TASK-<digits> id already in the collection
    - Timestamps are UTC, millisecond precision, "Z" suffix

Design Decisions:
    - Clock values passed in (now_ms, now) so rules stay deterministic under test
    - Monotonic bump over random suffix: ids keep the TASK-<millis> shape clients
      already parse, and collisions within one millisecond become impossible
      as long as generation happens inside the create critical section
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from tasktracker.core.domain_types import (
    TASK_ID_PREFIX, TaskId, TaskPriority, TaskStatus,
)
from tasktracker.core.errors import TaskValidationError

TITLE_REQUIRED_MESSAGE = "Title is required and cannot be blank"
PRIORITY_INVALID_MESSAGE = (
    f"Priority must be one of: {', '.join(TaskPriority.values())}"
)
DESCRIPTION_INVALID_MESSAGE = "Description must be a string"

_TASK_ID_PATTERN = re.compile(rf"^{re.escape(TASK_ID_PREFIX)}(\d+)$")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class NewTaskInput:
    """Validated, normalized creation input."""
    title: str
    description: str
    priority: TaskPriority


def validate_new_task(
    title: Any, priority: Any, description: Any = None,
) -> NewTaskInput:
    """Validate raw request values and normalize them (trim, lowercase)."""
    if not isinstance(title, str) or not title.strip():
        raise TaskValidationError(TITLE_REQUIRED_MESSAGE, field="title")
    normalized_priority = _parse_priority(priority)
    if description is None:
        description = ""
    if not isinstance(description, str):
        raise TaskValidationError(
            DESCRIPTION_INVALID_MESSAGE, field="description",
        )
    return NewTaskInput(
        title=title.strip(),
        description=description.strip(),
        priority=normalized_priority,
    )


def _parse_priority(priority: Any) -> TaskPriority:
    if not isinstance(priority, str):
        raise TaskValidationError(PRIORITY_INVALID_MESSAGE, field="priority")
    try:
        return TaskPriority(priority.strip().lower())
    except ValueError:
        raise TaskValidationError(
            PRIORITY_INVALID_MESSAGE, field="priority",
        ) from None


def next_task_id(existing_ids: Iterable[str], now_ms: int) -> TaskId:
    """Return TASK-<now_ms>, bumped past the highest existing millisecond id."""
    latest = max(
        (int(m.group(1)) for m in map(_TASK_ID_PATTERN.match, existing_ids) if m),
        default=-1,
    )
    return TaskId(f"{TASK_ID_PREFIX}{max(now_ms, latest + 1)}")


def epoch_millis(now: datetime) -> int:
    """Milliseconds since the Unix epoch, computed without float rounding."""
    return (now - _EPOCH) // timedelta(milliseconds=1)


def format_created_at(now: datetime) -> str:
    """ISO-8601 in UTC with milliseconds, e.g. 2026-10-19T12:00:00.123Z."""
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def build_task_record(
    valid: NewTaskInput, task_id: TaskId, created_at: str,
) -> dict:
    """Assemble the six-field record for a freshly created task."""
    return {
        "taskId": task_id,
        "title": valid.title,
        "description": valid.description,
        "priority": valid.priority.value,
        "status": TaskStatus.PENDING.value,
        "createdAt": created_at,
    }
