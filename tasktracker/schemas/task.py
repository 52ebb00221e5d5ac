"""Task Schemas — wire and storage shapes for task records.

Invariants:
    - Task serializes with camelCase keys (taskId, createdAt) via alias_generator
    - Task is frozen: records are never mutated once written
    - Task forbids unknown keys: a stored record with extra fields is corruption,
      never silently rewritten without them
    - TaskCreate accepts any JSON values; business rules live in core/task_rules.py

Design Decisions:
    - TaskCreate fields typed Any: a non-string title must produce the domain message
      "Title is required and cannot be blank", not Pydantic's type error envelope
    - created_at kept as str: re-parsing to datetime would re-format the stored value
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel

from tasktracker.core.domain_types import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """POST /api/tasks body. Unknown keys ignored."""
    title: Any = None
    description: Any = None
    priority: Any = None


class Task(BaseModel):
    """A persisted task record."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
        extra="forbid",
    )

    task_id: str
    title: str
    description: str
    priority: TaskPriority
    status: TaskStatus
    created_at: str


TaskList = TypeAdapter(list[Task])
