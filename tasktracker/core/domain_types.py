"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId wraps the "TASK-<millis>" string — never build ids by hand outside task_rules
    - All valid priorities and statuses encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", str)

TASK_ID_PREFIX = "TASK-"


# ─── Enums ───────────────────────────────────────────────────────

class TaskPriority(str, Enum):
    """The four accepted priorities, stored lowercase."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def values(cls) -> list[str]:
        return [p.value for p in cls]


class TaskStatus(str, Enum):
    """Task lifecycle states. Only PENDING exists; no transitions are exposed."""
    PENDING = "pending"
