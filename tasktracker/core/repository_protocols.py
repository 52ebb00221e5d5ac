"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Task persistence accessed through the TaskRepository protocol
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake with load/save
    - Sync methods: the file store blocks; the service decides where to run it
"""

from collections.abc import Sequence
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from tasktracker.schemas.task import Task


class TaskRepository(Protocol):
    """Contract for whole-collection task persistence — implemented by shell."""
    def load(self) -> list["Task"]: ...
    def save(self, tasks: Sequence["Task"]) -> None: ...
