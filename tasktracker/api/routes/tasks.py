"""Task Routes — create and list tasks.

Invariants:
    - POST /api/tasks → 201 with the created record, 400 on invalid input
    - GET /api/tasks → 200 with every task in insertion order
    - Store failures surface as 500 with a generic message; the cause is only logged

Design Decisions:
    - Routes only label store errors with client wording; the global handler
      (api/error_handlers.py) renders and logs them
"""

from fastapi import APIRouter, Depends, status

from tasktracker.api.dependencies import get_task_service
from tasktracker.core.errors import StoreError
from tasktracker.schemas.task import Task, TaskCreate
from tasktracker.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

SAVE_FAILED_MESSAGE = "Failed to save task"
READ_FAILED_MESSAGE = "Failed to read tasks"


@router.post(
    "", response_model=Task, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate, service: TaskService = Depends(get_task_service),
):
    """Create a new pending task."""
    try:
        return await service.create_task(body)
    except StoreError as e:
        e.context.user_message = SAVE_FAILED_MESSAGE
        raise


@router.get("", response_model=list[Task])
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """List all tasks."""
    try:
        return await service.list_tasks()
    except StoreError as e:
        e.context.user_message = READ_FAILED_MESSAGE
        raise
