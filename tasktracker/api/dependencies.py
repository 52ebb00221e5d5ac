"""Route dependencies — hand the app-scoped TaskService to handlers."""

from fastapi import Request

from tasktracker.services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service
