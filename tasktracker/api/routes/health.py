"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if the task store cannot be loaded (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Readiness performs a real load: a corrupted file makes the instance not ready
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from tasktracker import __version__
from tasktracker.api.dependencies import get_task_service
from tasktracker.core.errors import StoreError
from tasktracker.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "tasktracker",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(service: TaskService = Depends(get_task_service)):
    """Readiness probe — includes a task store load."""
    try:
        await service.list_tasks()
    except StoreError as e:
        logger.warning(
            f"Readiness check failed: {e.message}",
            extra={"error_code": e.code},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "task_store_unavailable",
            },
        )
    return {"status": "ready", "checks": {"task_store": "healthy"}}
