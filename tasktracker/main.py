"""Task Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to {"error": <message>}
    - CORS configured from settings (not hardcoded)
    - One TaskStore and one TaskService per app, built from settings in create_app

Design Decisions:
    - App factory over module globals: tests build isolated apps on temp files
    - Store/service attached in create_app, not lifespan: ASGI test transports
      do not run lifespan, and construction does no IO
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktracker import __version__
from tasktracker.api.error_handlers import register_error_handlers
from tasktracker.api.routes import health, tasks
from tasktracker.config import Settings, get_settings
from tasktracker.infrastructure.observability import setup_logging
from tasktracker.infrastructure.task_store import TaskStore
from tasktracker.services.task_service import TaskService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"Task Tracker API started (store={settings.tasks_file})",
    )
    yield
    logger.info("Task Tracker API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a configured application around its own task store."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Task Tracker API", version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_service = TaskService(TaskStore(settings.tasks_file))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(tasks.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve on settings.host:settings.port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
