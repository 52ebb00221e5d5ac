"""Root conftest — shared test configuration and store fixtures."""

import os
from datetime import datetime, timedelta, timezone

import pytest

from tasktracker.infrastructure.task_store import TaskStore
from tasktracker.services.task_service import TaskService

# Ensure tests never touch the working directory's data/tasks.json
os.environ.setdefault("TASKS_FILE", os.devnull)
os.environ.setdefault("LOG_FORMAT", "text")

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, 123000, tzinfo=timezone.utc)
FIXED_NOW_MS = 1792411200123


@pytest.fixture
def tasks_file(tmp_path):
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def store(tasks_file):
    return TaskStore(tasks_file)


@pytest.fixture
def service(store):
    return TaskService(store)


@pytest.fixture
def frozen_service(store):
    """TaskService whose clock never advances."""
    return TaskService(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def ticking_clock():
    """Clock advancing one second per call, starting at FIXED_NOW."""
    calls = {"n": 0}

    def clock():
        calls["n"] += 1
        return FIXED_NOW + timedelta(seconds=calls["n"] - 1)

    return clock
