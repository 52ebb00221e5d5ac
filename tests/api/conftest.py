"""API test fixtures — isolated FastAPI app per test on a temporary task file.

Invariants:
    - Every test gets its own app, store and service (no shared lock or file)

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises real routing and handlers
      without a server; lifespan is not run, so logging stays pytest's
"""

import pytest
from httpx import ASGITransport, AsyncClient

from tasktracker.config import Settings
from tasktracker.main import create_app


@pytest.fixture
def app(tasks_file):
    return create_app(Settings(tasks_file=str(tasks_file)))


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
