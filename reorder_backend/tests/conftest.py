"""
Pytest configuration and fixtures for reorder service tests.

Service tests run against the in-memory backend. Postgres-backed repository
tests skip unless DATABASE_URL is set.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ["TESTING"] = "true"
os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("ENVIRONMENT", "development")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from reorder_backend import repos  # noqa: E402
from reorder_backend.main import app  # noqa: E402
from reorder_backend.repos.memory_repo import MemorySectionRepo  # noqa: E402

SECTION_1 = [
    "sec-1-xy-q1",
    "sec-1-xy-q2",
    "sec-1-pqr-q1",
    "sec-1-pqr-q2",
    "sec-1-xy-q3",
    "sec-1-pqr-q3",
    "sec-1-pqr-q4",
    "sec-1-pqr-q5",
    "sec-1-xy-q4",
    "sec-1-xy-q5",
    "sec-1-pqr-q6",
]
SECTION_1_XY = [q for q in SECTION_1 if "-xy-" in q]
SECTION_2 = [f"sec-2-pqr-q{i}" for i in range(1, 5)]


@pytest.fixture(autouse=True)
def repo(monkeypatch):
    """A freshly seeded memory repository, installed as the shared one."""
    fresh = MemorySectionRepo()
    monkeypatch.setattr(repos, "order_repo", fresh)
    return fresh


@pytest_asyncio.fixture
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
