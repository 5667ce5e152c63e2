"""Test fixtures for the backend."""
import os
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from employee_directory.main import create_app  # noqa: E402
from employee_directory.store import FileEmployeeStore, SqlEmployeeStore  # noqa: E402


def employee_payload(**overrides: Any) -> dict[str, Any]:
    """A valid creation payload; keyword arguments replace individual fields."""

    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "5550001111",
        "position": "Engineer",
        "department": "R&D",
        "salary": 5000,
    }
    payload.update(overrides)
    return payload


async def _make_store(kind: str, tmp_path):
    if kind == "file":
        return FileEmployeeStore(tmp_path / "employees.json")
    store = SqlEmployeeStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}")
    await store.create_schema()
    return store


@pytest_asyncio.fixture(params=["file", "database"])
async def store(request, tmp_path):
    """Each contract test runs once per backend."""

    store = await _make_store(request.param, tmp_path)
    yield store
    await store.close()


@pytest_asyncio.fixture
async def file_store(tmp_path):
    store = await _make_store("file", tmp_path)
    yield store
    await store.close()


@pytest_asyncio.fixture
async def client(store) -> AsyncClient:
    """Provide an HTTP client for integration tests against both backends."""

    app = create_app(store=store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture
def make_payload():
    return employee_payload
