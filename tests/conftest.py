# tests/conftest.py
import os
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# Load .env.test if available, then pin the app to the in-memory store
load_dotenv(".env.test", override=False)
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SENTRY_DSN", "")
os.environ.setdefault("STORE_BACKEND", "memory")

from gym_directory.core.startup import build_memory_store  # noqa: E402 (import after env tweaks)
from gym_directory.db import create_engine  # noqa: E402
from gym_directory.main import create_app  # noqa: E402
from gym_directory.repositories.memory import InMemoryStore  # noqa: E402
from gym_directory.repositories.sqlalchemy import SqlAlchemyStore  # noqa: E402
from tests.factories.payloads import make_settings  # noqa: E402


async def _sql_store(tmp_path) -> SqlAlchemyStore:
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    store = SqlAlchemyStore(engine)
    await store.create_schema()
    return store


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, tmp_path) -> AsyncIterator:
    """Every contract test runs once per backend."""
    if request.param == "memory":
        yield InMemoryStore()
        return
    sql_store = await _sql_store(tmp_path)
    try:
        yield sql_store
    finally:
        await sql_store.close()


@pytest_asyncio.fixture
async def sql_store(tmp_path) -> AsyncIterator[SqlAlchemyStore]:
    sql_store = await _sql_store(tmp_path)
    try:
        yield sql_store
    finally:
        await sql_store.close()


@pytest_asyncio.fixture
async def seeded_store() -> InMemoryStore:
    return await build_memory_store()


@pytest_asyncio.fixture
async def app_client(seeded_store) -> AsyncIterator[AsyncClient]:
    app = create_app(store=seeded_store, settings=make_settings())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return create_app(store=InMemoryStore(), settings=make_settings())


@pytest.fixture(scope="session")
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
