"""One-shot backend handshake that decides which store the process runs on."""

from __future__ import annotations

import asyncio

import structlog
from sqlalchemy.exc import SQLAlchemyError

from gym_directory.core.config import Settings
from gym_directory.core.exceptions import InfrastructureError
from gym_directory.db import create_engine
from gym_directory.repositories.interfaces import Store
from gym_directory.repositories.memory import InMemoryStore
from gym_directory.repositories.sqlalchemy import SqlAlchemyStore
from gym_directory.seed import load_seed

_PROBE_ERRORS = (SQLAlchemyError, OSError, ImportError, asyncio.TimeoutError, TimeoutError)


async def build_memory_store(*, seed: bool = True) -> InMemoryStore:
    store = InMemoryStore()
    if seed:
        await load_seed(store)
    return store


async def _connect_sql(settings: Settings) -> SqlAlchemyStore:
    engine = create_engine(settings.database_url, connect_timeout=settings.store_connect_timeout)
    store = SqlAlchemyStore(engine)
    try:
        await asyncio.wait_for(store.ping(), timeout=settings.store_connect_timeout)
        if settings.auto_create_schema:
            await store.create_schema()
    except BaseException:
        await engine.dispose()
        raise
    return store


async def select_store(settings: Settings) -> Store:
    """Probe the database once; fall back to the seeded in-memory store on failure.

    There is no re-probing: whatever is chosen here serves the whole process.
    """
    logger = structlog.get_logger(__name__)

    if settings.store_backend == "memory" or not settings.database_url:
        if settings.store_backend == "sql":
            raise InfrastructureError("STORE_BACKEND=sql requires DATABASE_URL")
        reason = "forced" if settings.store_backend == "memory" else "no_database_url"
        store = await build_memory_store()
        logger.info("store_selected", backend=store.backend, reason=reason)
        return store

    try:
        store = await _connect_sql(settings)
    except _PROBE_ERRORS as exc:
        error = str(exc) or exc.__class__.__name__
        if settings.store_backend == "sql":
            logger.error("store_backend_unreachable", error=error, fallback=None)
            raise InfrastructureError(f"database unreachable: {error}") from exc
        logger.warning("store_backend_unreachable", error=error, fallback="memory")
        store = await build_memory_store()
        logger.info("store_selected", backend=store.backend, reason="probe_failed")
        return store

    logger.info("store_selected", backend=store.backend, reason="probe_ok")
    return store


__all__ = ["build_memory_store", "select_store"]
