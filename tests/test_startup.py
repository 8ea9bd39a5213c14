"""Startup handshake: which store the process ends up on."""

from __future__ import annotations

import pytest

from gym_directory.core.exceptions import InfrastructureError
from gym_directory.core.startup import select_store
from tests.factories.payloads import make_settings


def _unreachable_url(tmp_path) -> str:
    # The parent directory does not exist, so SQLite cannot open the file
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nested' / 'db.sqlite'}"


@pytest.mark.asyncio
async def test_no_database_url_uses_seeded_memory_store() -> None:
    store = await select_store(make_settings(database_url=None))

    assert store.backend == "memory"
    assert len(await store.gyms.find_all()) == 4
    assert len(await store.users.find_all()) == 2


@pytest.mark.asyncio
async def test_forced_memory_ignores_database_url(tmp_path) -> None:
    settings = make_settings(
        database_url=f"sqlite:///{tmp_path / 'db.sqlite'}", store_backend="memory"
    )
    store = await select_store(settings)

    assert store.backend == "memory"


@pytest.mark.asyncio
async def test_reachable_database_selects_sql_store(tmp_path) -> None:
    settings = make_settings(database_url=f"sqlite:///{tmp_path / 'db.sqlite'}")
    store = await select_store(settings)
    try:
        assert store.backend == "sql"
        # schema was created, the store starts empty
        assert await store.gyms.find_all() == []
    finally:
        await store.close()


@pytest.mark.asyncio
async def test_unreachable_database_falls_back_to_memory(tmp_path) -> None:
    settings = make_settings(database_url=_unreachable_url(tmp_path), store_connect_timeout=1.0)
    store = await select_store(settings)

    assert store.backend == "memory"
    assert len(await store.gyms.find_all()) == 4


@pytest.mark.asyncio
async def test_forced_sql_fails_when_database_is_unreachable(tmp_path) -> None:
    settings = make_settings(database_url=_unreachable_url(tmp_path), store_backend="sql")

    with pytest.raises(InfrastructureError):
        await select_store(settings)


@pytest.mark.asyncio
async def test_forced_sql_requires_database_url() -> None:
    with pytest.raises(InfrastructureError):
        await select_store(make_settings(database_url=None, store_backend="sql"))
