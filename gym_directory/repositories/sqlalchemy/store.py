from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from gym_directory.db import create_session_factory
from gym_directory.models import Base
from gym_directory.repositories.interfaces import StoreBackend
from gym_directory.repositories.sqlalchemy.gym import SqlAlchemyGymRepository
from gym_directory.repositories.sqlalchemy.user import SqlAlchemyUserRepository


class SqlAlchemyStore:
    """Persistent store backed by an async SQLAlchemy engine."""

    backend: StoreBackend = "sql"

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        session_factory = create_session_factory(engine)
        self.gyms = SqlAlchemyGymRepository(session_factory)
        self.users = SqlAlchemyUserRepository(session_factory)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        await self._engine.dispose()
