from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from gym_directory.core.exceptions import InfrastructureError
from gym_directory.repositories.interfaces import Store


class HealthService:
    def __init__(self, store: Store):
        self._store = store

    async def ok(self) -> dict:
        try:
            await self._store.ping()
        except (SQLAlchemyError, OSError) as exc:
            raise InfrastructureError(f"{self._store.backend} store unavailable") from exc
        return {"ok": True, "backend": self._store.backend}
