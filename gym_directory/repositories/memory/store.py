from __future__ import annotations

from gym_directory.repositories.interfaces import StoreBackend
from gym_directory.repositories.memory.gym import InMemoryGymRepository
from gym_directory.repositories.memory.state import InMemoryState
from gym_directory.repositories.memory.user import InMemoryUserRepository


class InMemoryStore:
    """Process-local store used when the database is unreachable at startup."""

    backend: StoreBackend = "memory"

    def __init__(self, state: InMemoryState | None = None) -> None:
        self.state = state or InMemoryState()
        self.gyms = InMemoryGymRepository(self.state)
        self.users = InMemoryUserRepository(self.state)

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None
