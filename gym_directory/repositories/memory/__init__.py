"""In-memory implementations of the store contract (fallback mode)."""

from .gym import InMemoryGymRepository
from .state import InMemoryState
from .store import InMemoryStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryGymRepository",
    "InMemoryState",
    "InMemoryStore",
    "InMemoryUserRepository",
]
