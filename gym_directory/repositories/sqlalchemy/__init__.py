"""SQLAlchemy implementations of the store contract."""

from .gym import SqlAlchemyGymRepository
from .store import SqlAlchemyStore
from .user import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyGymRepository",
    "SqlAlchemyStore",
    "SqlAlchemyUserRepository",
]
