"""Store contract shared by the SQLAlchemy and in-memory implementations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Protocol

StoreBackend = Literal["sql", "memory"]


@dataclass
class Coordinates:
    lat: float
    lng: float


@dataclass
class GymReviewRow:
    user_id: str
    rating: int
    comment: str
    created_at: datetime


@dataclass
class UserReviewRow:
    gym_id: str
    rating: int
    comment: str
    created_at: datetime


@dataclass
class GymRecord:
    id: str
    name: str
    brand: str
    equipment: list[str]
    size: str
    has_shower: bool
    distance: float
    coordinates: Coordinates
    created_at: datetime
    updated_at: datetime
    reviews: list[GymReviewRow] = field(default_factory=list)


@dataclass
class UserRecord:
    id: str
    name: str
    email: str
    password: str
    age: int
    gender: str
    location: str
    created_at: datetime
    updated_at: datetime
    favorite_gyms: list[str] = field(default_factory=list)
    reviews: list[UserReviewRow] = field(default_factory=list)


@dataclass(frozen=True)
class GymFilter:
    """AND-combined gym predicates; ``None`` / ``False`` means "not filtered"."""

    has_shower: bool = False
    brand: str | None = None
    size: str | None = None
    equipment_type: str | None = None


class GymRepository(Protocol):
    """Gym collection boundary. Validation and the Gym Master rule apply on every write."""

    async def create(self, payload: Mapping[str, Any]) -> GymRecord: ...

    async def get(self, gym_id: str) -> GymRecord: ...

    async def get_many(self, gym_ids: Iterable[str]) -> dict[str, GymRecord]: ...

    async def find_all(self, filters: GymFilter | None = None) -> list[GymRecord]: ...

    async def update(self, gym_id: str, payload: Mapping[str, Any]) -> GymRecord: ...

    async def delete(self, gym_id: str) -> None: ...

    async def add_review(
        self, gym_id: str, *, user_id: Any, rating: Any, comment: Any = None
    ) -> GymRecord: ...


class UserRepository(Protocol):
    """User collection boundary. Emails are lowercased and unique."""

    async def create(self, payload: Mapping[str, Any]) -> UserRecord: ...

    async def get(self, user_id: str) -> UserRecord: ...

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, UserRecord]: ...

    async def find_all(self) -> list[UserRecord]: ...

    async def update(self, user_id: str, payload: Mapping[str, Any]) -> UserRecord: ...

    async def delete(self, user_id: str) -> None: ...

    async def add_favorite(self, user_id: str, gym_id: Any) -> UserRecord: ...


class Store(Protocol):
    """One backend, chosen once at startup."""

    backend: StoreBackend
    gyms: GymRepository
    users: UserRepository

    async def ping(self) -> None: ...

    async def close(self) -> None: ...
