"""Gym use cases: store calls plus the derived views built by the query engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gym_directory.repositories.interfaces import GymFilter, Store
from gym_directory.schemas.gym import GymRead, ReviewerRef
from gym_directory.services.gym_query import rank_gyms, to_gym_read


class GymService:
    def __init__(self, store: Store) -> None:
        self._store = store

    async def list(self, filters: GymFilter | None = None, sort_by: str | None = None) -> list[GymRead]:
        records = await self._store.gyms.find_all(filters)
        # Filtering again is a no-op for pushed-down predicates and keeps both backends identical
        return rank_gyms(records, filters, sort_by)

    async def get(self, gym_id: str) -> GymRead:
        """Gym with ``average_rating``; reviewers that still exist are resolved."""
        gym = await self._store.gyms.get(gym_id)
        view = to_gym_read(gym)
        users = await self._store.users.get_many({r.user_id for r in gym.reviews})
        for review in view.reviews:
            user = users.get(review.user_id)
            if user is not None:
                review.user = ReviewerRef(id=user.id, name=user.name, email=user.email)
        return view

    async def create(self, payload: Mapping[str, Any]) -> GymRead:
        return to_gym_read(await self._store.gyms.create(payload))

    async def update(self, gym_id: str, payload: Mapping[str, Any]) -> GymRead:
        return to_gym_read(await self._store.gyms.update(gym_id, payload))

    async def delete(self, gym_id: str) -> None:
        await self._store.gyms.delete(gym_id)

    async def add_review(
        self, gym_id: str, *, user_id: Any, rating: Any, comment: Any = None
    ) -> GymRead:
        gym = await self._store.gyms.add_review(
            gym_id, user_id=user_id, rating=rating, comment=comment
        )
        return to_gym_read(gym)
