from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gym_directory.repositories.interfaces import Store, UserRecord
from gym_directory.schemas.user import GymRef, UserDetail, UserRead, UserReviewDetail


class UserService:
    """User use cases. Passwords never leave this layer."""

    def __init__(self, store: Store) -> None:
        self._store = store

    async def list(self) -> list[UserRead]:
        users = await self._store.users.find_all()
        # newest first; ids are handed out in insertion order by both stores
        return [UserRead.model_validate(u) for u in reversed(users)]

    async def get(self, user_id: str) -> UserDetail:
        user = await self._store.users.get(user_id)
        return await self._detail(user)

    async def _detail(self, user: UserRecord) -> UserDetail:
        wanted = set(user.favorite_gyms) | {r.gym_id for r in user.reviews}
        gyms = await self._store.gyms.get_many(wanted)
        refs = {gid: GymRef(id=g.id, name=g.name, brand=g.brand) for gid, g in gyms.items()}

        return UserDetail(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            gender=user.gender,
            location=user.location,
            # favorites whose gym was deleted are dropped from the view
            favorite_gyms=[refs[gid] for gid in user.favorite_gyms if gid in refs],
            reviews=[
                UserReviewDetail(
                    gym_id=r.gym_id,
                    rating=r.rating,
                    comment=r.comment,
                    created_at=r.created_at,
                    gym=refs.get(r.gym_id),
                )
                for r in user.reviews
            ],
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    async def create(self, payload: Mapping[str, Any]) -> UserRead:
        return UserRead.model_validate(await self._store.users.create(payload))

    async def update(self, user_id: str, payload: Mapping[str, Any]) -> UserRead:
        return UserRead.model_validate(await self._store.users.update(user_id, payload))

    async def delete(self, user_id: str) -> None:
        await self._store.users.delete(user_id)

    async def add_favorite(self, user_id: str, gym_id: Any) -> UserRead:
        return UserRead.model_validate(await self._store.users.add_favorite(user_id, gym_id))
