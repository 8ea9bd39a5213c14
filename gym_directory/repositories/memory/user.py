"""In-memory user repository."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from copy import deepcopy
from dataclasses import replace
from typing import Any

import structlog

from gym_directory.core.exceptions import ConflictError, NotFoundError
from gym_directory.repositories.interfaces import UserRecord
from gym_directory.repositories.memory.gym import GYM_ID_PATTERN, USER_ID_PATTERN, check_id
from gym_directory.repositories.memory.state import InMemoryState
from gym_directory.services.normalization import (
    validate_favorite,
    validate_user_create,
    validate_user_update,
)
from gym_directory.utils.datetime import utcnow

logger = structlog.get_logger(__name__)


class InMemoryUserRepository:
    def __init__(self, state: InMemoryState) -> None:
        self._state = state

    def _require(self, user_id: str) -> UserRecord:
        user = self._state.users.get(check_id(user_id, USER_ID_PATTERN, "user"))
        if user is None:
            raise NotFoundError("user not found")
        return user

    def _email_taken(self, email: str, *, exclude: str | None = None) -> bool:
        return any(u.email == email and u.id != exclude for u in self._state.users.values())

    async def create(self, payload: Mapping[str, Any]) -> UserRecord:
        data = validate_user_create(payload)
        async with self._state.lock:
            if self._email_taken(data["email"]):
                raise ConflictError("email already exists")
            now = utcnow()
            user = UserRecord(
                id=self._state.next_user_id(),
                name=data["name"],
                email=data["email"],
                password=data["password"],
                age=data["age"],
                gender=data["gender"],
                location=data["location"],
                created_at=now,
                updated_at=now,
            )
            self._state.users[user.id] = user
        logger.info("user_created", user_id=user.id, backend="memory")
        return deepcopy(user)

    async def get(self, user_id: str) -> UserRecord:
        return deepcopy(self._require(user_id))

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, UserRecord]:
        found = {uid: self._state.users.get(uid) for uid in user_ids if isinstance(uid, str)}
        return {uid: deepcopy(u) for uid, u in found.items() if u is not None}

    async def find_all(self) -> list[UserRecord]:
        return [deepcopy(u) for u in self._state.users.values()]

    async def update(self, user_id: str, payload: Mapping[str, Any]) -> UserRecord:
        async with self._state.lock:
            current = self._require(user_id)
            changes = validate_user_update(payload)
            if "email" in changes and self._email_taken(changes["email"], exclude=current.id):
                raise ConflictError("email already exists")
            updated = replace(current, **changes, updated_at=utcnow())
            self._state.users[updated.id] = updated
        logger.info("user_updated", user_id=updated.id, fields=sorted(changes), backend="memory")
        return deepcopy(updated)

    async def delete(self, user_id: str) -> None:
        async with self._state.lock:
            user = self._require(user_id)
            # Reviews this user left on gyms stay where they are
            del self._state.users[user.id]
        logger.info("user_deleted", user_id=user.id, backend="memory")

    async def add_favorite(self, user_id: str, gym_id: Any) -> UserRecord:
        check_id(user_id, USER_ID_PATTERN, "user")
        gym_id = check_id(validate_favorite(gym_id), GYM_ID_PATTERN, "gym")

        async with self._state.lock:
            user = self._require(user_id)
            if gym_id not in self._state.gyms:
                raise NotFoundError("gym not found")
            if gym_id in user.favorite_gyms:
                raise ConflictError("gym is already in favorites")
            user.favorite_gyms.append(gym_id)
            user.updated_at = utcnow()
        logger.info("favorite_added", user_id=user.id, gym_id=gym_id, backend="memory")
        return deepcopy(user)
