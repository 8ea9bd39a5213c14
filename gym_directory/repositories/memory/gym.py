"""In-memory gym repository."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from copy import deepcopy
from dataclasses import replace
from typing import Any

import structlog

from gym_directory.core.exceptions import ConflictError, InvalidIdError, NotFoundError
from gym_directory.repositories.interfaces import (
    Coordinates,
    GymFilter,
    GymRecord,
    GymReviewRow,
    UserReviewRow,
)
from gym_directory.repositories.memory.state import InMemoryState
from gym_directory.services.gym_query import filter_gyms
from gym_directory.services.normalization import (
    validate_gym_create,
    validate_gym_update,
    validate_review,
)
from gym_directory.utils.datetime import utcnow

logger = structlog.get_logger(__name__)

GYM_ID_PATTERN = re.compile(r"^gym\d+$")
USER_ID_PATTERN = re.compile(r"^user\d+$")


def check_id(raw: Any, pattern: re.Pattern[str], kind: str) -> str:
    if not isinstance(raw, str) or not pattern.match(raw):
        raise InvalidIdError(f"invalid {kind} id format")
    return raw


class InMemoryGymRepository:
    """Gyms kept in insertion order; every read returns a detached copy."""

    def __init__(self, state: InMemoryState) -> None:
        self._state = state

    def _require(self, gym_id: str) -> GymRecord:
        gym = self._state.gyms.get(check_id(gym_id, GYM_ID_PATTERN, "gym"))
        if gym is None:
            raise NotFoundError("gym not found")
        return gym

    async def create(self, payload: Mapping[str, Any]) -> GymRecord:
        data = validate_gym_create(payload)
        async with self._state.lock:
            now = utcnow()
            gym = GymRecord(
                id=self._state.next_gym_id(),
                name=data["name"],
                brand=data["brand"],
                equipment=list(data["equipment"]),
                size=data["size"],
                has_shower=data["has_shower"],
                distance=data["distance"],
                coordinates=Coordinates(**data["coordinates"]),
                created_at=now,
                updated_at=now,
            )
            self._state.gyms[gym.id] = gym
        logger.info("gym_created", gym_id=gym.id, backend="memory")
        return deepcopy(gym)

    async def get(self, gym_id: str) -> GymRecord:
        return deepcopy(self._require(gym_id))

    async def get_many(self, gym_ids: Iterable[str]) -> dict[str, GymRecord]:
        found = {gid: self._state.gyms.get(gid) for gid in gym_ids if isinstance(gid, str)}
        return {gid: deepcopy(g) for gid, g in found.items() if g is not None}

    async def find_all(self, filters: GymFilter | None = None) -> list[GymRecord]:
        return [deepcopy(g) for g in filter_gyms(list(self._state.gyms.values()), filters)]

    async def update(self, gym_id: str, payload: Mapping[str, Any]) -> GymRecord:
        async with self._state.lock:
            current = self._require(gym_id)
            changes = validate_gym_update(payload, current=current)
            if "coordinates" in changes:
                changes["coordinates"] = Coordinates(**changes["coordinates"])
            if "equipment" in changes:
                changes["equipment"] = list(changes["equipment"])
            updated = replace(current, **changes, updated_at=utcnow())
            self._state.gyms[updated.id] = updated
        logger.info("gym_updated", gym_id=updated.id, fields=sorted(changes), backend="memory")
        return deepcopy(updated)

    async def delete(self, gym_id: str) -> None:
        async with self._state.lock:
            gym = self._require(gym_id)
            # Favorites and user-side reviews pointing here are left as they are
            del self._state.gyms[gym.id]
        logger.info("gym_deleted", gym_id=gym.id, backend="memory")

    async def add_review(
        self, gym_id: str, *, user_id: Any, rating: Any, comment: Any = None
    ) -> GymRecord:
        check_id(gym_id, GYM_ID_PATTERN, "gym")
        review = validate_review(user_id=user_id, rating=rating, comment=comment)
        check_id(review.user_id, USER_ID_PATTERN, "user")

        async with self._state.lock:
            user = self._state.users.get(review.user_id)
            if user is None:
                raise NotFoundError("user not found")
            gym = self._require(gym_id)
            if any(r.user_id == review.user_id for r in gym.reviews):
                raise ConflictError("user has already reviewed this gym")

            now = utcnow()
            gym.reviews.append(
                GymReviewRow(
                    user_id=review.user_id,
                    rating=review.rating,
                    comment=review.comment,
                    created_at=now,
                )
            )
            user.reviews.append(
                UserReviewRow(
                    gym_id=gym.id,
                    rating=review.rating,
                    comment=review.comment,
                    created_at=now,
                )
            )
            gym.updated_at = now
            user.updated_at = now
        logger.info("review_added", gym_id=gym.id, user_id=user.id, rating=review.rating, backend="memory")
        return deepcopy(gym)
