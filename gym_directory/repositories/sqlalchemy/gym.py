"""SQLAlchemy implementation of the gym repository."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gym_directory.core.exceptions import ConflictError, InvalidIdError, NotFoundError
from gym_directory.models import Gym, GymReview, User, UserReview
from gym_directory.repositories.interfaces import (
    Coordinates,
    GymFilter,
    GymRecord,
    GymReviewRow,
)
from gym_directory.services.gym_query import filter_gyms, normalize_filter_size
from gym_directory.services.normalization import (
    validate_gym_create,
    validate_gym_update,
    validate_review,
)
from gym_directory.utils.datetime import as_utc, utcnow

logger = structlog.get_logger(__name__)

_MAX_ID = 2**63 - 1


def parse_id(raw: Any, kind: str) -> int:
    """Database ids are positive integers, accepted as int or decimal string."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        value = int(raw)
    else:
        raise InvalidIdError(f"invalid {kind} id format")
    if value > _MAX_ID:
        raise InvalidIdError(f"invalid {kind} id format")
    return value


def parse_ids(raw_ids: Iterable[Any], kind: str) -> list[int]:
    ids: list[int] = []
    for raw in raw_ids:
        try:
            ids.append(parse_id(raw, kind))
        except InvalidIdError:
            continue
    return ids


def gym_to_record(gym: Gym) -> GymRecord:
    return GymRecord(
        id=str(gym.id),
        name=gym.name,
        brand=gym.brand,
        equipment=list(gym.equipment or []),
        size=gym.size,
        has_shower=bool(gym.has_shower),
        distance=float(gym.distance or 0.0),
        coordinates=Coordinates(lat=gym.latitude, lng=gym.longitude),
        created_at=as_utc(gym.created_at),
        updated_at=as_utc(gym.updated_at),
        reviews=[
            GymReviewRow(
                user_id=str(r.user_id),
                rating=r.rating,
                comment=r.comment or "",
                created_at=as_utc(r.created_at),
            )
            for r in gym.reviews
        ],
    )


def _apply_changes(gym: Gym, changes: Mapping[str, Any]) -> None:
    for key, value in changes.items():
        if key == "coordinates":
            gym.latitude = value["lat"]
            gym.longitude = value["lng"]
        elif key == "equipment":
            gym.equipment = list(value)
        else:
            setattr(gym, key, value)


class SqlAlchemyGymRepository:
    """Each call runs in its own session and transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(self, payload: Mapping[str, Any]) -> GymRecord:
        data = validate_gym_create(payload)
        now = utcnow()
        gym = Gym(
            name=data["name"],
            brand=data["brand"],
            equipment=list(data["equipment"]),
            size=data["size"],
            has_shower=data["has_shower"],
            distance=data["distance"],
            latitude=data["coordinates"]["lat"],
            longitude=data["coordinates"]["lng"],
            created_at=now,
            updated_at=now,
            reviews=[],
        )
        async with self._session_factory() as session:
            session.add(gym)
            await session.commit()
            record = gym_to_record(gym)
        logger.info("gym_created", gym_id=record.id, backend="sql")
        return record

    async def get(self, gym_id: str) -> GymRecord:
        pk = parse_id(gym_id, "gym")
        async with self._session_factory() as session:
            gym = await session.get(Gym, pk)
            if gym is None:
                raise NotFoundError("gym not found")
            return gym_to_record(gym)

    async def get_many(self, gym_ids: Iterable[str]) -> dict[str, GymRecord]:
        ids = parse_ids(gym_ids, "gym")
        if not ids:
            return {}
        async with self._session_factory() as session:
            rows = (await session.scalars(select(Gym).where(Gym.id.in_(ids)))).all()
            return {str(g.id): gym_to_record(g) for g in rows}

    async def find_all(self, filters: GymFilter | None = None) -> list[GymRecord]:
        stmt = select(Gym).order_by(Gym.id)
        if filters is not None:
            if filters.has_shower:
                stmt = stmt.where(Gym.has_shower.is_(True))
            if filters.size:
                stmt = stmt.where(Gym.size == normalize_filter_size(filters.size))
        async with self._session_factory() as session:
            records = [gym_to_record(g) for g in (await session.scalars(stmt)).all()]
        # brand: SQL lower() does not fold non-ASCII the way str.lower() does
        # equipment_type: lives in a JSON column
        return filter_gyms(records, filters)

    async def update(self, gym_id: str, payload: Mapping[str, Any]) -> GymRecord:
        pk = parse_id(gym_id, "gym")
        async with self._session_factory() as session:
            gym = await session.get(Gym, pk, with_for_update=True)
            if gym is None:
                raise NotFoundError("gym not found")
            changes = validate_gym_update(payload, current=gym_to_record(gym))
            _apply_changes(gym, changes)
            gym.updated_at = utcnow()
            await session.commit()
            record = gym_to_record(gym)
        logger.info("gym_updated", gym_id=record.id, fields=sorted(changes), backend="sql")
        return record

    async def delete(self, gym_id: str) -> None:
        pk = parse_id(gym_id, "gym")
        async with self._session_factory() as session:
            gym = await session.get(Gym, pk)
            if gym is None:
                raise NotFoundError("gym not found")
            # user_favorites / user_reviews have no FK to gyms and are kept
            await session.delete(gym)
            await session.commit()
        logger.info("gym_deleted", gym_id=str(pk), backend="sql")

    async def add_review(
        self, gym_id: str, *, user_id: Any, rating: Any, comment: Any = None
    ) -> GymRecord:
        pk = parse_id(gym_id, "gym")
        review = validate_review(user_id=user_id, rating=rating, comment=comment)
        uid = parse_id(review.user_id, "user")

        async with self._session_factory() as session:
            user = await session.get(User, uid)
            if user is None:
                raise NotFoundError("user not found")
            gym = await session.get(Gym, pk, with_for_update=True)
            if gym is None:
                raise NotFoundError("gym not found")
            if any(r.user_id == uid for r in gym.reviews):
                raise ConflictError("user has already reviewed this gym")

            now = utcnow()
            gym.reviews.append(
                GymReview(user_id=uid, rating=review.rating, comment=review.comment, created_at=now)
            )
            user.reviews.append(
                UserReview(gym_id=pk, rating=review.rating, comment=review.comment, created_at=now)
            )
            gym.updated_at = now
            user.updated_at = now
            try:
                await session.commit()
            except IntegrityError as exc:
                # A concurrent identical request committed first
                await session.rollback()
                raise ConflictError("user has already reviewed this gym") from exc
            record = gym_to_record(gym)
        logger.info("review_added", gym_id=record.id, user_id=str(uid), rating=review.rating, backend="sql")
        return record
