"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gym_directory.core.exceptions import ConflictError, NotFoundError
from gym_directory.models import Gym, User, UserFavorite
from gym_directory.repositories.interfaces import UserRecord, UserReviewRow
from gym_directory.repositories.sqlalchemy.gym import parse_id, parse_ids
from gym_directory.services.normalization import (
    validate_favorite,
    validate_user_create,
    validate_user_update,
)
from gym_directory.utils.datetime import as_utc, utcnow

logger = structlog.get_logger(__name__)


def user_to_record(user: User) -> UserRecord:
    return UserRecord(
        id=str(user.id),
        name=user.name,
        email=user.email,
        password=user.password,
        age=user.age,
        gender=user.gender,
        location=user.location,
        created_at=as_utc(user.created_at),
        updated_at=as_utc(user.updated_at),
        favorite_gyms=[str(f.gym_id) for f in user.favorites],
        reviews=[
            UserReviewRow(
                gym_id=str(r.gym_id),
                rating=r.rating,
                comment=r.comment or "",
                created_at=as_utc(r.created_at),
            )
            for r in user.reviews
        ],
    )


class SqlAlchemyUserRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @staticmethod
    async def _email_taken(session: AsyncSession, email: str, *, exclude: int | None = None) -> bool:
        stmt = select(User.id).where(User.email == email)
        if exclude is not None:
            stmt = stmt.where(User.id != exclude)
        return await session.scalar(stmt.limit(1)) is not None

    async def create(self, payload: Mapping[str, Any]) -> UserRecord:
        data = validate_user_create(payload)
        now = utcnow()
        async with self._session_factory() as session:
            if await self._email_taken(session, data["email"]):
                raise ConflictError("email already exists")
            user = User(**data, created_at=now, updated_at=now, favorites=[], reviews=[])
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise ConflictError("email already exists") from exc
            record = user_to_record(user)
        logger.info("user_created", user_id=record.id, backend="sql")
        return record

    async def get(self, user_id: str) -> UserRecord:
        pk = parse_id(user_id, "user")
        async with self._session_factory() as session:
            user = await session.get(User, pk)
            if user is None:
                raise NotFoundError("user not found")
            return user_to_record(user)

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, UserRecord]:
        ids = parse_ids(user_ids, "user")
        if not ids:
            return {}
        async with self._session_factory() as session:
            rows = (await session.scalars(select(User).where(User.id.in_(ids)))).all()
            return {str(u.id): user_to_record(u) for u in rows}

    async def find_all(self) -> list[UserRecord]:
        async with self._session_factory() as session:
            rows = (await session.scalars(select(User).order_by(User.id))).all()
            return [user_to_record(u) for u in rows]

    async def update(self, user_id: str, payload: Mapping[str, Any]) -> UserRecord:
        pk = parse_id(user_id, "user")
        async with self._session_factory() as session:
            user = await session.get(User, pk, with_for_update=True)
            if user is None:
                raise NotFoundError("user not found")
            changes = validate_user_update(payload)
            if "email" in changes and await self._email_taken(session, changes["email"], exclude=pk):
                raise ConflictError("email already exists")
            for key, value in changes.items():
                setattr(user, key, value)
            user.updated_at = utcnow()
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise ConflictError("email already exists") from exc
            record = user_to_record(user)
        logger.info("user_updated", user_id=record.id, fields=sorted(changes), backend="sql")
        return record

    async def delete(self, user_id: str) -> None:
        pk = parse_id(user_id, "user")
        async with self._session_factory() as session:
            user = await session.get(User, pk)
            if user is None:
                raise NotFoundError("user not found")
            # gym_reviews.user_id has no FK; reviews on gyms survive the user
            await session.delete(user)
            await session.commit()
        logger.info("user_deleted", user_id=str(pk), backend="sql")

    async def add_favorite(self, user_id: str, gym_id: Any) -> UserRecord:
        pk = parse_id(user_id, "user")
        gid = parse_id(validate_favorite(gym_id), "gym")

        async with self._session_factory() as session:
            user = await session.get(User, pk, with_for_update=True)
            if user is None:
                raise NotFoundError("user not found")
            if await session.scalar(select(Gym.id).where(Gym.id == gid)) is None:
                raise NotFoundError("gym not found")
            if any(f.gym_id == gid for f in user.favorites):
                raise ConflictError("gym is already in favorites")

            now = utcnow()
            user.favorites.append(UserFavorite(gym_id=gid, created_at=now))
            user.updated_at = now
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise ConflictError("gym is already in favorites") from exc
            record = user_to_record(user)
        logger.info("favorite_added", user_id=record.id, gym_id=str(gid), backend="sql")
        return record
