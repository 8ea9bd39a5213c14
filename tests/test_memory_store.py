"""In-memory store specifics: id format and write serialisation."""

from __future__ import annotations

import asyncio

import pytest

from gym_directory.core.exceptions import ConflictError, InvalidIdError
from gym_directory.repositories.memory import InMemoryStore
from tests.factories.payloads import gym_payload, user_payload


@pytest.mark.asyncio
async def test_ids_follow_counter_format() -> None:
    store = InMemoryStore()

    gyms = [await store.gyms.create(gym_payload(name=f"Gym {i}")) for i in range(2)]
    user = await store.users.create(user_payload())

    assert [g.id for g in gyms] == ["gym1", "gym2"]
    assert user.id == "user1"


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["1", "gym", "user1", "gym1a", ""])
async def test_gym_ids_must_match_pattern(bad_id) -> None:
    store = InMemoryStore()
    with pytest.raises(InvalidIdError):
        await store.gyms.get(bad_id)


@pytest.mark.asyncio
async def test_concurrent_identical_reviews_only_one_wins() -> None:
    store = InMemoryStore()
    user = await store.users.create(user_payload())
    gym = await store.gyms.create(gym_payload())

    results = await asyncio.gather(
        store.gyms.add_review(gym.id, user_id=user.id, rating=4),
        store.gyms.add_review(gym.id, user_id=user.id, rating=5),
        return_exceptions=True,
    )

    failures = [r for r in results if isinstance(r, Exception)]
    assert len(failures) == 1
    assert isinstance(failures[0], ConflictError)
    assert len((await store.gyms.get(gym.id)).reviews) == 1
    assert len((await store.users.get(user.id)).reviews) == 1


@pytest.mark.asyncio
async def test_concurrent_signups_with_same_email_only_one_wins() -> None:
    store = InMemoryStore()

    results = await asyncio.gather(
        *(store.users.create(user_payload(email="same@example.com")) for _ in range(3)),
        return_exceptions=True,
    )

    assert sum(1 for r in results if not isinstance(r, Exception)) == 1
    assert len(await store.users.find_all()) == 1


@pytest.mark.asyncio
async def test_stores_do_not_share_state() -> None:
    first, second = InMemoryStore(), InMemoryStore()
    await first.gyms.create(gym_payload())

    assert await second.gyms.find_all() == []
