"""Bootstrap dataset loaded into the in-memory store (and optionally the database)."""

from __future__ import annotations

from typing import Any

import structlog

from gym_directory.repositories.interfaces import Store

logger = structlog.get_logger(__name__)

SEED_USERS: list[dict[str, Any]] = [
    {
        "name": "Jan Peeters",
        "email": "jan.peeters@gmail.com",
        "password": "password123",
        "age": 25,
        "gender": "male",
        "location": "Brussel",
    },
    {
        "name": "Marie Dubois",
        "email": "marie.dubois@gmail.com",
        "password": "password123",
        "age": 30,
        "gender": "female",
        "location": "Antwerpen",
    },
]

SEED_GYMS: list[dict[str, Any]] = [
    {
        "name": "Basic-Fit Brussel Centrum",
        "brand": "Basic-Fit",
        "equipment": ["Loopband", "Chest Press", "Roeimachine", "Dumbbells"],
        "size": "medium",
        "has_shower": True,
        "distance": 2.5,
        "coordinates": {"lat": 50.8503, "lng": 4.3517},
    },
    {
        "name": "Jims Antwerpen",
        "brand": "Jims",
        "equipment": ["Loopband", "Leg Press", "Pull-up Bar", "Kettlebells"],
        "size": "large",
        "has_shower": True,
        "distance": 1.2,
        "coordinates": {"lat": 51.2194, "lng": 4.4025},
    },
    {
        "name": "David Lloyd Gent",
        "brand": "David Lloyd",
        "equipment": ["Loopband", "Chest Press", "Swimming Pool", "Spa"],
        "size": "large",
        "has_shower": True,
        "distance": 3.8,
        "coordinates": {"lat": 51.0543, "lng": 3.7174},
    },
    {
        "name": "Basic-Fit Leuven",
        "brand": "Basic-Fit",
        "equipment": ["Loopband", "Chest Press"],
        "size": "small",
        "has_shower": False,
        "distance": 5.0,
        "coordinates": {"lat": 50.8798, "lng": 4.7005},
    },
]

# (gym index, user index, rating, comment)
SEED_REVIEWS: list[tuple[int, int, int, str]] = [
    (0, 0, 4, "Goede sfeer en moderne apparatuur!"),
    (1, 1, 5, "Uitstekende faciliteiten!"),
]


async def load_seed(store: Store) -> None:
    """Insert the bootstrap dataset through the store API so every invariant applies."""
    users = [await store.users.create(payload) for payload in SEED_USERS]
    gyms = [await store.gyms.create(payload) for payload in SEED_GYMS]
    for gym_idx, user_idx, rating, comment in SEED_REVIEWS:
        await store.gyms.add_review(
            gyms[gym_idx].id, user_id=users[user_idx].id, rating=rating, comment=comment
        )
    logger.info("seed_loaded", backend=store.backend, users=len(users), gyms=len(gyms))
