"""Explicit state container for the in-memory store."""

from __future__ import annotations

import asyncio

from gym_directory.repositories.interfaces import GymRecord, UserRecord


class InMemoryState:
    """Collections, id counters and the single writer lock shared by both repositories."""

    def __init__(self) -> None:
        self.gyms: dict[str, GymRecord] = {}
        self.users: dict[str, UserRecord] = {}
        self._gym_counter = 1
        self._user_counter = 1
        self.lock = asyncio.Lock()

    def next_gym_id(self) -> str:
        gym_id = f"gym{self._gym_counter}"
        self._gym_counter += 1
        return gym_id

    def next_user_id(self) -> str:
        user_id = f"user{self._user_counter}"
        self._user_counter += 1
        return user_id
