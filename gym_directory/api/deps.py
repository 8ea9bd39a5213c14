"""API dependency helpers and service providers."""

from fastapi import Depends, Request

from gym_directory.core.exceptions import InfrastructureError
from gym_directory.repositories.interfaces import Store
from gym_directory.services.gyms import GymService
from gym_directory.services.health import HealthService
from gym_directory.services.users import UserService

__all__ = [
    "get_store",
    "get_gym_service",
    "get_user_service",
    "get_health_service",
]


def get_store(request: Request) -> Store:
    """The store chosen at startup lives on ``app.state``."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise InfrastructureError("store is not initialised")
    return store


# --- Service providers for DI ---


def get_gym_service(store: Store = Depends(get_store)) -> GymService:
    return GymService(store)


def get_user_service(store: Store = Depends(get_store)) -> UserService:
    return UserService(store)


def get_health_service(store: Store = Depends(get_store)) -> HealthService:
    return HealthService(store)
