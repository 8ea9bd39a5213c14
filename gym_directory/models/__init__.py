# gym_directory/models/__init__.py
# Imported by Alembic so the metadata sees every table
from .base import Base
from .gym import Gym, GymReview
from .user import User, UserFavorite, UserReview

__all__ = [
    "Base",
    "Gym",
    "GymReview",
    "User",
    "UserFavorite",
    "UserReview",
]
