from .common import ErrorResponse, OkResponse, ReadyResponse, ValidationErrorResponse
from .gym import (
    GymCreate,
    GymListResponse,
    GymRead,
    GymReviewRead,
    GymSize,
    GymUpdate,
    ReviewCreate,
)
from .user import (
    FavoriteCreate,
    Gender,
    UserCreate,
    UserDetail,
    UserListResponse,
    UserRead,
    UserUpdate,
)

__all__ = [
    "ErrorResponse",
    "OkResponse",
    "ReadyResponse",
    "ValidationErrorResponse",
    "GymCreate",
    "GymListResponse",
    "GymRead",
    "GymReviewRead",
    "GymSize",
    "GymUpdate",
    "ReviewCreate",
    "FavoriteCreate",
    "Gender",
    "UserCreate",
    "UserDetail",
    "UserListResponse",
    "UserRead",
    "UserUpdate",
]
