# gym_directory/schemas/user.py
from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "Gender",
    "GENDER_ALIASES",
    "UserCreate",
    "UserUpdate",
    "FavoriteCreate",
    "UserReviewRead",
    "UserRead",
    "GymRef",
    "UserReviewDetail",
    "UserDetail",
    "UserListResponse",
]

EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$")
EMAIL_MAX_LENGTH = 254


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


GENDER_ALIASES: dict[str, Gender] = {
    "man": Gender.male,
    "vrouw": Gender.female,
    "anders": Gender.other,
}


class _UserFields(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def _lower_email(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("email", check_fields=False)
    @classmethod
    def _email_shape(cls, v: str | None) -> str | None:
        if v is not None and not EMAIL_PATTERN.match(v):
            raise ValueError("must be a valid email address")
        return v

    @field_validator("gender", mode="before", check_fields=False)
    @classmethod
    def _gender_alias(cls, v: Any) -> Any:
        if isinstance(v, str):
            key = v.strip().lower()
            return GENDER_ALIASES.get(key, key)
        return v


class UserCreate(_UserFields):
    name: str = Field(min_length=2, max_length=50)
    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    password: str = Field(min_length=6)
    age: int = Field(ge=13, le=120)
    gender: Gender
    location: str = Field(min_length=1, max_length=100)


class UserUpdate(_UserFields):
    """Partial update. ``password`` is not part of this model and is dropped."""

    name: str | None = Field(default=None, min_length=2, max_length=50)
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    age: int | None = Field(default=None, ge=13, le=120)
    gender: Gender | None = None
    location: str | None = Field(default=None, min_length=1, max_length=100)


class FavoriteCreate(BaseModel):
    gym_id: str = Field(min_length=1, description="ジムID")

    @field_validator("gym_id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v


class UserReviewRead(BaseModel):
    gym_id: str
    rating: int
    comment: str = ""
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    id: str
    name: str
    email: str
    age: int
    gender: Gender
    location: str
    favorite_gyms: list[str] = Field(default_factory=list)
    reviews: list[UserReviewRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GymRef(BaseModel):
    id: str
    name: str
    brand: str


class UserReviewDetail(UserReviewRead):
    gym: GymRef | None = Field(default=None, description="削除済みジムの場合は null")


class UserDetail(BaseModel):
    id: str
    name: str
    email: str
    age: int
    gender: Gender
    location: str
    favorite_gyms: list[GymRef] = Field(default_factory=list)
    reviews: list[UserReviewDetail] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class UserListResponse(BaseModel):
    items: list[UserRead]
    total: int = 0
