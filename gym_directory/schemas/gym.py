# gym_directory/schemas/gym.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "GymSize",
    "SIZE_ALIASES",
    "normalize_size",
    "CoordinatesIn",
    "GymCreate",
    "GymUpdate",
    "ReviewCreate",
    "CoordinatesOut",
    "ReviewerRef",
    "GymReviewRead",
    "GymRead",
    "GymListResponse",
]


class GymSize(str, Enum):
    small = "small"
    medium = "medium"
    large = "large"


# Localized values accepted on input (the first client was Dutch-language)
SIZE_ALIASES: dict[str, GymSize] = {
    "klein": GymSize.small,
    "middelgroot": GymSize.medium,
    "groot": GymSize.large,
}


def normalize_size(value: Any) -> Any:
    """Map aliases and case variants onto ``GymSize`` values; anything else is returned as is."""
    if isinstance(value, GymSize):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in SIZE_ALIASES:
            return SIZE_ALIASES[key]
        if key in GymSize.__members__:
            return GymSize(key)
    return value


class CoordinatesIn(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0, description="緯度（-90〜90）")
    lng: float = Field(ge=-180.0, le=180.0, description="経度（-180〜180）")


class _GymFields(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("size", mode="before", check_fields=False)
    @classmethod
    def _size_alias(cls, v: Any) -> Any:
        return normalize_size(v)

    @field_validator("distance", mode="before", check_fields=False)
    @classmethod
    def _distance_default(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator("equipment", check_fields=False)
    @classmethod
    def _equipment_entries(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        if any(not item for item in v):
            raise ValueError("equipment entries must be non-empty strings")
        return v


class GymCreate(_GymFields):
    name: str = Field(min_length=2, max_length=100)
    brand: str = Field(min_length=1, max_length=50)
    equipment: list[str] = Field(min_length=1)
    size: GymSize
    has_shower: bool = False
    distance: float = Field(default=0.0, ge=0.0)
    coordinates: CoordinatesIn


class GymUpdate(_GymFields):
    """Partial update. Only fields present in the payload are validated."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    brand: str | None = Field(default=None, min_length=1, max_length=50)
    equipment: list[str] | None = Field(default=None, min_length=1)
    size: GymSize | None = None
    has_shower: bool | None = None
    distance: float | None = Field(default=None, ge=0.0)
    coordinates: CoordinatesIn | None = None


class ReviewCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    user_id: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    comment: str = Field(default="", max_length=500)

    @field_validator("user_id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    @field_validator("comment", mode="before")
    @classmethod
    def _comment_default(cls, v: Any) -> Any:
        return "" if v is None else v


class CoordinatesOut(BaseModel):
    lat: float
    lng: float

    model_config = ConfigDict(from_attributes=True)


class ReviewerRef(BaseModel):
    id: str
    name: str
    email: str


class GymReviewRead(BaseModel):
    user_id: str = Field(description="レビューしたユーザーID（削除済みの場合も残る）")
    rating: int
    comment: str = ""
    created_at: datetime
    user: ReviewerRef | None = Field(default=None, description="詳細取得時のみ解決")

    model_config = ConfigDict(from_attributes=True)


class GymRead(BaseModel):
    id: str
    name: str
    brand: str
    equipment: list[str]
    size: GymSize
    has_shower: bool
    distance: float
    coordinates: CoordinatesOut
    reviews: list[GymReviewRead] = Field(default_factory=list)
    average_rating: float = Field(default=0, description="レビュー平均（小数第2位）")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GymListResponse(BaseModel):
    items: list[GymRead] = Field(description="ジム一覧")
    total: int = Field(default=0, description="件数")
