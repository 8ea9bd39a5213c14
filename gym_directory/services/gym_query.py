"""Backend-agnostic filtering, derived fields and ordering for gyms.

Everything here works on materialised ``GymRecord`` objects so the output is
the same whichever store produced them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from gym_directory.repositories.interfaces import GymFilter, GymRecord, GymReviewRow
from gym_directory.schemas.gym import GymRead, GymSize, normalize_size
from gym_directory.utils.sort import SortKey, resolve_sort_key

SIZE_ORDER: dict[str, int] = {
    GymSize.small.value: 1,
    GymSize.medium.value: 2,
    GymSize.large.value: 3,
}

_CENT = Decimal("0.01")


def average_rating(reviews: Iterable[GymReviewRow]) -> float:
    """Mean rating rounded half-up to 2 decimals; 0 when there are no reviews."""
    ratings = [r.rating for r in reviews]
    if not ratings:
        return 0
    mean = sum(ratings) / len(ratings)
    return float(Decimal(str(mean)).quantize(_CENT, rounding=ROUND_HALF_UP))


def normalize_filter_size(size: str | None) -> str | None:
    if size is None:
        return None
    value = normalize_size(size)
    return value.value if isinstance(value, GymSize) else value


def matches(gym: GymRecord, filters: GymFilter) -> bool:
    if filters.has_shower and gym.has_shower is not True:
        return False
    if filters.brand and filters.brand.lower() not in gym.brand.lower():
        return False
    if filters.size and gym.size != normalize_filter_size(filters.size):
        return False
    if filters.equipment_type:
        needle = filters.equipment_type.lower()
        if not any(needle in item.lower() for item in gym.equipment):
            return False
    return True


def filter_gyms(gyms: Iterable[GymRecord], filters: GymFilter | None) -> list[GymRecord]:
    if filters is None:
        return list(gyms)
    return [g for g in gyms if matches(g, filters)]


def to_gym_read(gym: GymRecord) -> GymRead:
    view = GymRead.model_validate(gym)
    view.average_rating = average_rating(gym.reviews)
    return view


def sort_gyms(views: Sequence[GymRead], key: SortKey) -> list[GymRead]:
    """Stable sort; equal keys keep the store's insertion order."""
    if key == "rating":
        return sorted(views, key=lambda g: g.average_rating, reverse=True)
    if key == "distance":
        return sorted(views, key=lambda g: g.distance or 0)
    if key == "size":
        return sorted(views, key=lambda g: SIZE_ORDER.get(_size_value(g.size), 0))
    return sorted(views, key=lambda g: g.name)


def _size_value(size: GymSize | str) -> str:
    return size.value if isinstance(size, GymSize) else size


def rank_gyms(
    gyms: Iterable[GymRecord],
    filters: GymFilter | None = None,
    sort_by: str | None = None,
) -> list[GymRead]:
    views = [to_gym_read(g) for g in filter_gyms(gyms, filters)]
    return sort_gyms(views, resolve_sort_key(sort_by))


__all__ = [
    "SIZE_ORDER",
    "average_rating",
    "filter_gyms",
    "matches",
    "rank_gyms",
    "sort_gyms",
    "to_gym_read",
]
