"""Unit tests for filtering, average rating and ordering of gyms."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from gym_directory.repositories.interfaces import (
    Coordinates,
    GymFilter,
    GymRecord,
    GymReviewRow,
)
from gym_directory.services.gym_query import average_rating, filter_gyms, rank_gyms, sort_gyms
from gym_directory.utils.sort import resolve_sort_key

pytestmark = pytest.mark.unit

_TS = datetime(2024, 6, 1, 9, 0, 0, tzinfo=UTC)


def _review(rating: int, user_id: str = "user1") -> GymReviewRow:
    return GymReviewRow(user_id=user_id, rating=rating, comment="", created_at=_TS)


def _gym(gym_id: str, name: str, **kwargs) -> GymRecord:
    values = {
        "brand": "Basic-Fit",
        "equipment": ["Loopband"],
        "size": "medium",
        "has_shower": False,
        "distance": 0.0,
        "reviews": [],
    }
    values.update(kwargs)
    return GymRecord(
        id=gym_id,
        name=name,
        coordinates=Coordinates(lat=50.0, lng=4.0),
        created_at=_TS,
        updated_at=_TS,
        **values,
    )


def test_average_rating_is_zero_without_reviews() -> None:
    assert average_rating([]) == 0


def test_average_rating_of_four_and_five() -> None:
    assert average_rating([_review(4), _review(5)]) == 4.5


def test_average_rating_rounds_to_two_decimals() -> None:
    assert average_rating([_review(1), _review(2), _review(2)]) == 1.67
    assert average_rating([_review(4), _review(4), _review(5)]) == 4.33


def test_average_rating_rounds_half_up() -> None:
    # 9 / 8 = 1.125 exactly; banker's rounding would give 1.12
    ratings = [1, 1, 1, 1, 1, 1, 1, 2]
    assert average_rating([_review(r) for r in ratings]) == 1.13


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "name"),
        ("", "name"),
        ("rating", "rating"),
        ("distance", "distance"),
        ("afstand", "distance"),
        ("AFSTAND", "distance"),
        ("size", "size"),
        ("grootte", "size"),
        ("popularity", "name"),
    ],
)
def test_resolve_sort_key(raw, expected) -> None:
    assert resolve_sort_key(raw) == expected


def test_filters_are_and_combined() -> None:
    gyms = [
        _gym("gym1", "A", brand="Basic-Fit", has_shower=True, equipment=["Chest Press"]),
        _gym("gym2", "B", brand="Basic-Fit", has_shower=False, equipment=["Chest Press"]),
        _gym("gym3", "C", brand="Jims", has_shower=True, equipment=["Chest Press"]),
        _gym("gym4", "D", brand="basic-fit", has_shower=True, equipment=["Leg Press"]),
    ]
    flt = GymFilter(has_shower=True, brand="BASIC", equipment_type="chest")

    assert [g.id for g in filter_gyms(gyms, flt)] == ["gym1"]


def test_size_filter_accepts_aliases_and_rejects_unknown() -> None:
    gyms = [_gym("gym1", "A", size="large"), _gym("gym2", "B", size="small")]

    assert [g.id for g in filter_gyms(gyms, GymFilter(size="groot"))] == ["gym1"]
    assert [g.id for g in filter_gyms(gyms, GymFilter(size="Small"))] == ["gym2"]
    assert filter_gyms(gyms, GymFilter(size="huge")) == []


def test_no_filter_keeps_everything_in_order() -> None:
    gyms = [_gym("gym2", "B"), _gym("gym1", "A")]
    assert [g.id for g in filter_gyms(gyms, None)] == ["gym2", "gym1"]
    assert [g.id for g in filter_gyms(gyms, GymFilter())] == ["gym2", "gym1"]


def test_rank_sorts_by_name_by_default() -> None:
    gyms = [_gym("gym1", "Zwolle"), _gym("gym2", "Antwerpen"), _gym("gym3", "Gent")]
    assert [g.name for g in rank_gyms(gyms)] == ["Antwerpen", "Gent", "Zwolle"]


def test_rank_by_rating_descending_is_stable() -> None:
    gyms = [
        _gym("gym1", "A"),
        _gym("gym2", "B", reviews=[_review(5)]),
        _gym("gym3", "C"),
        _gym("gym4", "D", reviews=[_review(3), _review(4, "user2")]),
    ]
    ranked = rank_gyms(gyms, sort_by="rating")

    assert [g.id for g in ranked] == ["gym2", "gym4", "gym1", "gym3"]
    assert [g.average_rating for g in ranked] == [5.0, 3.5, 0, 0]


def test_rank_by_distance_ascending() -> None:
    gyms = [
        _gym("gym1", "A", distance=3.8),
        _gym("gym2", "B", distance=0.0),
        _gym("gym3", "C", distance=1.2),
    ]
    assert [g.id for g in rank_gyms(gyms, sort_by="afstand")] == ["gym2", "gym3", "gym1"]


def test_rank_by_size_uses_small_medium_large_order() -> None:
    gyms = [
        _gym("gym1", "A", size="large"),
        _gym("gym2", "B", size="small"),
        _gym("gym3", "C", size="medium"),
        _gym("gym4", "D", size="small"),
    ]
    ranked = rank_gyms(gyms, sort_by="grootte")
    assert [g.id for g in ranked] == ["gym2", "gym4", "gym3", "gym1"]


def test_sort_gyms_does_not_mutate_input() -> None:
    views = rank_gyms([_gym("gym1", "B"), _gym("gym2", "A")], sort_by="rating")
    before = [v.id for v in views]
    sort_gyms(views, "name")
    assert [v.id for v in views] == before


def test_rank_with_filter_and_sort() -> None:
    gyms = [
        _gym("gym1", "A", has_shower=True, distance=5.0),
        _gym("gym2", "B", has_shower=False, distance=1.0),
        _gym("gym3", "C", has_shower=True, distance=2.0),
    ]
    ranked = rank_gyms(gyms, GymFilter(has_shower=True), "distance")
    assert [g.id for g in ranked] == ["gym3", "gym1"]
