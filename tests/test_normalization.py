"""Unit tests for payload normalisation and validation."""

from __future__ import annotations

import time
from datetime import UTC, datetime

import pytest

from gym_directory.core.exceptions import ValidationError
from gym_directory.repositories.interfaces import Coordinates, GymRecord
from gym_directory.services.normalization import (
    PREMIUM_EQUIPMENT,
    apply_gym_master_rule,
    is_gym_master,
    validate_favorite,
    validate_gym_create,
    validate_gym_update,
    validate_review,
    validate_user_create,
    validate_user_update,
)
from tests.factories.payloads import gym_payload, user_payload

pytestmark = pytest.mark.unit


def _current(**kwargs) -> GymRecord:
    ts = datetime(2024, 1, 1, tzinfo=UTC)
    values = {
        "id": "gym1",
        "name": "Basic-Fit Leuven",
        "brand": "Basic-Fit",
        "equipment": ["Loopband"],
        "size": "small",
        "has_shower": False,
        "distance": 5.0,
        "coordinates": Coordinates(lat=50.0, lng=4.0),
        "created_at": ts,
        "updated_at": ts,
    }
    values.update(kwargs)
    return GymRecord(**values)


@pytest.mark.parametrize("name", ["Gym Master", "  gym master ", "GYM MASTER"])
def test_is_gym_master_ignores_case_and_padding(name) -> None:
    assert is_gym_master(name)


def test_is_gym_master_rejects_other_names() -> None:
    assert not is_gym_master("Gym Masters")
    assert not is_gym_master(None)


def test_gym_master_create_needs_neither_size_nor_equipment() -> None:
    payload = {"name": "Gym Master", "brand": "GM", "coordinates": {"lat": 51.0, "lng": 4.0}}

    data = validate_gym_create(payload)

    assert data["size"] == "large"
    assert data["has_shower"] is True
    assert data["equipment"] == list(PREMIUM_EQUIPMENT)
    assert data["distance"] == 0.0


def test_gym_master_keeps_supplied_equipment() -> None:
    data = validate_gym_create(gym_payload(name="gym master", size="small", equipment=["Bench"]))
    assert data["equipment"] == ["Bench"]
    assert data["size"] == "large"


def test_gym_master_rule_leaves_other_gyms_alone() -> None:
    payload = gym_payload(has_shower=False)
    assert apply_gym_master_rule(payload) == payload


def test_create_reports_every_violation() -> None:
    payload = gym_payload(name="A", size="huge")
    del payload["coordinates"]

    with pytest.raises(ValidationError) as exc_info:
        validate_gym_create(payload)

    messages = exc_info.value.messages
    assert any(m.startswith("name") for m in messages)
    assert any(m.startswith("size") for m in messages)
    assert any(m.startswith("coordinates") for m in messages)


def test_create_strips_and_normalises_aliases() -> None:
    data = validate_gym_create(gym_payload(name="  Jims Gent  ", size="middelgroot", distance=None))
    assert data["name"] == "Jims Gent"
    assert data["size"] == "medium"
    assert data["distance"] == 0.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"equipment": []},
        {"coordinates": {"lat": 91.0, "lng": 4.0}},
        {"coordinates": {"lat": 50.0, "lng": -181.0}},
        {"distance": -1},
        {"brand": ""},
    ],
)
def test_create_rejects_out_of_range_fields(overrides) -> None:
    with pytest.raises(ValidationError):
        validate_gym_create(gym_payload(**overrides))


def test_update_validates_only_supplied_fields() -> None:
    changes = validate_gym_update({"distance": 2.0}, current=_current())
    assert changes == {"distance": 2.0}


def test_update_ignores_store_managed_fields() -> None:
    changes = validate_gym_update(
        {"id": "gym42", "reviews": [], "created_at": "x", "brand": "Jims"}, current=_current()
    )
    assert changes == {"brand": "Jims"}


def test_update_rejects_explicit_null_for_required_field() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_gym_update({"name": None}, current=_current())
    assert exc_info.value.messages == ["name: may not be null"]


def test_update_null_distance_resets_to_zero() -> None:
    assert validate_gym_update({"distance": None}, current=_current()) == {"distance": 0.0}


def test_update_rename_to_gym_master_keeps_current_equipment() -> None:
    changes = validate_gym_update({"name": "Gym Master"}, current=_current())
    assert changes["size"] == "large"
    assert changes["has_shower"] is True
    assert "equipment" not in changes


def test_update_clearing_equipment_of_gym_master_gets_premium_set() -> None:
    current = _current(name="Gym Master", size="large", has_shower=True)
    changes = validate_gym_update({"equipment": []}, current=current)
    assert changes["equipment"] == list(PREMIUM_EQUIPMENT)


def test_update_without_name_or_equipment_skips_rule() -> None:
    current = _current(name="Gym Master", size="large", has_shower=True)
    assert validate_gym_update({"size": "small"}, current=current) == {"size": "small"}


def test_user_create_lowercases_email_and_maps_gender_alias() -> None:
    data = validate_user_create(user_payload(email="  Jan.Peeters@Gmail.COM ", gender="vrouw"))
    assert data["email"] == "jan.peeters@gmail.com"
    assert data["gender"] == "female"


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": "not-an-email"},
        {"password": "12345"},
        {"age": 12},
        {"age": 121},
        {"gender": "unknown"},
        {"name": "J"},
        {"location": "x" * 101},
    ],
)
def test_user_create_rejects_invalid_fields(overrides) -> None:
    with pytest.raises(ValidationError):
        validate_user_create(user_payload(**overrides))


def test_user_update_drops_password() -> None:
    assert validate_user_update({"password": "another-secret", "age": 40}) == {"age": 40}


def test_review_defaults_comment_and_checks_rating() -> None:
    review = validate_review(user_id="user1", rating=4, comment=None)
    assert review.comment == ""

    with pytest.raises(ValidationError):
        validate_review(user_id="user1", rating=6)
    with pytest.raises(ValidationError):
        validate_review(user_id="user1", rating=3, comment="x" * 501)
    with pytest.raises(ValidationError):
        validate_review(user_id=None, rating=3)


def test_favorite_accepts_integer_ids() -> None:
    assert validate_favorite(7) == "7"
    with pytest.raises(ValidationError):
        validate_favorite(None)


@pytest.mark.parametrize("email", ["a" * 26 + "!", "a" * 40 + "@" + "b" * 40 + "!", "a.b-c" * 40 + "@"])
def test_malformed_email_is_rejected_quickly(email) -> None:
    started = time.perf_counter()
    with pytest.raises(ValidationError):
        validate_user_create(user_payload(email=email))
    assert time.perf_counter() - started < 0.5


def test_email_length_is_capped() -> None:
    email = "a" * 250 + "@x.com"
    with pytest.raises(ValidationError) as exc_info:
        validate_user_create(user_payload(email=email))
    assert any(m.startswith("email") for m in exc_info.value.messages)

    with pytest.raises(ValidationError):
        validate_user_update({"email": email})


@pytest.mark.parametrize(
    "email", ["jan@example.com", "jan.peeters@gmail.com", "a-b.c@sub.example.co.uk", "x_y@mail.be"]
)
def test_common_email_shapes_are_accepted(email) -> None:
    assert validate_user_create(user_payload(email=email))["email"] == email
