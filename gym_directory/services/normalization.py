"""Payload normalisation and validation invoked by every store before a write.

Both store implementations call these helpers, so the Gym Master rule and the
field rules behave the same whichever backend is active.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from gym_directory.core.exceptions import ValidationError
from gym_directory.repositories.interfaces import GymRecord
from gym_directory.schemas.gym import GymCreate, GymSize, GymUpdate, ReviewCreate
from gym_directory.schemas.user import FavoriteCreate, UserCreate, UserUpdate

logger = structlog.get_logger(__name__)

GYM_MASTER_NAME = "gym master"
PREMIUM_EQUIPMENT: tuple[str, ...] = (
    "Premium Chest Press",
    "Premium Loopband",
    "Premium Roeimachine",
)

# Fields whose explicit null means "reset to default" rather than a violation
_NULLABLE_ON_UPDATE = frozenset({"distance"})


def is_gym_master(name: Any) -> bool:
    return isinstance(name, str) and name.strip().lower() == GYM_MASTER_NAME


def apply_gym_master_rule(data: Mapping[str, Any], *, current: GymRecord | None = None) -> dict:
    """Return a copy of ``data`` with the Gym Master coercion applied when it triggers.

    The gym becomes large with showers; the premium equipment set is used only
    when the resulting equipment list would otherwise be empty.
    """
    out = dict(data)
    name = out.get("name", current.name if current else None)
    if not is_gym_master(name):
        return out

    out["size"] = GymSize.large.value
    out["has_shower"] = True
    equipment = out.get("equipment", current.equipment if current else None)
    if not equipment:
        out["equipment"] = list(PREMIUM_EQUIPMENT)
    logger.info("gym_master_rule_applied", gym_id=current.id if current else None)
    return out


def _as_dict(payload: Any) -> dict:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=True)
    if not isinstance(payload, Mapping):
        raise ValidationError("payload must be an object")
    return dict(payload)


def _error_messages(exc: PydanticValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


def _validate(model: type[BaseModel], data: dict, *, partial: bool) -> dict:
    messages: list[str] = []
    if partial:
        messages += [
            f"{key}: may not be null"
            for key in model.model_fields
            if key in data and data[key] is None and key not in _NULLABLE_ON_UPDATE
        ]
    try:
        validated = model.model_validate(data)
    except PydanticValidationError as exc:
        messages += _error_messages(exc)
        raise ValidationError(messages) from exc
    if messages:
        raise ValidationError(messages)
    return validated.model_dump(mode="json", exclude_unset=partial)


def validate_gym_create(payload: Any) -> dict:
    data = apply_gym_master_rule(_as_dict(payload))
    return _validate(GymCreate, data, partial=False)


def validate_gym_update(payload: Any, *, current: GymRecord) -> dict:
    """Validate only the supplied fields; returns the changes to merge."""
    data = _as_dict(payload)
    if "name" in data or "equipment" in data:
        data = apply_gym_master_rule(data, current=current)
    return _validate(GymUpdate, data, partial=True)


def validate_user_create(payload: Any) -> dict:
    return _validate(UserCreate, _as_dict(payload), partial=False)


def validate_user_update(payload: Any) -> dict:
    data = _as_dict(payload)
    data.pop("password", None)
    return _validate(UserUpdate, data, partial=True)


def validate_review(*, user_id: Any, rating: Any, comment: Any = None) -> ReviewCreate:
    data = {"user_id": user_id, "rating": rating, "comment": comment}
    try:
        return ReviewCreate.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_error_messages(exc)) from exc


def validate_favorite(gym_id: Any) -> str:
    try:
        return FavoriteCreate.model_validate({"gym_id": gym_id}).gym_id
    except PydanticValidationError as exc:
        raise ValidationError(_error_messages(exc)) from exc


__all__ = [
    "GYM_MASTER_NAME",
    "PREMIUM_EQUIPMENT",
    "apply_gym_master_rule",
    "is_gym_master",
    "validate_favorite",
    "validate_gym_create",
    "validate_gym_update",
    "validate_review",
    "validate_user_create",
    "validate_user_update",
]
