# truck_tracker/validation.py

from typing import Any, Mapping, NamedTuple, Optional

from pydantic import BaseModel, ValidationError

from truck_tracker.config import VALID_ROLES
from truck_tracker.models import TruckCreateData, TruckStatusUpdate, UserCreateData

# Fields a client may set on each operation. Anything else in the body is ignored.
USER_CREATE_FIELDS = ("username", "role")
TRUCK_CREATE_FIELDS = (
    "truck_id", "is_filled", "has_reached_destination",
    "destination", "current_location", "image_url",
)
TRUCK_UPDATE_FIELDS = ("is_filled", "has_reached_destination", "current_location")


class ValidationResult(NamedTuple):
    """Either a validated model or the ValidationError explaining why not."""
    value: Optional[BaseModel] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _pick(payload: Optional[Mapping[str, Any]], fields) -> dict:
    payload = payload or {}
    return {name: payload[name] for name in fields if name in payload}


def _build(model, data: dict) -> ValidationResult:
    try:
        return ValidationResult(value=model(**data))
    except ValidationError as e:
        return ValidationResult(error=e)


def is_valid_role(role: Any) -> bool:
    return role in VALID_ROLES


def validate_user(payload: Optional[Mapping[str, Any]]) -> ValidationResult:
    """Validates a new-user body. Role membership is checked separately with is_valid_role."""
    return _build(UserCreateData, _pick(payload, USER_CREATE_FIELDS))


def validate_truck(payload: Optional[Mapping[str, Any]]) -> ValidationResult:
    """
    Validates a new-truck body. Missing truck_id, destination or image_url,
    or a wrongly typed field, yields an error result; omitted status flags
    take their defaults and last_updated is set to now.
    """
    return _build(TruckCreateData, _pick(payload, TRUCK_CREATE_FIELDS))


def validate_truck_update(payload: Optional[Mapping[str, Any]]) -> ValidationResult:
    return _build(TruckStatusUpdate, _pick(payload, TRUCK_UPDATE_FIELDS))
