# truck_tracker/models.py

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    """Current time in UTC, truncated to the millisecond precision MongoDB stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class Role(str, Enum):
    CUSTOMER = "customer"
    ADMINISTRATOR = "administrator"


# Pydantic model for one suggested action shown to a user
class ActionPlanItem(BaseModel):
    label: str
    action_url: str


# Pydantic model for creating a new user
class UserCreateData(BaseModel):
    """
    Represents the required fields for creating a new user.
    A new user always starts with an empty action plan.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: str
    role: Role
    action_plan: List[ActionPlanItem] = Field(default_factory=list)


class Location(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


# Pydantic model for creating a new truck status entry
class TruckCreateData(BaseModel):
    """
    Represents the fields accepted when a truck is registered.
    truck_id, destination and image_url are mandatory; both status flags
    default to False and last_updated to the creation time.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    truck_id: str
    is_filled: bool = False
    has_reached_destination: bool = False
    destination: str
    current_location: Optional[Location] = None
    image_url: str
    last_updated: datetime = Field(default_factory=utcnow)

    @field_validator("is_filled", "has_reached_destination", mode="before")
    @classmethod
    def null_means_default(cls, value):
        # An explicit null is treated like an omitted flag.
        return False if value is None else value


# Pydantic model for a truck status update
class TruckStatusUpdate(BaseModel):
    """
    The mutable part of a truck record. Every field is written on update,
    so an omitted field is stored as null.
    """
    is_filled: Optional[bool] = None
    has_reached_destination: Optional[bool] = None
    current_location: Optional[Location] = None


class StoredRecord(BaseModel):
    """Base for documents read back from MongoDB; exposes the ObjectId as a string `_id`."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")

    @field_validator("id", mode="before")
    @classmethod
    def object_id_to_str(cls, value):
        return None if value is None else str(value)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class UserRecord(StoredRecord):
    username: str
    role: Role
    action_plan: List[ActionPlanItem] = Field(default_factory=list)


class TruckRecord(StoredRecord):
    truck_id: str
    is_filled: Optional[bool] = None
    has_reached_destination: Optional[bool] = None
    destination: str
    current_location: Optional[Location] = None
    location_name: Optional[str] = None
    last_updated: datetime
    image_url: str

    @field_validator("last_updated")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Clients created without tz_aware hand back naive UTC datetimes.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
