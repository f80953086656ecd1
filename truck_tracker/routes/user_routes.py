# truck_tracker/routes/user_routes.py

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status

from truck_tracker.config import logger, USERS_ROUTE
from truck_tracker.database import Database, get_database
from truck_tracker.exceptions import InvalidRoleError, PersistenceError
from truck_tracker.models import UserRecord
from truck_tracker.validation import is_valid_role, validate_user

# Create an API router for user-related routes
router = APIRouter()


@router.post(USERS_ROUTE, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: Optional[Dict[str, Any]] = Body(None),
    database: Database = Depends(get_database)
):
    """
    Creates a new user (customer or administrator) with an empty action plan.
    The role is checked before anything else; a duplicate username is
    rejected by the unique index and reported as a persistence error.
    """
    payload = payload or {}
    username = payload.get("username")
    role = payload.get("role")
    logger.info(f"User creation requested: username={username}, role={role}.")

    if not is_valid_role(role):
        logger.warning(f"Rejected user {username}: invalid role {role!r}.")
        raise InvalidRoleError(role)

    result = validate_user(payload)
    if not result.ok:
        logger.error(f"Validation error during user creation: {result.error.errors()}")
        raise PersistenceError("Error creating user", result.error)

    user_dict = result.value.model_dump(mode="json")
    try:
        inserted = database.users.insert_one(user_dict)
    except Exception as e:
        logger.error(f"Error creating user {username}: {e}")
        raise PersistenceError("Error creating user", e) from e

    # insert_one stores the generated ObjectId on user_dict as '_id'.
    user_dict["_id"] = inserted.inserted_id
    logger.info(f"User {username} created successfully.")
    return UserRecord.model_validate(user_dict).to_json()
