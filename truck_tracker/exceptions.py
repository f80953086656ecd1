# truck_tracker/exceptions.py

import json
from typing import Any, Optional

from fastapi import status
from pydantic import ValidationError


def describe_error(exc: BaseException) -> dict:
    """
    Converts an exception into a JSON-safe payload returned to the client
    alongside the error message.
    """
    payload = {"name": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, ValidationError):
        payload["errors"] = json.loads(exc.json(include_url=False))
        return payload
    # pymongo OperationFailure (DuplicateKeyError included) carries a server code.
    code = getattr(exc, "code", None)
    if code is not None:
        payload["code"] = code
    details = getattr(exc, "details", None)
    if isinstance(details, dict) and "keyValue" in details:
        payload["keyValue"] = {k: str(v) for k, v in details["keyValue"].items()}
    return payload


class TruckTrackerError(Exception):
    """Base error rendered by the application's exception handler."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_json(self) -> dict:
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class InvalidRoleError(TruckTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, role: Any):
        super().__init__("Invalid role specified")
        self.role = role


class TruckNotFoundError(TruckTrackerError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, truck_id: str):
        super().__init__("Truck not found")
        self.truck_id = truck_id


class PersistenceError(TruckTrackerError):
    """Any failure while validating or storing a record; always a 500."""

    def __init__(self, message: str, cause: BaseException):
        super().__init__(message, describe_error(cause))
        self.cause = cause
