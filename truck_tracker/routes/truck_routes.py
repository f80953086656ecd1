# truck_tracker/routes/truck_routes.py

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from pymongo import ReturnDocument

from truck_tracker.config import logger, TRUCKS_ROUTE
from truck_tracker.database import Database, get_database
from truck_tracker.exceptions import PersistenceError, TruckNotFoundError
from truck_tracker.models import TruckRecord, utcnow
from truck_tracker.validation import validate_truck, validate_truck_update

# Create an API router for truck status routes
router = APIRouter()


@router.post(TRUCKS_ROUTE, status_code=status.HTTP_201_CREATED)
def create_truck(
    payload: Optional[Dict[str, Any]] = Body(None),
    database: Database = Depends(get_database)
):
    """
    Creates a new truck status entry.
    Missing required fields and duplicate truck IDs are both reported as
    a 500 with the underlying error attached; nothing is stored.
    """
    result = validate_truck(payload)
    if not result.ok:
        logger.error(f"Validation error during truck creation: {result.error.errors()}")
        raise PersistenceError("Error creating truck entry", result.error)

    truck = result.value
    logger.info(f"Truck creation submitted for truck ID: {truck.truck_id}.")

    truck_dict = truck.model_dump()
    try:
        inserted = database.trucks.insert_one(truck_dict)
    except Exception as e:
        logger.error(f"Error creating truck {truck.truck_id}: {e}")
        raise PersistenceError("Error creating truck entry", e) from e

    truck_dict["_id"] = inserted.inserted_id
    logger.info(f"Truck {truck.truck_id} created successfully.")
    return TruckRecord.model_validate(truck_dict).to_json()


@router.get(TRUCKS_ROUTE + "/{truck_id}")
def get_truck(truck_id: str, database: Database = Depends(get_database)):
    """
    Returns the current status of a single truck.
    """
    logger.info(f"Status requested for truck {truck_id}.")
    try:
        truck = database.trucks.find_one({"truck_id": truck_id})
    except Exception as e:
        logger.error(f"Error fetching truck {truck_id}: {e}")
        raise PersistenceError("Error fetching truck status", e) from e

    if not truck:
        logger.warning(f"Truck not found: {truck_id}")
        raise TruckNotFoundError(truck_id)
    return TruckRecord.model_validate(truck).to_json()


@router.put(TRUCKS_ROUTE + "/{truck_id}")
def update_truck(
    truck_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    database: Database = Depends(get_database)
):
    """
    Updates whether a truck is filled, whether it has reached its
    destination, and its current location.

    All three fields are written on every call: a field left out of the
    body is stored as null rather than kept. last_updated is set to now.
    """
    result = validate_truck_update(payload)
    if not result.ok:
        logger.error(f"Validation error during update of truck {truck_id}: {result.error.errors()}")
        raise PersistenceError("Error updating truck status", result.error)

    update_data = result.value.model_dump()
    update_data["last_updated"] = utcnow()
    logger.info(f"Updating truck {truck_id} with {update_data}.")
    try:
        truck = database.trucks.find_one_and_update(
            {"truck_id": truck_id},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER
        )
    except Exception as e:
        logger.error(f"Error updating truck {truck_id}: {e}")
        raise PersistenceError("Error updating truck status", e) from e

    if not truck:
        logger.warning(f"Update attempted on non-existent truck {truck_id}.")
        raise TruckNotFoundError(truck_id)
    logger.info(f"Truck {truck_id} updated successfully.")
    return TruckRecord.model_validate(truck).to_json()


@router.get(TRUCKS_ROUTE)
def list_trucks(database: Database = Depends(get_database)):
    """
    Returns every truck and its status, in store order.
    """
    logger.info("All trucks requested.")
    try:
        trucks = [TruckRecord.model_validate(truck).to_json() for truck in database.trucks.find()]
    except Exception as e:
        logger.error(f"Error fetching trucks: {e}")
        raise PersistenceError("Error fetching trucks", e) from e
    logger.info(f"Fetched {len(trucks)} trucks.")
    return trucks
