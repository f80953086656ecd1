"""
Shared fixtures: an in-memory MongoDB and a TestClient bound to it.
"""

import os
import uuid

# Keep test runs from writing app.log into the working directory.
os.environ["LOG_FILE"] = ""

import mongomock
import pytest
from fastapi.testclient import TestClient

from truck_tracker.database import Database
from truck_tracker.main import create_app


def unique_db_name():
    """A fresh database name, so tests never see each other's documents."""
    return f"garbage_tracker_test_{uuid.uuid4().hex}"


@pytest.fixture
def database():
    """A Database backed by mongomock, with the unique indexes in place."""
    db = Database(mongomock.MongoClient(), unique_db_name())
    db.ensure_indexes()
    return db


@pytest.fixture
def client(database):
    return TestClient(create_app(database))


@pytest.fixture
def truck_payload():
    return {
        "truck_id": "TRK-001",
        "destination": "North Landfill",
        "image_url": "https://cctv.example.com/captures/trk-001.jpg",
        "current_location": {"latitude": 12.9716, "longitude": 77.5946},
    }
