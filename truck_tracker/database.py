# truck_tracker/database.py

from typing import Optional

import pymongo
from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.errors import ConfigurationError, PyMongoError

from truck_tracker.config import (
    logger, MONGO_URL, MONGO_DB_NAME, MONGO_PING_TIMEOUT, USERS_COLLECTION, TRUCKS_COLLECTION
)
from truck_tracker.exceptions import PersistenceError


class Database:
    """
    Owns the MongoDB client and exposes the application's collections.
    One instance is created at startup and shared by every request.

    A Database without a client stands for a connection that could not be
    configured at startup; every request against it fails.
    """

    def __init__(self, client: Optional[MongoClient], db_name: str = MONGO_DB_NAME):
        self.client = client
        self.indexes_ensured = False
        self.db = self.users = self.trucks = None
        if client is not None:
            self.db = client[db_name]
            self.users = self.db[USERS_COLLECTION]
            self.trucks = self.db[TRUCKS_COLLECTION]

    def ensure_indexes(self):
        """Creates the unique indexes on users.username and trucks.truck_id."""
        if self.client is None:
            raise ConfigurationError("MongoDB client is not configured")
        self.users.create_index([("username", ASCENDING)], unique=True)
        self.trucks.create_index([("truck_id", ASCENDING)], unique=True)
        self.indexes_ensured = True
        logger.info("Unique indexes ensured on users.username and trucks.truck_id.")

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB client closed.")


def connect_to_mongodb(uri: Optional[str] = MONGO_URL, db_name: str = MONGO_DB_NAME) -> Database:
    """
    Establishes a connection to MongoDB and initializes collection objects.
    This function should be called once during application startup.

    Failures are logged, never raised. A missing or malformed URI yields a
    Database without a client. An unreachable server yields a Database
    whose indexes are created by the first request that finds it reachable.
    """
    if not uri:
        logger.critical("No MongoDB connection string configured; database operations will fail.")
        return Database(None, db_name)
    try:
        # Parses the URI (and resolves mongodb+srv records); the connection itself is lazy.
        client = MongoClient(uri, tz_aware=True, connect=False)
    except (PyMongoError, ValueError) as e:
        logger.critical(f"Invalid MongoDB connection string: {e}")
        return Database(None, db_name)

    database = Database(client, db_name)
    try:
        with pymongo.timeout(MONGO_PING_TIMEOUT):
            client.admin.command("ping")
        database.ensure_indexes()
        logger.info("MongoDB connection established and collections initialized.")
    except PyMongoError as e:
        logger.critical(f"Failed to connect to MongoDB: {e}")
    return database


def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the Database attached to the running app.
    Creates the unique indexes first if startup could not; no request is
    served until they exist.
    """
    database = request.app.state.database
    if not database.indexes_ensured:
        try:
            database.ensure_indexes()
        except PyMongoError as e:
            logger.error(f"Database unavailable: {e}")
            raise PersistenceError("Database unavailable", e) from e
    return database
