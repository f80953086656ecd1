# truck_tracker/config.py

import logging
import os
from dotenv import load_dotenv

# --- Load environment variables ---
# Load .env file, overriding existing environment variables if they conflict.
loaded = load_dotenv(override=True)

# --- Configure Logger ---
# Using __name__ ensures the logger name reflects the module it's in.
logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# File handler for logging to a file. An empty LOG_FILE disables it.
LOG_FILE = os.getenv("LOG_FILE", "app.log")
if LOG_FILE:
    file_handler = logging.FileHandler(LOG_FILE)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

# Stream handler for logging to console
stream_handler = logging.StreamHandler()
stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
logger.addHandler(stream_handler)

logger.info("Logger initialized.")
logger.info(f".env file loaded: {loaded}")

# --- Configuration Variables ---
# MongoDB connection string.
MONGO_URL = os.getenv("MONGO_URL")
# Database holding the users and trucks collections.
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "garbage_tracker")

# A missing connection string is not fatal: the server still starts and
# each request fails on its own. There is no fallback to localhost.
if not MONGO_URL:
    logger.error("MONGO_URL is not set. Database operations will fail.")

# Seconds the startup ping may wait for a reachable server.
MONGO_PING_TIMEOUT = float(os.getenv("MONGO_PING_TIMEOUT", "5"))

# --- Server ---
HOST = os.getenv("HOST", "0.0.0.0")
PORT = 3000

# --- Collections ---
USERS_COLLECTION = "users"
TRUCKS_COLLECTION = "trucks"

# --- URL Path Constants ---
USERS_ROUTE = "/users"
TRUCKS_ROUTE = "/trucks"

# --- Roles ---
VALID_ROLES = ("customer", "administrator")
