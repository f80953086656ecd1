# truck_tracker/main.py

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import logger and configuration variables
from truck_tracker.config import logger, HOST, PORT

# Import database connection function
from truck_tracker.database import Database, connect_to_mongodb
from truck_tracker.exceptions import TruckTrackerError

# Import routers from the routes subdirectory
from truck_tracker.routes import truck_routes, user_routes


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Builds the FastAPI application around a Database.
    When no database is given, a connection is opened from MONGO_URL.
    """
    if database is None:
        # --- MongoDB connection setup ---
        database = connect_to_mongodb()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.database.close()

    logger.info("Creating FastAPI app instance.")
    app = FastAPI(title="Garbage Truck Tracker", lifespan=lifespan)
    app.state.database = database

    # --- Include Routers ---
    app.include_router(user_routes.router)
    app.include_router(truck_routes.router)
    logger.info("All application routers included.")

    # ---------------------------
    # GLOBAL ERROR HANDLERS
    # ---------------------------

    @app.exception_handler(TruckTrackerError)
    async def tracker_exception_handler(request: Request, exc: TruckTrackerError):
        """
        Renders application errors as {"message": ..., "error": ...}
        with the status code the error class carries.
        """
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(exc.to_json(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Global exception handler for Starlette HTTP exceptions (e.g., 404 Not Found, 405 Method Not Allowed).
        """
        logger.error(f"HTTP Exception caught: {exc.status_code} - {exc.detail}")
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles request bodies FastAPI could not parse (e.g. not a JSON object).
        Returns 400 Bad Request.
        """
        logger.error(f"Validation Error caught: {exc.errors()}")
        return JSONResponse({"detail": jsonable_encoder(exc.errors())}, status_code=status.HTTP_400_BAD_REQUEST)

    return app


def run():
    """Console entry point: serves the application on the fixed port."""
    logger.info(f"Starting server on {HOST}:{PORT}.")
    uvicorn.run("truck_tracker.main:create_app", factory=True, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
