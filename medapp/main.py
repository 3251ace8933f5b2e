"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request

from .config import Settings, get_settings
from .core.middleware import setup_middlewares
from .database import Database
from .doctors.router import router as doctors_router
from .exceptions import register_exception_handlers
from .patients.router import router as patients_router
from .users.router import router as users_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use, read from the environment when omitted
        database: Database handle to use, built from the settings when omitted

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting MedApp API...")
        if settings.create_tables:
            database.create_tables()
        database.test_database_connection()
        yield
        logger.info("Shutting down MedApp API, closing database pool")
        database.dispose()

    app = FastAPI(
        title="MedApp API",
        description="Signup API for users, doctors and patients",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # Register exception handlers
    register_exception_handlers(app)

    # Setup custom middleware
    setup_middlewares(app, settings)

    # Include routers
    app.include_router(users_router, prefix="/api/users", tags=["Users"])
    app.include_router(doctors_router, prefix="/api/doctors", tags=["Doctors"])
    app.include_router(patients_router, prefix="/api/patients", tags=["Patients"])

    @app.get("/")
    def root():
        """Root endpoint with a simple welcome message."""
        return {"message": "Welcome To My Med App!", "version": app.version}

    @app.get("/health")
    def health_check(request: Request):
        """
        Health check endpoint for monitoring.

        Returns:
            dict: Health status including whether the database answered
        """
        connected = request.app.state.database.test_database_connection()
        return {
            "status": "healthy" if connected else "degraded",
            "database": "connected" if connected else "unreachable",
        }

    return app


def run():
    """Run the API with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
