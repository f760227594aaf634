from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from src.application.dtos.common_dto import HealthResponse, RootResponse
from src.infrastructure.api.dependencies import get_db_client
from src.infrastructure.api.exception_handlers import register_exception_handlers
from src.infrastructure.api.middlewares import add_default_middlewares
from src.infrastructure.api.routes.profile_routes import router as profile_router
from src.infrastructure.database.postgres_client import PostgresClient, close_postgres_client
from src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s", app.title, app.version)
    yield
    close_postgres_client()
    logger.info("Database pool closed")


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title="Cycling Network Backend",
        version="0.1.0",
        description="""
        ## Cycling Network Backend API

        FastAPI backend serving the public profiles of a social network for cyclists,
        backed by PostgreSQL.

        ### Response envelope
        Every response body is wrapped in an envelope:
        ```
        {"success": true, "data": ...}
        {"success": false, "error": "..."}
        ```

        ### Error Responses
        - **400 Bad Request**: Missing query parameter or empty update
        - **404 Not Found**: The requested profile does not exist
        - **422 Unprocessable Entity**: Validation error in request body
        - **500 Internal Server Error**: The profile store failed; details are only logged
        """,
        lifespan=lifespan,
    )
    add_default_middlewares(app)
    register_exception_handlers(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the Cycling Network API",
        response_description="API information including status and version",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "cycling-network-backend", "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the API service is running and whether the database answers",
        response_description="Health status of the API service and its database",
    )
    def health(db: PostgresClient | None = Depends(get_db_client)):
        """Check API health status."""
        if db is None:
            database = "disabled"
        else:
            database = "ok" if db.test_connection() else "unavailable"
        return {"status": "healthy", "database": database}

    app.include_router(profile_router)
    return app


app = create_app()
