"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import health, locations, statistics, teams, visits
from .config import Settings, settings
from .db.session import Database
from .logging_config import configure_logging
from .services.placemark_import import import_locations

logger = logging.getLogger(__name__)


def bootstrap_database(app_settings: Settings) -> Database:
    """Recreate the store and import the placemark file once."""
    database = Database.from_settings(app_settings)
    logger.info(f"Initializing database at: {database.path}")
    if app_settings.reset_database_on_startup:
        database.reset()
    database.create_schema()
    import_locations(
        database,
        app_settings.placemark_file,
        required=app_settings.require_placemark_import,
    )
    return database


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(app_settings.log_level)
        app.state.database = bootstrap_database(app_settings)
        try:
            yield
        finally:
            app.state.database.dispose()

    app = FastAPI(title=app_settings.app_name, lifespan=lifespan)
    app.state.settings = app_settings

    if app_settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(app_settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=list(app_settings.cors_allow_methods),
            allow_headers=list(app_settings.cors_allow_headers),
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_input_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid input", "errors": jsonable_encoder(exc.errors())},
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": app_settings.app_name,
            "status": "running",
            "api_prefix": app_settings.api_prefix,
            "health": f"{app_settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=app_settings.api_prefix)
    app.include_router(locations.router, prefix=app_settings.api_prefix)
    app.include_router(visits.router, prefix=app_settings.api_prefix)
    app.include_router(teams.router, prefix=app_settings.api_prefix)
    app.include_router(statistics.router, prefix=app_settings.api_prefix)
    return app


app = create_app()
