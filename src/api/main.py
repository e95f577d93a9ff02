"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from iam.presentation import router as iam_router
from infrastructure.database.dependencies import (
    check_database_health,
    close_database_connections,
)
from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.http_errors import register_error_handlers
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_cors_settings, get_settings
from infrastructure.version import __version__
from notes.presentation import router as notes_router


@asynccontextmanager
async def notes_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()
    probe.application_started(app_name=settings.app_name, version=__version__)

    yield

    try:
        await close_database_connections()
    except Exception as e:
        probe.shutdown_step_failed(step="close_database_connections", error=str(e))
    probe.application_stopped(app_name=settings.app_name)


app = FastAPI(
    title="Tenant Notes API",
    description="Multi-tenant notes with plan quotas",
    version=__version__,
    lifespan=notes_lifespan,
)

register_error_handlers(app)

_cors = get_cors_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors.allow_origins,
    allow_methods=_cors.allow_methods,
    allow_headers=_cors.allow_headers,
)

# Include bounded context routes
app.include_router(iam_router)
app.include_router(notes_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db() -> dict:
    """Check database connection health."""
    try:
        await check_database_health()
    except DatabaseConnectionError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from e
    return {"status": "ok", "connected": True}
