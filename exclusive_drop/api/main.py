"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool

from exclusive_drop.adapters.repository.memory import InMemoryOrderRepository
from exclusive_drop.adapters.repository.postgres import (
    PostgresOrderRepository,
    run_migrations,
)
from exclusive_drop.api.errors import register_exception_handlers
from exclusive_drop.api.middleware import harden_headers, log_requests
from exclusive_drop.api.routes import router as api_router
from exclusive_drop.config.observability import setup_logging
from exclusive_drop.config.settings import get_settings
from exclusive_drop.domain.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "waitlist",
        "description": "Limited-inventory waitlist - reserve, list and reset units of the drop",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the order store (connection pool or in-memory) on startup
    - Runs migrations on startup (PostgreSQL only)
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    logger.info("Starting application...")

    pool = None
    if settings.uses_memory_store:
        logger.info("Using in-memory order store")
        app.state.repository = InMemoryOrderRepository()
    else:
        logger.info("Connecting to database...")

        # Create connection pool with explicit sizing
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            open=True,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        # Store repository in app state for dependency injection
        app.state.repository = PostgresOrderRepository(pool)

    logger.info("Application startup complete (capacity=%d)", settings.capacity)

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="exclusive-drop",
    description="Limited-inventory waitlist API - never admits more registrants than units in stock",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Middleware added last runs first: CORS wraps header hardening wraps logging
app.middleware("http")(log_requests)
app.middleware("http")(harden_headers)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api")


@app.get("/health", response_model=None)
def health_check(request: Request) -> dict[str, str] | JSONResponse:
    """
    Health check endpoint with store validation.

    Returns 200 OK if application and order store are healthy, 503 otherwise.
    """
    try:
        request.app.state.repository.count_orders()
    except StoreUnavailable:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy"},
        )
    return {"status": "healthy"}


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
