"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.identity import AllowlistAuthorityOracle, WallClockSequence
from src.adapters.ledger import ConsoleLedger
from src.adapters.repository import InMemoryCharityStore, PostgresCharityStore, run_migrations
from src.api.errors import install_error_handlers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Charity Registry API v1 - Register and update charitable organizations",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the charity store (in-memory or PostgreSQL)
    - Runs migrations and seeds registry state for PostgreSQL
    - Wires the authority oracle, ledger and sequence source
    - Closes the connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")

    pool: ConnectionPool | None = None
    if settings.storage_backend == "postgres":
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        store = PostgresCharityStore(pool)
        store.ensure_state(settings.max_charities, settings.registration_fee)
        app.state.store = store
    else:
        logger.info("Using in-memory charity store")
        app.state.store = InMemoryCharityStore(
            max_charities=settings.max_charities,
            registration_fee=settings.registration_fee,
        )

    app.state.pool = pool
    app.state.oracle = AllowlistAuthorityOracle(settings.verified_authorities)
    app.state.ledger = ConsoleLedger()
    app.state.sequence = WallClockSequence()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="charity-registry",
    description="Charity Registry API - Authority-gated registration of charitable organizations",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)
install_error_handlers(app)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with storage validation.

    Returns 200 OK if the application (and database, when configured) is healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy", "storage": "postgres" if pool is not None else "memory"}
