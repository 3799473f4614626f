"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory order repository and waitlist service
- PostgreSQL connection pool (skips when no database is reachable)
- Fresh rate limiters so tests never share attempt counts
- Settings cache isolation
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from exclusive_drop.adapters.repository.memory import InMemoryOrderRepository
from exclusive_drop.adapters.repository.postgres import run_migrations
from exclusive_drop.api.dependencies import get_api_limiter, get_buy_limiter
from exclusive_drop.config.settings import Settings, get_settings
from exclusive_drop.domain.waitlist import WaitlistService


@pytest.fixture(autouse=True)
def clear_cached_singletons() -> Generator[None, None, None]:
    """Drop cached settings and limiters around every test."""
    get_settings.cache_clear()
    get_api_limiter.cache_clear()
    get_buy_limiter.cache_clear()
    yield
    get_settings.cache_clear()
    get_api_limiter.cache_clear()
    get_buy_limiter.cache_clear()


@pytest.fixture
def memory_repository() -> InMemoryOrderRepository:
    """Empty in-memory order store."""
    return InMemoryOrderRepository()


@pytest.fixture
def waitlist(memory_repository: InMemoryOrderRepository) -> WaitlistService:
    """Waitlist service with the default capacity of 5."""
    return WaitlistService(repository=memory_repository, capacity=5)


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Migrated connection pool against DATABASE_URL, or skip without PostgreSQL."""
    settings = Settings()
    if settings.uses_memory_store:
        pytest.skip("DATABASE_URL points at the in-memory store")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=20,
        open=True,
    )
    try:
        pool.wait(timeout=5)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")
    run_migrations(pool)
    yield pool
    pool.close()
