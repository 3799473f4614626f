"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for overselling race tests.
The PostgreSQL `pool` fixture comes from tests/conftest.py.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool

from exclusive_drop.adapters.repository.postgres import PostgresOrderRepository


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresOrderRepository:
    """Create repository instance for each test."""
    return PostgresOrderRepository(pool)


@pytest.fixture(autouse=True)
def clean_database(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Clean orders table before each PostgreSQL-backed test."""
    if "pool" in request.fixturenames:
        pool = request.getfixturevalue("pool")
        with pool.connection() as conn:
            conn.execute("DELETE FROM orders")
            conn.commit()
    yield
