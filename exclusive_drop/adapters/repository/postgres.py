"""
PostgreSQL repository adapter - Implements OrderRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Capacity Guarantee:
-------------------
reserve() runs inside a single transaction:

1. **LOCK TABLE orders IN EXCLUSIVE MODE**: Conflicts with every writer
   (INSERT, DELETE) but not with plain SELECTs, so concurrent reservations
   queue up while status and listing reads keep flowing.

2. **INSERT ... SELECT ... WHERE count < capacity**: The count is read and
   the row inserted by one statement while the lock is held. A request that
   arrives after the last unit is taken inserts nothing.

The lock is released at commit, so the next waiting reservation sees the
updated count.
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from exclusive_drop.domain.exceptions import StoreUnavailable
from exclusive_drop.domain.ports import Order

logger = logging.getLogger(__name__)

# Shipped as package data: exclusive_drop/migrations/*.sql
MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"


class PostgresOrderRepository:
    """
    Implements OrderRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    Driver and pool errors surface as StoreUnavailable.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def count_orders(self) -> int:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute("SELECT COUNT(*) FROM orders")
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Could not count orders: %s", e)
            raise StoreUnavailable("Could not count orders") from e
        return row[0]

    def reserve(self, email: str, capacity: int) -> Order | None:
        """
        Atomically insert an order if fewer than `capacity` orders exist.

        Args:
            email: Validated email address
            capacity: Maximum number of orders the table may hold

        Returns:
            The created Order, or None if the table is already full
        """
        lock_sql = "LOCK TABLE orders IN EXCLUSIVE MODE"

        insert_sql = """
            INSERT INTO orders (email)
            SELECT %s
            WHERE (SELECT COUNT(*) FROM orders) < %s
            RETURNING id, email, created_at
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(lock_sql)
                cursor.execute(insert_sql, (email, capacity))
                row = cursor.fetchone()
                conn.commit()
        except psycopg.Error as e:
            logger.error("Could not reserve order: %s", e)
            raise StoreUnavailable("Could not reserve order") from e

        if row is None:
            return None
        return Order(id=str(row[0]), email=row[1], created_at=row[2])

    def list_orders(self) -> list[Order]:
        # seq breaks ties between rows sharing a timestamp
        sql = """
            SELECT id, email, created_at
            FROM orders
            ORDER BY created_at DESC, seq DESC
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        except psycopg.Error as e:
            logger.error("Could not list orders: %s", e)
            raise StoreUnavailable("Could not list orders") from e
        return [Order(id=str(row[0]), email=row[1], created_at=row[2]) for row in rows]

    def delete_all(self) -> int:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute("DELETE FROM orders")
                deleted = cursor.rowcount
                conn.commit()
        except psycopg.Error as e:
            logger.error("Could not delete orders: %s", e)
            raise StoreUnavailable("Could not delete orders") from e
        return deleted


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Directory holding the *.sql files (package data by default)
    """
    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
