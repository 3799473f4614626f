"""Repository adapters - Order store implementations."""

from .memory import InMemoryOrderRepository
from .postgres import PostgresOrderRepository, run_migrations

__all__ = ["InMemoryOrderRepository", "PostgresOrderRepository", "run_migrations"]
