"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interface (port) that the domain requires
from the order store. Adapters implement this protocol.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class Order:
    """
    One accepted reservation.

    The id is assigned by the store and is opaque to the domain.
    created_at is set once at insertion and never changes.
    """

    id: str
    email: str
    created_at: datetime


class OrderRepository(Protocol):
    """Port interface for order persistence."""

    def count_orders(self) -> int:
        """Return the number of orders currently stored."""
        ...

    def reserve(self, email: str, capacity: int) -> Order | None:
        """
        Atomically insert an order if fewer than `capacity` orders exist.

        The count check and the insert happen as one store operation, so
        concurrent callers can never push the total above capacity.

        Args:
            email: Validated email address
            capacity: Maximum number of orders the store may hold

        Returns:
            The created Order, or None if the capacity was already reached
        """
        ...

    def list_orders(self) -> list[Order]:
        """Return every order, newest first."""
        ...

    def delete_all(self) -> int:
        """
        Delete every order.

        Returns:
            Number of orders deleted
        """
        ...
