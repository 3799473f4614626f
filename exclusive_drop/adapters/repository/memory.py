"""
In-memory repository adapter - Implements OrderRepository protocol.

Keeps orders in a process-local list. Selected with DATABASE_URL=memory://
for local development and used by the test suite. Every operation holds a
single lock, so reserve() is atomic with respect to concurrent threads.
"""

import threading
import uuid
from datetime import datetime, timezone

from exclusive_drop.domain.ports import Order


class InMemoryOrderRepository:
    """
    Implements OrderRepository protocol with a locked list.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Orders are kept in insertion order; listing reverses it.
    """

    def __init__(self) -> None:
        self._orders: list[Order] = []
        self._lock = threading.Lock()

    def count_orders(self) -> int:
        with self._lock:
            return len(self._orders)

    def reserve(self, email: str, capacity: int) -> Order | None:
        with self._lock:
            if len(self._orders) >= capacity:
                return None
            order = Order(
                id=uuid.uuid4().hex,
                email=email,
                created_at=datetime.now(timezone.utc),
            )
            self._orders.append(order)
            return order

    def list_orders(self) -> list[Order]:
        with self._lock:
            return list(reversed(self._orders))

    def delete_all(self) -> int:
        with self._lock:
            deleted = len(self._orders)
            self._orders.clear()
            return deleted
