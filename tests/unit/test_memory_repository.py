"""
Unit tests for InMemoryOrderRepository.

Tests the in-process store, including atomic reservation under threads.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from exclusive_drop.adapters.repository.memory import InMemoryOrderRepository


class TestReserve:
    """Tests for reserve()."""

    def test_reserve_below_capacity_returns_order(
        self, memory_repository: InMemoryOrderRepository
    ) -> None:
        """A reservation with room left creates an order."""
        order = memory_repository.reserve("a@b.com", 5)

        assert order is not None
        assert order.email == "a@b.com"
        assert order.id
        assert order.created_at.tzinfo is not None
        assert memory_repository.count_orders() == 1

    def test_reserve_at_capacity_returns_none(
        self, memory_repository: InMemoryOrderRepository
    ) -> None:
        """A full store refuses further reservations without inserting."""
        for i in range(3):
            assert memory_repository.reserve(f"u{i}@b.com", 3) is not None

        assert memory_repository.reserve("late@b.com", 3) is None
        assert memory_repository.count_orders() == 3

    def test_ids_are_unique(self, memory_repository: InMemoryOrderRepository) -> None:
        """Every order gets its own identifier."""
        ids = {memory_repository.reserve("a@b.com", 50).id for _ in range(20)}
        assert len(ids) == 20

    def test_concurrent_reservations_never_exceed_capacity(
        self, memory_repository: InMemoryOrderRepository
    ) -> None:
        """Many threads racing for 5 units admit exactly 5."""
        results: list[bool] = []
        results_lock = threading.Lock()
        num_buyers = 50
        barrier = threading.Barrier(num_buyers)

        def buy(i: int) -> None:
            barrier.wait()
            order = memory_repository.reserve(f"buyer{i}@example.com", 5)
            with results_lock:
                results.append(order is not None)

        with ThreadPoolExecutor(max_workers=num_buyers) as executor:
            futures = [executor.submit(buy, i) for i in range(num_buyers)]
            for f in futures:
                f.result()

        assert results.count(True) == 5
        assert memory_repository.count_orders() == 5


class TestListAndDelete:
    """Tests for list_orders() and delete_all()."""

    def test_list_is_newest_first(self, memory_repository: InMemoryOrderRepository) -> None:
        """Orders come back in reverse insertion order."""
        for email in ("first@b.com", "second@b.com", "third@b.com"):
            memory_repository.reserve(email, 5)

        emails = [order.email for order in memory_repository.list_orders()]

        assert emails == ["third@b.com", "second@b.com", "first@b.com"]

    def test_list_returns_a_copy(self, memory_repository: InMemoryOrderRepository) -> None:
        """Mutating the returned list does not touch the store."""
        memory_repository.reserve("a@b.com", 5)
        memory_repository.list_orders().clear()
        assert memory_repository.count_orders() == 1

    def test_delete_all_returns_count(self, memory_repository: InMemoryOrderRepository) -> None:
        """delete_all reports how many orders were removed."""
        for i in range(4):
            memory_repository.reserve(f"u{i}@b.com", 5)

        assert memory_repository.delete_all() == 4
        assert memory_repository.delete_all() == 0
        assert memory_repository.list_orders() == []
