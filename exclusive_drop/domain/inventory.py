"""
Inventory policy - maps an order count to the campaign's stock status.
"""

from dataclasses import dataclass

DEFAULT_CAPACITY = 5


@dataclass(frozen=True)
class InventoryStatus:
    """Stock left in the campaign. Derived on read, never stored."""

    remaining: int
    sold_out: bool


def inventory_status(count: int, capacity: int = DEFAULT_CAPACITY) -> InventoryStatus:
    """
    Compute the inventory status for `count` existing orders.

    remaining is clamped at zero; sold_out is true once count reaches capacity.
    """
    return InventoryStatus(
        remaining=max(0, capacity - count),
        sold_out=count >= capacity,
    )
