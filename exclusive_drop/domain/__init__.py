"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the limited-inventory
waitlist. It defines its own port interface for store abstraction, so the
reservation rules never depend on FastAPI, Pydantic or psycopg.
"""

from .exceptions import InvalidEmail, SoldOut, StoreUnavailable, WaitlistError
from .inventory import DEFAULT_CAPACITY, InventoryStatus, inventory_status
from .ports import Order, OrderRepository
from .waitlist import WaitlistService, validate_email

__all__ = [
    "DEFAULT_CAPACITY",
    "InvalidEmail",
    "InventoryStatus",
    "Order",
    "OrderRepository",
    "SoldOut",
    "StoreUnavailable",
    "WaitlistError",
    "WaitlistService",
    "inventory_status",
    "validate_email",
]
