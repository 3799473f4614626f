"""
Waitlist domain service - limited-inventory reservations.

This module contains the core business logic of the drop: a fixed number
of units, each claimed by one email address. The only invariant that
matters under load is that no more than `capacity` orders are ever admitted.

Join flow
=========

1. Validate the email (format first, then length bounds)
2. Ask the repository to reserve a unit; the capacity check and the insert
   are a single atomic store operation
3. Report success, or SoldOut when the store refused the insert

Validation failures and sold-out refusals never touch stored state.
"""

import logging
import re
from dataclasses import dataclass

from .exceptions import InvalidEmail, SoldOut
from .inventory import DEFAULT_CAPACITY, InventoryStatus, inventory_status
from .ports import Order, OrderRepository

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[\w.-]+@([\w-]+\.)+[\w-]{2,4}", re.ASCII)
EMAIL_MIN_LENGTH = 5
EMAIL_MAX_LENGTH = 100


def validate_email(email: str) -> str:
    """
    Validate an email address for the waitlist.

    Surrounding whitespace is stripped before any check. Rules are checked
    in order and the first failure is reported.

    Args:
        email: Raw email string from the client

    Returns:
        The stripped email address

    Raises:
        InvalidEmail: With a message naming the failed rule
    """
    if not isinstance(email, str):
        raise InvalidEmail("Invalid email format")

    candidate = email.strip()
    if EMAIL_PATTERN.fullmatch(candidate) is None:
        raise InvalidEmail("Invalid email format")
    if len(candidate) < EMAIL_MIN_LENGTH:
        raise InvalidEmail("Email too short")
    if len(candidate) > EMAIL_MAX_LENGTH:
        raise InvalidEmail("Email too long")
    return candidate


@dataclass
class WaitlistService:
    """
    Domain service for the limited-inventory waitlist.

    Orchestrates validation, the atomic reservation and the read-side
    operations (status, listing, reset) against an OrderRepository.
    """

    repository: OrderRepository
    capacity: int = DEFAULT_CAPACITY

    def status(self) -> InventoryStatus:
        """Return how many units remain and whether the drop is sold out."""
        return inventory_status(self.repository.count_orders(), self.capacity)

    def join(self, email: str) -> Order:
        """
        Reserve one unit for `email`.

        Args:
            email: Client-supplied email address

        Returns:
            The created Order

        Raises:
            InvalidEmail: If the email fails validation (nothing is stored)
            SoldOut: If capacity is already reached (nothing is stored)
            StoreUnavailable: If the store cannot be reached
        """
        validated = validate_email(email)

        order = self.repository.reserve(validated, self.capacity)
        if order is None:
            logger.info("Reservation refused, campaign sold out")
            raise SoldOut()

        logger.info("Reserved order %s", order.id)
        return order

    def list_orders(self) -> list[Order]:
        """Return every order, newest first."""
        return self.repository.list_orders()

    def reset(self) -> int:
        """
        Delete every order. Safe to call repeatedly.

        Returns:
            Number of orders deleted
        """
        deleted = self.repository.delete_all()
        logger.info("Waitlist reset, %d order(s) deleted", deleted)
        return deleted
