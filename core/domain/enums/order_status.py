"""
Order Status Enum.

Lifecycle values for orders.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle status values."""

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    # Reserved: nothing in the placement flow produces it yet.
    CANCELLED = "cancelled"

    @property
    def step(self) -> int:
        """Position on the customer-facing progress bar (-1 when off the path)."""
        try:
            return LIFECYCLE.index(self)
        except ValueError:
            return -1

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


LIFECYCLE = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)
