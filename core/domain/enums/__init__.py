"""Domain enums."""

from .order_status import LIFECYCLE, OrderStatus
from .payment_method import PaymentMethod

__all__ = ["LIFECYCLE", "OrderStatus", "PaymentMethod"]
