"""Domain entities."""

from .order import Order, OrderLine

__all__ = ["Order", "OrderLine"]
