"""Domain repository interfaces."""

from .order_repository import OrderRepository, StatusTotals
from .product_repository import ProductRepository

__all__ = ["OrderRepository", "ProductRepository", "StatusTotals"]
