"""Database models."""

from .base import Base
from .customer_model import CustomerModel
from .order_model import ORDER_CODE_CONSTRAINT, OrderLineModel, OrderModel
from .product_model import ProductModel

__all__ = [
    "Base",
    "CustomerModel",
    "ORDER_CODE_CONSTRAINT",
    "OrderLineModel",
    "OrderModel",
    "ProductModel",
]
