"""Domain layer - pure domain models and interfaces."""

from .entities import Order, OrderLine
from .enums import OrderStatus, PaymentMethod
from .repositories import OrderRepository, ProductRepository
from .value_objects import ExecutionID, Money, OrderCode

__all__ = [
    "ExecutionID",
    "Money",
    "Order",
    "OrderCode",
    "OrderLine",
    "OrderRepository",
    "OrderStatus",
    "PaymentMethod",
    "ProductRepository",
]
