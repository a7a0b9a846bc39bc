"""Domain value objects."""

from .value_objects import ExecutionID, Money
from .order_code import OrderCode

__all__ = [
    "ExecutionID",
    "Money",
    "OrderCode",
]
