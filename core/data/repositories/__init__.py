"""Repository implementations."""

from .customer_directory_impl import SqlCustomerDirectory
from .order_repository_impl import SqlAlchemyOrderRepository, is_order_code_collision
from .product_repository_impl import SqlAlchemyProductRepository

__all__ = [
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "SqlCustomerDirectory",
    "is_order_code_collision",
]
