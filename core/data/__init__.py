"""Data layer - infrastructure persistence and mapping."""

from .mappers import OrderLineMapper, OrderMapper
from .models import Base, CustomerModel, OrderLineModel, OrderModel, ProductModel
from .repositories import (
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
    SqlCustomerDirectory,
)
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "create_uow",
    "CustomerModel",
    "OrderLineMapper",
    "OrderLineModel",
    "OrderMapper",
    "OrderModel",
    "ProductModel",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "SqlCustomerDirectory",
    "UnitOfWork",
]
