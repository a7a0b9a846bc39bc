"""SQLAlchemy implementation of ProductRepository."""

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.exceptions import InsufficientStockError, PersistenceError
from core.domain.repositories.product_repository import ProductRepository

from ..models.product_model import ProductModel


class SqlAlchemyProductRepository(ProductRepository):
    """Stock counter updates against the products table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def decrement_stock(self, product_id: int, amount: int) -> None:
        # Conditional UPDATE: stock never goes negative, even under concurrency.
        stmt = (
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .where(ProductModel.stock >= amount)
            .values(stock=ProductModel.stock - amount)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Stock update failed for product {product_id}: {exc}") from exc

        if result.rowcount == 0:
            raise InsufficientStockError(product_id, amount)
