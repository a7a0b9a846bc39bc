"""Repository interface for the product stock counter."""

from abc import ABC, abstractmethod


class ProductRepository(ABC):
    """Products belong to the catalog; orders only touch their stock."""

    @abstractmethod
    async def decrement_stock(self, product_id: int, amount: int) -> None:
        """Atomically decrement stock if enough units remain.

        Args:
            product_id: Catalog product id
            amount: Units to remove (>= 1)

        Raises:
            InsufficientStockError: If the product is unknown or has fewer units
            PersistenceError: On store failure
        """
        pass
