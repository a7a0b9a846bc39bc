"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from ..entities.order import Order, OrderLine
from ..enums import OrderStatus


@dataclass(frozen=True)
class StatusTotals:
    """Per-status aggregate used by the operator dashboard."""
    status: OrderStatus
    order_count: int
    total_amount: Decimal


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a new order row.

        Args:
            order: Pending order without an id

        Returns:
            The order with its store-assigned id and timestamps

        Raises:
            DuplicateOrderCodeError: If the order code is already taken
            PersistenceError: On any other store failure
        """
        pass

    @abstractmethod
    async def add_lines(self, order_id: int, lines: List[OrderLine]) -> List[OrderLine]:
        """Bulk insert the lines of a freshly created order.

        Args:
            order_id: Id of the owning order
            lines: Lines to insert

        Returns:
            The inserted lines, bound to the order
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int, with_lines: bool = False) -> Optional[Order]:
        """Retrieve order by internal id.

        Args:
            order_id: Internal numeric id
            with_lines: Also load the order lines

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_code(self, order_code: str) -> Optional[Order]:
        """Retrieve order by its public code.

        Args:
            order_code: Normalized public code

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[OrderStatus] = None,
        customer_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Order]:
        """List orders, newest first."""
        pass

    @abstractmethod
    async def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_current: Optional[OrderStatus] = None,
    ) -> bool:
        """Write a new status.

        Args:
            order_id: Internal numeric id
            status: New status
            expected_current: Only update while the order still has this status

        Returns:
            True if a row was updated
        """
        pass

    @abstractmethod
    async def apply_tracking(self, order: Order) -> bool:
        """Write tracking number, courier, proof URL and status in one UPDATE.

        Returns:
            True if a row was updated
        """
        pass

    @abstractmethod
    async def mark_for_reconciliation(self, order_id: int, note: str) -> bool:
        """Flag an order whose inventory side effects need manual follow-up."""
        pass

    @abstractmethod
    async def totals_by_status(self) -> List[StatusTotals]:
        """Order count and summed totals grouped by status."""
        pass
