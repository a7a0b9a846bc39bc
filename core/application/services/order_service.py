"""Application service for operator Order operations."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.services.timeouts import with_timeout
from core.data.uow import create_uow
from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import InvalidStatusTransitionError, OrderNotFoundError
from core.domain.status_policy import get_transition_policy
from core.settings.modules.orders_settings import OrdersSettings

logger = logging.getLogger(__name__)


@dataclass
class OrderStats:
    """Merchant dashboard numbers."""
    counts: Dict[str, int] = field(default_factory=dict)
    total_orders: int = 0
    delivered_revenue: Decimal = Decimal("0")
    pending_revenue: Decimal = Decimal("0")
    shipped_count: int = 0


class OrderApplicationService:
    """
    Application service for orchestrating operator order operations.

    Responsibilities:
    - Status changes under the configured transition policy
    - Tracking assignment
    - Order queries and dashboard stats
    """

    def __init__(self, session_factory: async_sessionmaker, settings: OrdersSettings) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
            settings: Order pipeline settings
        """
        self._session_factory = session_factory
        self._settings = settings
        self._policy = get_transition_policy(settings.status_policy)
        self._timeout = settings.record_store_timeout_seconds

    async def update_status(self, order_id: int, status: OrderStatus) -> Order:
        """Apply an operator status change.

        Args:
            order_id: Internal order id
            status: Target status

        Returns:
            The updated order

        Raises:
            OrderNotFoundError: Unknown order id
            InvalidStatusTransitionError: Policy rejected the move, or the
                order changed underneath us
        """
        async with create_uow(self._session_factory) as uow:
            execution_id = uow.execution_id
            order = await self._load(uow, order_id)

            previous = order.change_status(status, self._policy)
            if previous == status:
                logger.info(f"[{execution_id}] Order {order.order_code} already {status.value}")
                return order

            updated = await with_timeout(
                uow.orders.update_status(order.id, status, expected_current=previous),
                self._timeout,
                "status update",
            )
            if not updated:
                raise InvalidStatusTransitionError(
                    previous.value, status.value, reason="order was modified concurrently"
                )
            await with_timeout(uow.commit(), self._timeout, "status commit")

        logger.info(
            f"[{execution_id}] Order {order.order_code}: {previous.value} -> {status.value}"
        )
        return order

    async def assign_tracking(
        self,
        order_id: int,
        tracking_number: str,
        courier_name: str,
        shipping_proof_url: Optional[str] = None,
    ) -> Order:
        """Attach shipment details; the order becomes shipped whatever its status.

        Raises:
            OrderNotFoundError: Unknown order id
            OrderValidationError: Blank tracking number or courier
        """
        async with create_uow(self._session_factory) as uow:
            execution_id = uow.execution_id
            order = await self._load(uow, order_id)

            previous = order.assign_tracking(tracking_number, courier_name, shipping_proof_url)
            updated = await with_timeout(
                uow.orders.apply_tracking(order), self._timeout, "tracking update"
            )
            if not updated:
                raise OrderNotFoundError(order_id)
            await with_timeout(uow.commit(), self._timeout, "tracking commit")

        logger.info(
            f"[{execution_id}] Order {order.order_code} shipped via {order.courier_name} "
            f"({order.tracking_number}), was {previous.value}"
        )
        return order

    async def get_order(self, order_id: int) -> Order:
        """Get one order with its lines.

        Raises:
            OrderNotFoundError: Unknown order id
        """
        async with create_uow(self._session_factory) as uow:
            return await self._load(uow, order_id, with_lines=True)

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        customer_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Order]:
        """List orders, newest first.

        Args:
            status: Only orders in this status
            customer_id: Only this customer's orders
            limit: Maximum number of orders to return
            offset: Orders to skip

        Returns:
            List of Order aggregates (without lines)
        """
        async with create_uow(self._session_factory) as uow:
            return await with_timeout(
                uow.orders.list(status=status, customer_id=customer_id, limit=limit, offset=offset),
                self._timeout,
                "order list",
            )

    async def order_stats(self) -> OrderStats:
        async with create_uow(self._session_factory) as uow:
            totals = await with_timeout(
                uow.orders.totals_by_status(), self._timeout, "order stats"
            )

        stats = OrderStats(counts={status.value: 0 for status in OrderStatus})
        for row in totals:
            stats.counts[row.status.value] = row.order_count
            stats.total_orders += row.order_count
            if row.status == OrderStatus.DELIVERED:
                stats.delivered_revenue += row.total_amount
            elif row.status != OrderStatus.CANCELLED:
                stats.pending_revenue += row.total_amount
            if row.status == OrderStatus.SHIPPED:
                stats.shipped_count = row.order_count
        return stats

    async def _load(self, uow, order_id: int, with_lines: bool = False) -> Order:
        order = await with_timeout(
            uow.orders.find_by_id(order_id, with_lines=with_lines),
            self._timeout,
            "order lookup",
        )
        if order is None:
            raise OrderNotFoundError(order_id)
        return order
