"""SQLAlchemy implementation of OrderRepository."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.domain.entities.order import Order, OrderLine
from core.domain.enums import OrderStatus
from core.domain.exceptions import DuplicateOrderCodeError, PersistenceError
from core.domain.repositories.order_repository import OrderRepository, StatusTotals

from ..mappers import OrderLineMapper, OrderMapper
from ..models.order_model import ORDER_CODE_CONSTRAINT, OrderModel

logger = logging.getLogger(__name__)

# PostgreSQL reports the constraint name, SQLite the column.
_COLLISION_MARKERS = (ORDER_CODE_CONSTRAINT, "orders.order_code")


def is_order_code_collision(exc: IntegrityError) -> bool:
    """True if the integrity error came from the order code unique constraint."""
    text = str(exc.orig) if exc.orig is not None else str(exc)
    return any(marker in text for marker in _COLLISION_MARKERS)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> Order:
        model = OrderMapper.to_persistence(order)
        self._session.add(model)

        try:
            await self._session.flush()  # Propagate to DB without committing
        except IntegrityError as exc:
            if is_order_code_collision(exc):
                raise DuplicateOrderCodeError(order.order_code.value) from exc
            raise PersistenceError(f"Order insert rejected: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Order insert failed: {exc}") from exc

        return OrderMapper.to_domain(model)

    async def add_lines(self, order_id: int, lines: List[OrderLine]) -> List[OrderLine]:
        models = [OrderLineMapper.to_persistence(line, order_id) for line in lines]
        self._session.add_all(models)

        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Order line insert failed: {exc}") from exc

        return [OrderLineMapper.to_domain(model) for model in models]

    async def find_by_id(self, order_id: int, with_lines: bool = False) -> Optional[Order]:
        stmt = select(OrderModel).where(OrderModel.id == order_id)
        if with_lines:
            stmt = stmt.options(selectinload(OrderModel.lines))

        model = await self._fetch_one(stmt)
        if model is None:
            return None
        return OrderMapper.to_domain(model, lines=model.lines if with_lines else None)

    async def find_by_code(self, order_code: str) -> Optional[Order]:
        model = await self._fetch_one(
            select(OrderModel).where(OrderModel.order_code == order_code)
        )
        if model is None:
            return None
        return OrderMapper.to_domain(model)

    async def list(
        self,
        status: Optional[OrderStatus] = None,
        customer_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Order]:
        stmt = select(OrderModel)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status.value)
        if customer_id is not None:
            stmt = stmt.where(OrderModel.customer_id == customer_id)
        stmt = (
            stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
            .offset(offset)
        )

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Order query failed: {exc}") from exc

        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_current: Optional[OrderStatus] = None,
    ) -> bool:
        stmt = update(OrderModel).where(OrderModel.id == order_id)
        if expected_current is not None:
            stmt = stmt.where(OrderModel.status == expected_current.value)
        stmt = stmt.values(status=status.value, updated_at=_utcnow())
        return await self._execute_update(stmt)

    async def apply_tracking(self, order: Order) -> bool:
        stmt = (
            update(OrderModel)
            .where(OrderModel.id == order.id)
            .values(
                tracking_number=order.tracking_number,
                courier_name=order.courier_name,
                shipping_proof_url=order.shipping_proof_url,
                status=OrderStatus.SHIPPED.value,
                updated_at=_utcnow(),
            )
        )
        return await self._execute_update(stmt)

    async def mark_for_reconciliation(self, order_id: int, note: str) -> bool:
        stmt = (
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(needs_reconciliation=True, reconciliation_note=note, updated_at=_utcnow())
        )
        return await self._execute_update(stmt)

    async def totals_by_status(self) -> List[StatusTotals]:
        stmt = select(
            OrderModel.status,
            func.count(OrderModel.id),
            func.coalesce(func.sum(OrderModel.total_amount), 0),
        ).group_by(OrderModel.status)

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Order stats query failed: {exc}") from exc

        totals = []
        for status, count, amount in result.all():
            try:
                order_status = OrderStatus(status)
            except ValueError:
                logger.warning(f"Skipping unknown order status in stats: {status!r}")
                continue
            totals.append(
                StatusTotals(
                    status=order_status,
                    order_count=int(count),
                    total_amount=Decimal(str(amount)),
                )
            )
        return totals

    async def _fetch_one(self, stmt) -> Optional[OrderModel]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Order query failed: {exc}") from exc
        return result.scalar_one_or_none()

    async def _execute_update(self, stmt) -> bool:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Order update failed: {exc}") from exc
        return result.rowcount > 0
