"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal
from typing import List, Optional

from core.domain.entities.order import Order, OrderLine
from core.domain.enums import OrderStatus, PaymentMethod
from core.domain.value_objects import Money, OrderCode

from .models.order_model import OrderLineModel, OrderModel


class OrderLineMapper:
    """Static mapper for OrderLine ↔ OrderLineModel transformation."""

    @staticmethod
    def to_domain(model: OrderLineModel) -> OrderLine:
        return OrderLine(
            product_id=model.product_id,
            quantity=model.quantity,
            unit_price=Money(amount=Decimal(str(model.price)), currency=model.currency),
            order_id=model.order_id,
            id=model.id,
        )

    @staticmethod
    def to_persistence(entity: OrderLine, order_id: int) -> OrderLineModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderLine domain entity
            order_id: Id of the owning order row

        Returns:
            OrderLineModel instance
        """
        return OrderLineModel(
            order_id=order_id,
            product_id=entity.product_id,
            quantity=entity.quantity,
            price=entity.unit_price.amount,
            currency=entity.unit_price.currency,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation."""

    @staticmethod
    def to_domain(model: OrderModel, lines: Optional[List[OrderLineModel]] = None) -> Order:
        """Convert ORM model to domain aggregate.

        Lines are passed explicitly: touching an unloaded relationship
        from async code raises, so callers decide what was eager-loaded.

        Args:
            model: OrderModel instance
            lines: Already-loaded line models, if any

        Returns:
            Order domain aggregate
        """
        return Order(
            id=model.id,
            order_code=OrderCode(value=model.order_code),
            customer_id=model.customer_id,
            customer_name=model.customer_name,
            total=Money(amount=Decimal(str(model.total_amount)), currency=model.currency),
            shipping_address=model.shipping_address,
            phone=model.phone,
            payment_method=PaymentMethod(model.payment_method),
            status=OrderStatus(model.status),
            tracking_number=model.tracking_number,
            courier_name=model.courier_name,
            shipping_proof_url=model.shipping_proof_url,
            needs_reconciliation=bool(model.needs_reconciliation),
            reconciliation_note=model.reconciliation_note,
            lines=[OrderLineMapper.to_domain(line) for line in (lines or [])],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert a new domain aggregate to an ORM row (lines are inserted separately)."""
        return OrderModel(
            order_code=entity.order_code.value,
            customer_id=entity.customer_id,
            customer_name=entity.customer_name,
            total_amount=entity.total.amount,
            currency=entity.total.currency,
            status=entity.status.value,
            shipping_address=entity.shipping_address,
            phone=entity.phone,
            payment_method=entity.payment_method.value,
            tracking_number=entity.tracking_number,
            courier_name=entity.courier_name,
            shipping_proof_url=entity.shipping_proof_url,
            needs_reconciliation=entity.needs_reconciliation,
            reconciliation_note=entity.reconciliation_note,
        )
