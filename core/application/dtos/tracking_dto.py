"""Public tracking view."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus

from .order_dto import CamelModel


class TrackingViewDTO(CamelModel):
    """
    What an anonymous visitor may see for an order code.

    Address, phone, customer id, lines and proof photo stay private.
    """

    success: bool = True
    order_code: str
    status: OrderStatus
    step: int
    total: Decimal
    currency: str
    courier_name: Optional[str] = None
    tracking_number: Optional[str] = None
    placed_on: Optional[date] = None
    last_updated: Optional[date] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_entity(cls, order: Order) -> "TrackingViewDTO":
        return cls(
            order_code=order.order_code.value,
            status=order.status,
            step=order.status.step,
            total=order.total.amount,
            currency=order.total.currency,
            courier_name=order.courier_name,
            tracking_number=order.tracking_number,
            placed_on=order.created_at.date() if order.created_at else None,
            last_updated=order.updated_at.date() if order.updated_at else None,
        )
