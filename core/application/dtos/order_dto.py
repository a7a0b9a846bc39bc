"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.domain.entities.order import Order, OrderLine
from core.domain.enums import OrderStatus, PaymentMethod


class CamelModel(BaseModel):
    """Storefront JSON is camelCase; snake_case is accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# REQUESTS
# =============================================================================

class OrderLineRequest(CamelModel):
    """One cart line as sent by checkout."""

    product_id: int = Field(..., description="Catalog product id")
    # Range checked by the domain so bad quantities surface as 400, not 422
    quantity: int = Field(..., description="Units ordered")
    unit_price: Decimal = Field(..., max_digits=12, decimal_places=2, description="Unit price at checkout")
    product_name: Optional[str] = Field(None, description="Display name for the receipt email")


class PlaceOrderRequest(CamelModel):
    """Request DTO for placing an order."""

    customer_id: Optional[str] = Field(None, description="Auth user id")
    customer_name: Optional[str] = Field(None, description="Name shown on the receipt")
    lines: List[OrderLineRequest] = Field(default_factory=list, description="Cart lines")
    total: Decimal = Field(
        ..., max_digits=12, decimal_places=2, description="Caller-computed total including shipping"
    )
    shipping_address: str = Field(..., description="Delivery address")
    phone: str = Field(..., description="Contact phone")
    payment_method: PaymentMethod = Field(default=PaymentMethod.FASTPAY, description="fastpay | cod")


class UpdateStatusRequest(CamelModel):
    status: OrderStatus = Field(..., description="Target status")


class AssignTrackingRequest(CamelModel):
    tracking_number: str = Field(..., description="Courier tracking number")
    courier_name: str = Field(..., description="Courier (TCS, Leopard, ...)")
    shipping_proof_url: Optional[str] = Field(None, description="Public URL of the proof photo")


# =============================================================================
# RESPONSES
# =============================================================================

class PlaceOrderResponse(CamelModel):
    success: bool = True
    order_code: str = Field(..., description="Public order code")


class SuccessResponse(CamelModel):
    success: bool = True


class OrderLineDTO(CamelModel):
    id: Optional[int] = None
    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_entity(cls, line: OrderLine) -> "OrderLineDTO":
        return cls(
            id=line.id,
            product_id=line.product_id,
            quantity=line.quantity,
            unit_price=line.unit_price.amount,
            line_total=line.line_total.amount,
        )


class OrderDTO(CamelModel):
    """Operator view of an order."""

    id: int
    order_code: str
    customer_id: str
    customer_name: Optional[str] = None
    status: OrderStatus
    total: Decimal
    currency: str
    shipping_address: str
    phone: str
    payment_method: PaymentMethod
    tracking_number: Optional[str] = None
    courier_name: Optional[str] = None
    shipping_proof_url: Optional[str] = None
    needs_reconciliation: bool = False
    reconciliation_note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    lines: List[OrderLineDTO] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            order_code=order.order_code.value,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            status=order.status,
            total=order.total.amount,
            currency=order.total.currency,
            shipping_address=order.shipping_address,
            phone=order.phone,
            payment_method=order.payment_method,
            tracking_number=order.tracking_number,
            courier_name=order.courier_name,
            shipping_proof_url=order.shipping_proof_url,
            needs_reconciliation=order.needs_reconciliation,
            reconciliation_note=order.reconciliation_note,
            created_at=order.created_at,
            updated_at=order.updated_at,
            lines=[OrderLineDTO.from_entity(line) for line in order.lines],
        )


class OrderListDTO(CamelModel):
    """DTO for listing orders."""

    success: bool = True
    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    count: int = Field(..., ge=0, description="Orders in this page")
    limit: int
    offset: int


class OrderStatsDTO(CamelModel):
    """Merchant dashboard summary."""

    success: bool = True
    total_orders: int
    counts: Dict[str, int] = Field(default_factory=dict, description="Orders per status")
    delivered_revenue: Decimal
    pending_revenue: Decimal
    shipped_count: int
    currency: str
