"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from ..enums import OrderStatus, PaymentMethod
from ..exceptions import InvalidStatusTransitionError, OrderValidationError
from ..status_policy import TransitionPolicy, permissive
from ..value_objects import Money, OrderCode


@dataclass(frozen=True)
class OrderLine:
    """
    One product line within an order.

    The unit price is captured at purchase time; later catalog price
    changes never reach historical lines.
    """
    product_id: int
    quantity: int
    unit_price: Money
    order_id: Optional[int] = None
    id: Optional[int] = None

    def __post_init__(self):
        if self.quantity < 1:
            raise OrderValidationError(
                f"Quantity must be at least 1 (product {self.product_id}, got {self.quantity})"
            )
        if self.unit_price.is_negative():
            raise OrderValidationError(
                f"Unit price cannot be negative (product {self.product_id})"
            )

    @property
    def line_total(self) -> Money:
        return self.unit_price.times(self.quantity)

    def for_order(self, order_id: int) -> "OrderLine":
        """Bind the line to its freshly created order."""
        return replace(self, order_id=order_id)


@dataclass
class Order:
    """
    Order aggregate root.

    Created once by order placement; afterwards only status and
    shipment fields change. Orders are never deleted.
    """
    order_code: OrderCode
    customer_id: str
    total: Money
    shipping_address: str
    phone: str
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PENDING
    customer_name: Optional[str] = None

    # Shipment
    tracking_number: Optional[str] = None
    courier_name: Optional[str] = None
    shipping_proof_url: Optional[str] = None

    # Set when a best-effort stock decrement failed after placement
    needs_reconciliation: bool = False
    reconciliation_note: Optional[str] = None

    lines: List[OrderLine] = field(default_factory=list)

    # Store-assigned
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def place(
        cls,
        order_code: OrderCode,
        customer_id: str,
        total: Money,
        shipping_address: str,
        phone: str,
        payment_method: PaymentMethod,
        customer_name: Optional[str] = None,
    ) -> "Order":
        """
        Factory for a new pending order.

        Lines are attached after the order row exists (they need its id).
        """
        return cls(
            order_code=order_code,
            customer_id=customer_id,
            total=total,
            shipping_address=shipping_address,
            phone=phone,
            payment_method=payment_method,
            status=OrderStatus.PENDING,
            customer_name=customer_name,
        )

    @property
    def subtotal(self) -> Money:
        """Sum of line totals (zero when lines are not loaded)."""
        subtotal = Money.zero(self.total.currency)
        for line in self.lines:
            subtotal = subtotal + line.line_total
        return subtotal

    def change_status(
        self,
        target: OrderStatus,
        policy: TransitionPolicy = permissive,
    ) -> OrderStatus:
        """
        Business rule: apply an operator status change.

        Args:
            target: Requested status
            policy: Transition predicate

        Returns:
            The previous status

        Raises:
            InvalidStatusTransitionError: If the policy rejects the move
        """
        previous = self.status
        if not policy(previous, target):
            raise InvalidStatusTransitionError(previous.value, target.value)
        self.status = target
        return previous

    def assign_tracking(
        self,
        tracking_number: str,
        courier_name: str,
        shipping_proof_url: Optional[str] = None,
    ) -> OrderStatus:
        """
        Business rule: assigning a shipment always moves the order to shipped,
        whatever its current status.

        Returns:
            The previous status
        """
        tracking_number = (tracking_number or "").strip()
        courier_name = (courier_name or "").strip()
        if not tracking_number:
            raise OrderValidationError("Tracking number is required")
        if not courier_name:
            raise OrderValidationError("Courier name is required")

        previous = self.status
        self.tracking_number = tracking_number
        self.courier_name = courier_name
        self.shipping_proof_url = shipping_proof_url or None
        self.status = OrderStatus.SHIPPED
        return previous

    def flag_for_reconciliation(self, note: str) -> None:
        self.needs_reconciliation = True
        self.reconciliation_note = note
