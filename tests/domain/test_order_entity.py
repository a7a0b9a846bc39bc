"""Tests for the Order aggregate."""
from decimal import Decimal

import pytest

from core.domain.entities.order import Order, OrderLine
from core.domain.enums import OrderStatus, PaymentMethod
from core.domain.exceptions import InvalidStatusTransitionError, OrderValidationError
from core.domain.status_policy import monotonic
from core.domain.value_objects import Money, OrderCode


def make_order(**overrides) -> Order:
    order = Order.place(
        order_code=OrderCode("AB123456"),
        customer_id="cust-001",
        total=Money(Decimal("15000")),
        shipping_address="Lahore",
        phone="0300",
        payment_method=PaymentMethod.FASTPAY,
    )
    for key, value in overrides.items():
        setattr(order, key, value)
    return order


class TestOrderLine:

    def test_line_total(self):
        line = OrderLine(product_id=1, quantity=2, unit_price=Money(Decimal("5000")))
        assert line.line_total == Money(Decimal("10000"))

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(OrderValidationError):
            OrderLine(product_id=1, quantity=quantity, unit_price=Money(Decimal("10")))

    def test_price_cannot_be_negative(self):
        with pytest.raises(OrderValidationError):
            OrderLine(product_id=1, quantity=1, unit_price=Money(Decimal("-1")))


class TestOrder:

    def test_new_order_is_pending(self):
        order = make_order()
        assert order.status == OrderStatus.PENDING
        assert not order.needs_reconciliation

    def test_subtotal_sums_lines(self):
        order = make_order(
            lines=[
                OrderLine(product_id=1, quantity=2, unit_price=Money(Decimal("5000"))),
                OrderLine(product_id=2, quantity=1, unit_price=Money(Decimal("3000"))),
            ]
        )
        assert order.subtotal == Money(Decimal("13000"))
        assert order.total - order.subtotal == Money(Decimal("2000"))

    def test_change_status_returns_previous(self):
        order = make_order()
        previous = order.change_status(OrderStatus.DELIVERED)
        assert previous == OrderStatus.PENDING
        assert order.status == OrderStatus.DELIVERED

    def test_change_status_respects_policy(self):
        order = make_order(status=OrderStatus.SHIPPED)
        with pytest.raises(InvalidStatusTransitionError):
            order.change_status(OrderStatus.PENDING, policy=monotonic)
        assert order.status == OrderStatus.SHIPPED

    def test_assign_tracking_ships_order(self):
        order = make_order()
        previous = order.assign_tracking(" TCS-12345678 ", "TCS")
        assert previous == OrderStatus.PENDING
        assert order.status == OrderStatus.SHIPPED
        assert order.tracking_number == "TCS-12345678"
        assert order.courier_name == "TCS"

    @pytest.mark.parametrize("tracking,courier", [("", "TCS"), ("TCS-1", "  ")])
    def test_assign_tracking_requires_values(self, tracking, courier):
        order = make_order()
        with pytest.raises(OrderValidationError):
            order.assign_tracking(tracking, courier)
        assert order.status == OrderStatus.PENDING


class TestMoney:

    def test_quantizes_to_cents(self):
        assert Money(Decimal("10.005")).amount == Decimal("10.01")

    def test_rejects_mixed_currency(self):
        with pytest.raises(ValueError):
            Money(Decimal("1"), "PKR") + Money(Decimal("1"), "USD")
