"""Tests for the order confirmation email."""
from decimal import Decimal

from core.application.services.order_confirmation import StoreInfo, render_order_confirmation
from core.application.services.shipping_rates import list_rates, shipping_cost
from core.domain.entities.order import Order, OrderLine
from core.domain.enums import PaymentMethod
from core.domain.value_objects import Money, OrderCode


def placed_order(payment_method=PaymentMethod.FASTPAY) -> Order:
    order = Order.place(
        order_code=OrderCode("AB123456"),
        customer_id="cust-001",
        total=Money(Decimal("15000")),
        shipping_address="House 12 <Gulberg>, Lahore",
        phone="+92 300 1234567",
        payment_method=payment_method,
        customer_name="Ayesha",
    )
    order.lines = [
        OrderLine(product_id=1, quantity=2, unit_price=Money(Decimal("5000"))),
        OrderLine(product_id=2, quantity=1, unit_price=Money(Decimal("3000"))),
    ]
    return order


class TestOrderConfirmation:

    def test_subject_and_recipient(self):
        message = render_order_confirmation(placed_order(), "ayesha@example.com", StoreInfo())

        assert message.to == "ayesha@example.com"
        assert message.subject == "Order Confirmation #AB123456 - TARZIFY"

    def test_shipping_is_total_minus_subtotal(self):
        message = render_order_confirmation(placed_order(), "a@example.com", StoreInfo())

        assert "Subtotal: PKR 13,000.00" in message.text
        assert "Shipping: PKR 2,000.00" in message.text
        assert "Total: PKR 15,000.00" in message.text

    def test_product_names_and_fallback(self):
        message = render_order_confirmation(
            placed_order(), "a@example.com", StoreInfo(), product_names={1: "Leather Jacket"}
        )

        assert "Leather Jacket" in message.html
        assert "Product #2" in message.html

    def test_payment_label_and_track_link(self):
        message = render_order_confirmation(
            placed_order(PaymentMethod.FASTPAY), "a@example.com", StoreInfo()
        )

        assert "Payment Method: FastPay" in message.html
        assert "https://tarzify.com/#track-order" in message.html
        assert "order@tarzify.com" in message.html

    def test_user_text_is_escaped(self):
        message = render_order_confirmation(placed_order(), "a@example.com", StoreInfo())

        assert "&lt;Gulberg&gt;" in message.html
        assert "<Gulberg>" not in message.html


class TestShippingRates:

    def test_rates_per_payment_method(self):
        assert shipping_cost(PaymentMethod.FASTPAY) == Money(Decimal("250"))
        assert shipping_cost(PaymentMethod.COD) == Money(Decimal("300"))
        assert [rate.method for rate in list_rates()] == [PaymentMethod.FASTPAY, PaymentMethod.COD]
