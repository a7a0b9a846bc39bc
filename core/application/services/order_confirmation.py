"""
Order confirmation email.

Renders the receipt sent to the customer after a successful placement.
"""
from dataclasses import dataclass
from html import escape
from typing import List, Optional

from core.application.interfaces import OutboundEmail
from core.domain.entities.order import Order


@dataclass(frozen=True)
class ReceiptLine:
    name: str
    quantity: int
    line_total: str


@dataclass(frozen=True)
class StoreInfo:
    """Store identity printed on the receipt."""
    name: str = "TARZIFY"
    track_order_url: str = "https://tarzify.com/#track-order"
    support_email: str = "order@tarzify.com"


def _amount(value) -> str:
    return f"{value:,.2f}"


def build_receipt_lines(order: Order, product_names: Optional[dict] = None) -> List[ReceiptLine]:
    names = product_names or {}
    return [
        ReceiptLine(
            name=names.get(line.product_id) or f"Product #{line.product_id}",
            quantity=line.quantity,
            line_total=_amount(line.line_total.amount),
        )
        for line in order.lines
    ]


def render_order_confirmation(
    order: Order,
    to_address: str,
    store: StoreInfo,
    product_names: Optional[dict] = None,
) -> OutboundEmail:
    """
    Build the confirmation email for a placed order.

    Shipping is whatever the customer paid above the line subtotal.

    Args:
        order: Placed order with its lines
        to_address: Customer email
        store: Store identity and links
        product_names: Optional product id -> display name

    Returns:
        OutboundEmail ready for an IEmailSender
    """
    subtotal = order.subtotal
    shipping = order.total - subtotal
    currency = order.total.currency
    code = order.order_code.value
    customer = order.customer_name or "Customer"
    lines = build_receipt_lines(order, product_names)

    rows = "".join(
        "<tr>"
        f"<td style=\"padding:8px;border-bottom:1px solid #eee\">{escape(line.name)}</td>"
        f"<td style=\"padding:8px;border-bottom:1px solid #eee;text-align:center\">{line.quantity}</td>"
        f"<td style=\"padding:8px;border-bottom:1px solid #eee;text-align:right\">{currency} {line.line_total}</td>"
        "</tr>"
        for line in lines
    )

    html = f"""<!DOCTYPE html>
<html>
<body style="font-family:Arial,sans-serif;color:#222;max-width:600px;margin:0 auto">
  <h1 style="letter-spacing:4px">{escape(store.name)}</h1>
  <h2>Thank you for your order, {escape(customer)}!</h2>
  <p>Your order <strong>#{code}</strong> has been placed and is now <strong>{order.status.value}</strong>.</p>
  <table style="width:100%;border-collapse:collapse">
    <thead>
      <tr>
        <th style="text-align:left;padding:8px">Item</th>
        <th style="padding:8px">Qty</th>
        <th style="text-align:right;padding:8px">Total</th>
      </tr>
    </thead>
    <tbody>{rows}</tbody>
  </table>
  <p>Subtotal: {currency} {_amount(subtotal.amount)}<br>
     Shipping: {currency} {_amount(shipping.amount)}<br>
     <strong>Total: {currency} {_amount(order.total.amount)}</strong></p>
  <h3>Shipping Address</h3>
  <p>{escape(order.shipping_address)}<br>Phone: {escape(order.phone)}</p>
  <p>Payment Method: {order.payment_method.label}</p>
  <p><a href="{escape(store.track_order_url)}">Track your order</a> with code <strong>{code}</strong>.</p>
  <p style="color:#888;font-size:12px">Questions? Contact us at {escape(store.support_email)}</p>
</body>
</html>"""

    text = (
        f"Thank you for your order, {customer}!\n"
        f"Order #{code}\n"
        + "".join(f"- {line.name} x{line.quantity}: {currency} {line.line_total}\n" for line in lines)
        + f"Subtotal: {currency} {_amount(subtotal.amount)}\n"
        f"Shipping: {currency} {_amount(shipping.amount)}\n"
        f"Total: {currency} {_amount(order.total.amount)}\n"
        f"Payment Method: {order.payment_method.label}\n"
        f"Track your order: {store.track_order_url}\n"
    )

    return OutboundEmail(
        to=to_address,
        subject=f"Order Confirmation #{code} - {store.name}",
        html=html,
        text=text,
    )
