"""
Shipping Rate Table.

Flat per-payment-method rates used by checkout and by the placement
total check.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from core.domain.enums import PaymentMethod
from core.domain.value_objects import Money


@dataclass(frozen=True)
class ShippingRate:
    method: PaymentMethod
    name: str
    price: Decimal
    estimated_days: str


SHIPPING_RATES: Dict[PaymentMethod, ShippingRate] = {
    PaymentMethod.FASTPAY: ShippingRate(
        method=PaymentMethod.FASTPAY,
        name="Standard (PayFast)",
        price=Decimal("250"),
        estimated_days="3-5",
    ),
    PaymentMethod.COD: ShippingRate(
        method=PaymentMethod.COD,
        name="Cash on Delivery (COD)",
        price=Decimal("300"),
        estimated_days="3-5",
    ),
}


def list_rates() -> List[ShippingRate]:
    return list(SHIPPING_RATES.values())


def shipping_cost(method: PaymentMethod, currency: str = "PKR") -> Money:
    """Shipping charged for a payment method."""
    return Money(amount=SHIPPING_RATES[method].price, currency=currency)
