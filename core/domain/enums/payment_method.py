"""Payment method values accepted at checkout."""
from enum import Enum


class PaymentMethod(str, Enum):
    FASTPAY = "fastpay"
    COD = "cod"

    @property
    def label(self) -> str:
        return "Cash on Delivery" if self is PaymentMethod.COD else "FastPay"
