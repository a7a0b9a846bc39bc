"""Application services."""
from .order_confirmation import StoreInfo, render_order_confirmation
from .order_service import OrderApplicationService, OrderStats
from .shipping_rates import SHIPPING_RATES, ShippingRate, list_rates, shipping_cost
from .timeouts import with_timeout

__all__ = [
    "OrderApplicationService",
    "OrderStats",
    "SHIPPING_RATES",
    "ShippingRate",
    "StoreInfo",
    "list_rates",
    "render_order_confirmation",
    "shipping_cost",
    "with_timeout",
]
