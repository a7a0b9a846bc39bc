"""Application DTOs."""

from .order_dto import (
    AssignTrackingRequest,
    CamelModel,
    OrderDTO,
    OrderLineDTO,
    OrderLineRequest,
    OrderListDTO,
    OrderStatsDTO,
    PlaceOrderRequest,
    PlaceOrderResponse,
    SuccessResponse,
    UpdateStatusRequest,
)
from .shipping_dto import (
    ShippingCalculateRequest,
    ShippingRateDTO,
    ShippingRatesResponse,
    UploadResponse,
)
from .tracking_dto import TrackingViewDTO

__all__ = [
    "AssignTrackingRequest",
    "CamelModel",
    "OrderDTO",
    "OrderLineDTO",
    "OrderLineRequest",
    "OrderListDTO",
    "OrderStatsDTO",
    "PlaceOrderRequest",
    "PlaceOrderResponse",
    "ShippingCalculateRequest",
    "ShippingRateDTO",
    "ShippingRatesResponse",
    "SuccessResponse",
    "TrackingViewDTO",
    "UpdateStatusRequest",
    "UploadResponse",
]
