"""Application use cases."""
from .place_order import (
    CartLine,
    PlaceOrderCommand,
    PlaceOrderResult,
    PlaceOrderUseCase,
    StockFailure,
)
from .track_order import TrackOrderUseCase

__all__ = [
    "CartLine",
    "PlaceOrderCommand",
    "PlaceOrderResult",
    "PlaceOrderUseCase",
    "StockFailure",
    "TrackOrderUseCase",
]
