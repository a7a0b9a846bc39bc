"""Shipping rate DTOs."""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from .order_dto import CamelModel


class ShippingRateDTO(CamelModel):
    id: str
    name: str
    price: Decimal
    estimated_days: str


class ShippingCalculateRequest(CamelModel):
    """Accepted for forward compatibility; rates are flat today."""

    destination: Optional[str] = None
    weight_kg: Optional[Decimal] = None


class ShippingRatesResponse(CamelModel):
    success: bool = True
    rates: List[ShippingRateDTO] = Field(default_factory=list)


class UploadResponse(CamelModel):
    success: bool = True
    image_url: str
