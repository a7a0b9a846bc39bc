"""Shipping rate endpoint."""

from typing import Optional

from fastapi import APIRouter

from core.application.dtos.shipping_dto import (
    ShippingCalculateRequest,
    ShippingRateDTO,
    ShippingRatesResponse,
)
from core.application.services.shipping_rates import list_rates

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.post("/calculate", response_model=ShippingRatesResponse)
async def calculate_shipping(
    request: Optional[ShippingCalculateRequest] = None,
) -> ShippingRatesResponse:
    """Rates are flat per payment method; the request body is optional."""
    return ShippingRatesResponse(
        rates=[
            ShippingRateDTO(
                id=rate.method.value,
                name=rate.name,
                price=rate.price,
                estimated_days=rate.estimated_days,
            )
            for rate in list_rates()
        ]
    )
