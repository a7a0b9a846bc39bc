"""Public order tracking endpoint."""

from fastapi import APIRouter, Depends

from core.application.dtos.tracking_dto import TrackingViewDTO
from core.application.use_cases.track_order import TrackOrderUseCase
from core.domain.exceptions import OrderNotFoundError

from apps.api.deps import get_track_order_use_case

router = APIRouter(prefix="/orders", tags=["tracking"])


@router.get("/track/{code}", response_model=TrackingViewDTO)
async def track_order(
    code: str,
    use_case: TrackOrderUseCase = Depends(get_track_order_use_case),
) -> TrackingViewDTO:
    """Look up an order by the code on the receipt (case and whitespace insensitive)."""
    order = await use_case.execute(code)
    if order is None:
        raise OrderNotFoundError(code.strip().upper())
    return TrackingViewDTO.from_entity(order)
