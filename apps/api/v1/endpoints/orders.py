"""Order endpoints for REST API."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.application.dtos.order_dto import (
    AssignTrackingRequest,
    OrderDTO,
    OrderListDTO,
    OrderStatsDTO,
    PlaceOrderRequest,
    PlaceOrderResponse,
    SuccessResponse,
    UpdateStatusRequest,
)
from core.application.services.order_service import OrderApplicationService
from core.application.use_cases.place_order import CartLine, PlaceOrderCommand, PlaceOrderUseCase
from core.domain.enums import OrderStatus
from core.settings import AppSettings

from apps.api.deps import get_order_service, get_place_order_use_case, get_settings
from apps.api.security import Operator, get_operator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=PlaceOrderResponse, status_code=201)
async def place_order(
    request: PlaceOrderRequest,
    use_case: PlaceOrderUseCase = Depends(get_place_order_use_case),
) -> PlaceOrderResponse:
    """Place an order from a checkout cart.

    Returns:
        The public order code
    """
    command = PlaceOrderCommand(
        customer_id=request.customer_id,
        customer_name=request.customer_name,
        lines=[
            CartLine(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                product_name=line.product_name,
            )
            for line in request.lines
        ],
        total=request.total,
        shipping_address=request.shipping_address,
        phone=request.phone,
        payment_method=request.payment_method,
    )
    result = await use_case.execute(command)
    return PlaceOrderResponse(order_code=result.order_code)


@router.get("/stats", response_model=OrderStatsDTO)
async def order_stats(
    operator: Operator = Depends(get_operator),
    service: OrderApplicationService = Depends(get_order_service),
    settings: AppSettings = Depends(get_settings),
) -> OrderStatsDTO:
    stats = await service.order_stats()
    return OrderStatsDTO(
        total_orders=stats.total_orders,
        counts=stats.counts,
        delivered_revenue=stats.delivered_revenue,
        pending_revenue=stats.pending_revenue,
        shipped_count=stats.shipped_count,
        currency=settings.orders.currency,
    )


@router.get("", response_model=OrderListDTO)
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Filter by status"),
    customer_id: Optional[str] = Query(None, alias="customerId", description="Filter by customer"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of orders"),
    offset: int = Query(0, ge=0, description="Orders to skip"),
    operator: Operator = Depends(get_operator),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """List orders, newest first."""
    orders = await service.list_orders(
        status=status, customer_id=customer_id, limit=limit, offset=offset
    )
    return OrderListDTO(
        orders=[OrderDTO.from_entity(order) for order in orders],
        count=len(orders),
        limit=limit,
        offset=offset,
    )


@router.get("/{order_id}", response_model=OrderDTO)
async def get_order(
    order_id: int,
    operator: Operator = Depends(get_operator),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Get one order with its lines."""
    order = await service.get_order(order_id)
    return OrderDTO.from_entity(order)


@router.patch("/{order_id}/status", response_model=SuccessResponse)
async def update_order_status(
    order_id: int,
    request: UpdateStatusRequest,
    operator: Operator = Depends(get_operator),
    service: OrderApplicationService = Depends(get_order_service),
) -> SuccessResponse:
    """Move an order to a new status (subject to the configured policy)."""
    await service.update_status(order_id, request.status)
    logger.info(f"Status of order {order_id} set to {request.status.value} by {operator.role} {operator.id}")
    return SuccessResponse()


@router.patch("/{order_id}/tracking", response_model=SuccessResponse)
async def assign_tracking(
    order_id: int,
    request: AssignTrackingRequest,
    operator: Operator = Depends(get_operator),
    service: OrderApplicationService = Depends(get_order_service),
) -> SuccessResponse:
    """Attach courier tracking; the order becomes shipped."""
    await service.assign_tracking(
        order_id,
        tracking_number=request.tracking_number,
        courier_name=request.courier_name,
        shipping_proof_url=request.shipping_proof_url,
    )
    logger.info(f"Tracking assigned to order {order_id} by {operator.role} {operator.id}")
    return SuccessResponse()
