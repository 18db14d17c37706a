import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from partner_app.core.config import settings
from partner_app.core.dependencies import get_restaurant_controller, raise_for_failure
from partner_app.core.exceptions import OrderValidationError
from partner_app.schemas.order import (
    AcceptOrderRequest, RejectOrderRequest, UpdateStatusRequest,
    RestaurantOrderDetail, OrderAnalytics,
)
from partner_app.schemas.state import RestaurantOrderState
from partner_app.stores.restaurant_order_store import RestaurantOrderController

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/state", response_model=RestaurantOrderState)
async def get_state(controller: RestaurantOrderController = Depends(get_restaurant_controller)):
    return controller.state

# --- Sync ---

@router.post("/orders/pending/sync", response_model=RestaurantOrderState)
async def sync_pending_orders(controller: RestaurantOrderController = Depends(get_restaurant_controller)):
    result = await controller.fetch_pending_orders()
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state

@router.post("/orders/active/sync", response_model=RestaurantOrderState)
async def sync_active_orders(controller: RestaurantOrderController = Depends(get_restaurant_controller)):
    result = await controller.fetch_active_orders()
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state

@router.post("/orders/history/sync", response_model=RestaurantOrderState)
async def sync_order_history(
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_HISTORY_PAGE_SIZE, ge=1, le=100),
        controller: RestaurantOrderController = Depends(get_restaurant_controller),
):
    result = await controller.fetch_order_history(page, limit)
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state

@router.post("/orders/refresh", response_model=RestaurantOrderState)
async def refresh_orders(controller: RestaurantOrderController = Depends(get_restaurant_controller)):
    """
    Refetch pending and active orders together.
    Partial failures are reported through `error` on the returned state.
    """
    await controller.refresh_all_orders()
    return controller.state

@router.get("/orders/{order_id}", response_model=RestaurantOrderDetail)
async def get_order_details(
        order_id: str,
        controller: RestaurantOrderController = Depends(get_restaurant_controller),
):
    result = await controller.fetch_order_details(order_id)
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state.selected_order

@router.get("/analytics", response_model=OrderAnalytics)
async def get_analytics(
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        controller: RestaurantOrderController = Depends(get_restaurant_controller),
):
    result = await controller.fetch_analytics(start_date, end_date)
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state.analytics

# --- Transitions ---

@router.post("/orders/{order_id}/accept", response_model=RestaurantOrderState)
async def accept_order(
        order_id: str,
        request: AcceptOrderRequest,
        controller: RestaurantOrderController = Depends(get_restaurant_controller),
):
    try:
        result = await controller.accept_order(order_id, request.prep_time_minutes)
    except OrderValidationError as e:
        logger.warning(f"Accept rejected locally for {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state

@router.post("/orders/{order_id}/reject", response_model=RestaurantOrderState)
async def reject_order(
        order_id: str,
        request: RejectOrderRequest,
        controller: RestaurantOrderController = Depends(get_restaurant_controller),
):
    try:
        result = await controller.reject_order(order_id, request.rejection_reason)
    except OrderValidationError as e:
        logger.warning(f"Reject rejected locally for {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state

@router.post("/orders/{order_id}/status", response_model=RestaurantOrderState)
async def update_order_status(
        order_id: str,
        request: UpdateStatusRequest,
        controller: RestaurantOrderController = Depends(get_restaurant_controller),
):
    try:
        result = await controller.update_order_status(order_id, request.new_status)
    except OrderValidationError as e:
        logger.warning(f"Status update rejected locally for {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    raise_for_failure(result.success, result.error, result.status_code)
    return controller.state

# --- Housekeeping ---

@router.delete("/error", response_model=RestaurantOrderState)
async def clear_error(controller: RestaurantOrderController = Depends(get_restaurant_controller)):
    controller.clear_error()
    return controller.state

@router.delete("/selected-order", response_model=RestaurantOrderState)
async def clear_selected_order(controller: RestaurantOrderController = Depends(get_restaurant_controller)):
    controller.clear_selected_order()
    return controller.state

@router.post("/reset", response_model=RestaurantOrderState)
async def reset_store(controller: RestaurantOrderController = Depends(get_restaurant_controller)):
    await controller.reset_store()
    return controller.state
