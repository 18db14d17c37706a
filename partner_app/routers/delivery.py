import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status

from partner_app.core.dependencies import get_delivery_controller, raise_for_failure
from partner_app.core.exceptions import OrderValidationError
from partner_app.schemas.delivery import (
    CompleteDeliveryRequest, DeliveryLocation, DeliveryOrder, EarningsSummary
)
from partner_app.schemas.state import DeliveryOrderState
from partner_app.stores.delivery_order_store import DeliveryOrderController

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/state", response_model=DeliveryOrderState)
async def get_state(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    return controller.state

# --- Sync ---

@router.post("/orders/available/sync", response_model=DeliveryOrderState)
async def sync_available_orders(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    response = await controller.fetch_available_orders()
    raise_for_failure(response.success, response.error, response.status_code)
    return controller.state

@router.post("/orders/active/sync", response_model=DeliveryOrderState)
async def sync_active_deliveries(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    response = await controller.fetch_active_deliveries()
    raise_for_failure(response.success, response.error, response.status_code)
    return controller.state

@router.post("/refresh", response_model=DeliveryOrderState)
async def refresh_all(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    await controller.refresh_all()
    return controller.state

@router.get("/orders/{order_id}", response_model=DeliveryOrder)
async def get_order_details(
        order_id: str,
        controller: DeliveryOrderController = Depends(get_delivery_controller),
):
    response = await controller.fetch_order_details(order_id)
    raise_for_failure(response.success, response.error, response.status_code)
    return controller.state.selected_order

@router.get("/earnings", response_model=Optional[EarningsSummary])
async def get_earnings(
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        controller: DeliveryOrderController = Depends(get_delivery_controller),
):
    await controller.fetch_earnings(start_date, end_date)
    return controller.state.earnings

# --- Transitions ---

@router.post("/orders/{order_id}/accept", response_model=DeliveryOrderState)
async def accept_delivery(
        order_id: str,
        controller: DeliveryOrderController = Depends(get_delivery_controller),
):
    response = await controller.accept_delivery(order_id)
    raise_for_failure(response.success, response.error, response.status_code)
    return controller.state

@router.post("/orders/{order_id}/pickup", response_model=DeliveryOrderState)
async def mark_picked_up(
        order_id: str,
        controller: DeliveryOrderController = Depends(get_delivery_controller),
):
    response = await controller.mark_picked_up(order_id)
    raise_for_failure(response.success, response.error, response.status_code)
    return controller.state

@router.post("/orders/{order_id}/deliver", response_model=DeliveryOrderState)
async def complete_delivery(
        order_id: str,
        request: CompleteDeliveryRequest,
        controller: DeliveryOrderController = Depends(get_delivery_controller),
):
    try:
        response = await controller.complete_delivery(
            order_id, request.delivery_otp, request.proof_of_delivery
        )
    except OrderValidationError as e:
        logger.warning(f"Delivery completion rejected locally for {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    raise_for_failure(response.success, response.error, response.status_code)
    return controller.state

@router.post("/orders/{order_id}/location", response_model=DeliveryOrderState)
async def update_location(
        order_id: str,
        location: DeliveryLocation,
        controller: DeliveryOrderController = Depends(get_delivery_controller),
):
    await controller.update_location(order_id, location.latitude, location.longitude)
    return controller.state

# --- Partner status ---

@router.post("/online/toggle", response_model=DeliveryOrderState)
async def toggle_online_status(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    await controller.toggle_online_status()
    return controller.state

@router.put("/location", response_model=DeliveryOrderState)
async def set_current_location(
        location: DeliveryLocation,
        controller: DeliveryOrderController = Depends(get_delivery_controller),
):
    await controller.set_current_location(location.latitude, location.longitude)
    return controller.state

# --- Housekeeping ---

@router.delete("/error", response_model=DeliveryOrderState)
async def clear_error(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    controller.clear_error()
    return controller.state

@router.delete("/selected-order", response_model=DeliveryOrderState)
async def clear_selected_order(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    controller.clear_selected_order()
    return controller.state

@router.post("/reset", response_model=DeliveryOrderState)
async def reset_store(controller: DeliveryOrderController = Depends(get_delivery_controller)):
    await controller.reset_store()
    return controller.state
