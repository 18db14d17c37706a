from fastapi import Request, HTTPException, Depends

from partner_app.core.app_state import PartnerAppState
from partner_app.stores.delivery_order_store import DeliveryOrderController
from partner_app.stores.restaurant_order_store import RestaurantOrderController

async def get_app_state(request: Request) -> PartnerAppState:
    app_state = getattr(request.app.state, "partner", None)
    if app_state is None:
        raise HTTPException(status_code=503, detail="Partner app state not initialised")
    return app_state

async def get_restaurant_controller(
        app_state: PartnerAppState = Depends(get_app_state)
) -> RestaurantOrderController:
    return app_state.restaurant

async def get_delivery_controller(
        app_state: PartnerAppState = Depends(get_app_state)
) -> DeliveryOrderController:
    return app_state.delivery

def raise_for_failure(success: bool, error: str | None, status_code: int | None) -> None:
    """Turns a failed store action into the HTTP error the partner UI shows as a dialog."""
    if success:
        return
    if not status_code or status_code < 400:
        # Network failures carry status_code 0
        status_code = 502
    raise HTTPException(status_code=status_code, detail=error or "Request failed")
