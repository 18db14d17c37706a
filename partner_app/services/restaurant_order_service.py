import logging
from typing import Optional
from partner_app.models.order import RestaurantOrderStatus
from partner_app.schemas.envelope import ApiResponse
from partner_app.schemas.order import (
    RestaurantOrder, RestaurantOrderDetail, RestaurantOrderList, OrderAnalytics
)
from partner_app.utils.api_client import PartnerApiClient, parse_envelope

logger = logging.getLogger(__name__)

class RestaurantOrderService:
    """Restaurant-side endpoints of the order backend."""

    def __init__(self, api_client: PartnerApiClient):
        self.api = api_client

    # --- Listing ---
    async def get_pending_orders(self) -> ApiResponse:
        response = await self.api.get("/orders/restaurant/pending")
        return parse_envelope(response, RestaurantOrderList)

    async def get_active_orders(self) -> ApiResponse:
        response = await self.api.get("/orders/restaurant/active")
        return parse_envelope(response, RestaurantOrderList)

    async def get_order_history(self, page: int = 1, limit: int = 20) -> ApiResponse:
        response = await self.api.get(
            "/orders/restaurant/history", params={"page": page, "limit": limit}
        )
        return parse_envelope(response, RestaurantOrderList)

    async def get_order_details(self, order_id: str) -> ApiResponse:
        response = await self.api.get(f"/orders/{order_id}")
        return parse_envelope(response, RestaurantOrderDetail)

    # --- Transitions ---
    async def accept_order(self, order_id: str, prep_time_minutes: int) -> ApiResponse:
        response = await self.api.post(
            f"/orders/{order_id}/accept", json={"prep_time_minutes": prep_time_minutes}
        )
        return parse_envelope(response, RestaurantOrder)

    async def reject_order(self, order_id: str, rejection_reason: str) -> ApiResponse:
        # The rejected order is not kept client-side, so the body is not validated.
        return await self.api.post(
            f"/orders/{order_id}/reject", json={"rejection_reason": rejection_reason}
        )

    async def update_order_status(self, order_id: str, new_status: RestaurantOrderStatus) -> ApiResponse:
        response = await self.api.post(
            f"/orders/{order_id}/update-status", json={"new_status": new_status.value}
        )
        return parse_envelope(response, RestaurantOrder)

    # --- Reporting ---
    async def get_analytics(
            self,
            start_date: Optional[str] = None,
            end_date: Optional[str] = None
    ) -> ApiResponse:
        params = {"start_date": start_date, "end_date": end_date}
        params = {k: v for k, v in params.items() if v}
        response = await self.api.get("/orders/restaurant/analytics", params=params or None)
        return parse_envelope(response, OrderAnalytics)
