import logging
from typing import Optional
from partner_app.schemas.envelope import ApiResponse
from partner_app.schemas.delivery import (
    DeliveryOrder, DeliveryOrderList, EarningsSummary, LocationUpdateAck
)
from partner_app.utils.api_client import PartnerApiClient, parse_envelope

logger = logging.getLogger(__name__)

class DeliveryOrderService:
    """Rider-side endpoints of the order backend."""

    def __init__(self, api_client: PartnerApiClient):
        self.api = api_client

    async def get_available_orders(
            self,
            latitude: Optional[float] = None,
            longitude: Optional[float] = None
    ) -> ApiResponse:
        """Orders ready for pickup and not yet assigned, nearest first when a position is given."""
        params = None
        if latitude is not None and longitude is not None:
            params = {"latitude": latitude, "longitude": longitude}
        response = await self.api.get("/orders/delivery/available", params=params)
        return parse_envelope(response, DeliveryOrderList)

    async def get_active_deliveries(self) -> ApiResponse:
        response = await self.api.get("/orders/delivery/active")
        return parse_envelope(response, DeliveryOrderList)

    async def get_order_details(self, order_id: str) -> ApiResponse:
        response = await self.api.get(f"/orders/{order_id}")
        return parse_envelope(response, DeliveryOrder)

    async def accept_delivery(self, order_id: str) -> ApiResponse:
        response = await self.api.post(f"/orders/{order_id}/accept-delivery")
        return parse_envelope(response, DeliveryOrder)

    async def mark_picked_up(self, order_id: str) -> ApiResponse:
        response = await self.api.post(f"/orders/{order_id}/pickup-complete")
        return parse_envelope(response, DeliveryOrder)

    async def complete_delivery(
            self,
            order_id: str,
            otp: str,
            proof_photo: Optional[str] = None
    ) -> ApiResponse:
        """Closes the delivery; the backend verifies the customer's OTP."""
        response = await self.api.post(
            f"/orders/{order_id}/deliver",
            json={"delivery_otp": otp, "proof_of_delivery": proof_photo},
        )
        return parse_envelope(response, DeliveryOrder)

    async def update_location(self, order_id: str, latitude: float, longitude: float) -> ApiResponse:
        response = await self.api.post(
            f"/orders/{order_id}/update-location",
            json={"latitude": latitude, "longitude": longitude},
        )
        return parse_envelope(response, LocationUpdateAck)

    async def get_earnings(
            self,
            start_date: Optional[str] = None,
            end_date: Optional[str] = None
    ) -> ApiResponse:
        params = {"start_date": start_date, "end_date": end_date}
        params = {k: v for k, v in params.items() if v}
        response = await self.api.get("/orders/delivery/earnings", params=params or None)
        return parse_envelope(response, EarningsSummary)
