import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError

from partner_app.core.exceptions import OrderValidationError
from partner_app.schemas.delivery import DeliveryLocation, DeliveryOrder
from partner_app.schemas.envelope import ApiResponse
from partner_app.schemas.state import DeliveryOrderState
from partner_app.services.delivery_order_service import DeliveryOrderService
from partner_app.stores.effects import EffectScheduler
from partner_app.stores.persistence import StatePersister
from partner_app.utils.validation import validate_delivery_otp

logger = logging.getLogger(__name__)

REFRESH_EARNINGS = "refresh_earnings"
FETCH_AVAILABLE_ORDERS = "fetch_available_orders"


def _without(orders: List[DeliveryOrder], order_id: str) -> List[DeliveryOrder]:
    return [o for o in orders if o.order_id != order_id]


class DeliveryOrderController:
    """
    Rider-side buckets: available -> active (accepted, then picked up) -> completed today.

    Counts are always recomputed from the lists after a local move.
    Follow-up work (earnings refresh, fetching offers when going online) is
    handed to the EffectScheduler and never awaited by the transition itself.
    """

    def __init__(
            self,
            service: DeliveryOrderService,
            persister: Optional[StatePersister] = None,
            effects: Optional[EffectScheduler] = None,
    ):
        self.service = service
        self.persister = persister
        self.effects = effects or EffectScheduler()
        self.state = DeliveryOrderState()

    async def hydrate(self) -> None:
        if self.persister:
            self.state = await self.persister.load(DeliveryOrderState)

    async def _persist(self) -> None:
        if self.persister:
            await self.persister.save(self.state)

    def _begin(self) -> None:
        self.state.is_loading = True
        self.state.error = None

    def _fail(self, response: ApiResponse, fallback: str) -> ApiResponse:
        self.state.error = response.error or fallback
        self.state.is_loading = False
        logger.warning(f"{fallback}: {self.state.error} (status {response.status_code})")
        return response.model_copy(update={"success": False, "error": self.state.error})

    # --- Fetching ---
    async def fetch_available_orders(self) -> ApiResponse:
        self._begin()
        location = self.state.current_location
        response = await self.service.get_available_orders(
            location.latitude if location else None,
            location.longitude if location else None,
        )
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch available orders")

        self.state.available_orders = response.data.orders
        self.state.available_count = response.data.total_count
        self.state.is_loading = False
        return response

    async def fetch_active_deliveries(self) -> ApiResponse:
        self._begin()
        response = await self.service.get_active_deliveries()
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch active deliveries")

        self.state.active_deliveries = response.data.orders
        self.state.active_count = response.data.total_count
        self.state.is_loading = False
        return response

    async def fetch_order_details(self, order_id: str) -> ApiResponse:
        self._begin()
        response = await self.service.get_order_details(order_id)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch order details")

        self.state.selected_order = response.data
        self.state.is_loading = False
        return response

    async def fetch_earnings(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> None:
        # Earnings are display-only, so failures stay out of `error`.
        response = await self.service.get_earnings(start_date, end_date)
        if response.success and response.data is not None:
            self.state.earnings = response.data
        else:
            logger.warning(f"Failed to fetch earnings: {response.error}")

    async def refresh_all(self) -> None:
        jobs = [self.fetch_active_deliveries(), self.fetch_earnings()]
        if self.state.is_online:
            jobs.insert(0, self.fetch_available_orders())
        await asyncio.gather(*jobs)

    # --- Transitions ---
    async def accept_delivery(self, order_id: str) -> ApiResponse:
        self._begin()
        response = await self.service.accept_delivery(order_id)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to accept delivery")

        available = _without(self.state.available_orders, order_id)
        active = _without(self.state.active_deliveries, order_id) + [response.data]
        self.state.available_orders = available
        self.state.active_deliveries = active
        self.state.available_count = len(available)
        self.state.active_count = len(active)
        self.state.selected_order = response.data
        self.state.is_loading = False

        logger.info(f"✅ Delivery {order_id} accepted.")
        return response

    async def mark_picked_up(self, order_id: str) -> ApiResponse:
        self._begin()
        response = await self.service.mark_picked_up(order_id)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to mark as picked up")

        self.state.active_deliveries = [
            response.data if o.order_id == order_id else o
            for o in self.state.active_deliveries
        ]
        self.state.selected_order = response.data
        self.state.is_loading = False

        logger.info(f"Delivery {order_id} picked up.")
        return response

    async def complete_delivery(self, order_id: str, otp: str, proof_photo: Optional[str] = None) -> ApiResponse:
        otp = validate_delivery_otp(otp)

        self._begin()
        response = await self.service.complete_delivery(order_id, otp, proof_photo)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to complete delivery")

        active = _without(self.state.active_deliveries, order_id)
        self.state.active_deliveries = active
        self.state.completed_today = _without(self.state.completed_today, order_id) + [response.data]
        self.state.active_count = len(active)
        self.state.selected_order = None
        self.state.is_loading = False
        await self._persist()

        logger.info(f"✅ Delivery {order_id} completed.")
        self.effects.schedule(REFRESH_EARNINGS, self.fetch_earnings())
        return response

    async def update_location(self, order_id: str, latitude: float, longitude: float) -> None:
        """Best-effort position ping; never raises and never sets `error`."""
        try:
            location = DeliveryLocation(latitude=latitude, longitude=longitude)
        except ValidationError:
            logger.warning(f"Dropping out-of-range location ({latitude}, {longitude}) for {order_id}.")
            return
        try:
            response = await self.service.update_location(order_id, latitude, longitude)
            if not response.success:
                logger.warning(f"Location update for {order_id} not accepted: {response.error}")
            self.state.current_location = location
            await self._persist()
        except Exception as e:
            logger.error(f"Failed to update location for {order_id}: {e}", exc_info=True)

    # --- Partner status ---
    async def toggle_online_status(self) -> bool:
        self.state.is_online = not self.state.is_online
        await self._persist()
        logger.info(f"Rider is now {'online' if self.state.is_online else 'offline'}.")

        if self.state.is_online:
            self.effects.schedule(FETCH_AVAILABLE_ORDERS, self.fetch_available_orders())
        return self.state.is_online

    async def set_current_location(self, latitude: float, longitude: float) -> None:
        try:
            self.state.current_location = DeliveryLocation(latitude=latitude, longitude=longitude)
        except ValidationError:
            raise OrderValidationError("Latitude or longitude out of range", "location")
        await self._persist()

    # --- Housekeeping ---
    def clear_error(self) -> None:
        self.state.error = None

    def clear_selected_order(self) -> None:
        self.state.selected_order = None

    async def reset_store(self) -> None:
        self.effects.cancel_all()
        self.state = DeliveryOrderState()
        await self._persist()
