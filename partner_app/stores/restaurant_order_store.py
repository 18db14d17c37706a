import asyncio
import logging
from typing import List, Optional

from partner_app.core.exceptions import OrderValidationError
from partner_app.models.order import RestaurantOrderStatus, can_transition
from partner_app.schemas.envelope import ActionResult, ApiResponse
from partner_app.schemas.order import RestaurantOrder
from partner_app.schemas.state import RestaurantOrderState
from partner_app.services.restaurant_order_service import RestaurantOrderService
from partner_app.stores.persistence import StatePersister
from partner_app.utils.validation import (
    validate_prep_time, validate_rejection_reason, validate_kitchen_status
)

logger = logging.getLogger(__name__)


def _without(orders: List[RestaurantOrder], order_id: str) -> List[RestaurantOrder]:
    return [o for o in orders if o.order_id != order_id]


class RestaurantOrderController:
    """
    Restaurant-side order buckets (pending / active / history) and the
    transitions between them.

    Buckets only change after the backend confirms a transition. Every
    action clears `error` on start and sets it on failure; validation
    problems raise OrderValidationError before any request is made.
    """

    def __init__(self, service: RestaurantOrderService, persister: Optional[StatePersister] = None):
        self.service = service
        self.persister = persister
        self.state = RestaurantOrderState()

    # --- Lifecycle ---
    async def hydrate(self) -> None:
        if self.persister:
            self.state = await self.persister.load(RestaurantOrderState)

    async def _persist(self) -> None:
        if self.persister:
            await self.persister.save(self.state)

    def _begin(self) -> None:
        self.state.is_loading = True
        self.state.error = None

    def _done(self) -> ActionResult:
        self.state.is_loading = False
        self.state.error = None
        return ActionResult.ok()

    def _fail(self, response: ApiResponse, fallback: str) -> ActionResult:
        error = response.error or fallback
        self.state.is_loading = False
        self.state.error = error
        logger.warning(f"{fallback}: {error} (status {response.status_code})")
        return ActionResult.failed(error, response.status_code)

    # --- Fetching ---
    async def fetch_pending_orders(self) -> ActionResult:
        self._begin()
        response = await self.service.get_pending_orders()
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch pending orders")

        self.state.pending_orders = response.data.orders
        self.state.pending_count = response.data.total_count
        return self._done()

    async def fetch_active_orders(self) -> ActionResult:
        self._begin()
        response = await self.service.get_active_orders()
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch active orders")

        self.state.active_orders = response.data.orders
        self.state.active_count = response.data.total_count
        return self._done()

    async def fetch_order_history(self, page: int = 1, limit: int = 20) -> ActionResult:
        """Page 1 replaces the history; later pages are appended to it."""
        self._begin()
        response = await self.service.get_order_history(page, limit)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch order history")

        if page == 1:
            self.state.order_history = response.data.orders
        else:
            self.state.order_history = self.state.order_history + response.data.orders
        await self._persist()
        return self._done()

    async def fetch_order_details(self, order_id: str) -> ActionResult:
        self._begin()
        response = await self.service.get_order_details(order_id)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch order details")

        self.state.selected_order = response.data
        return self._done()

    async def fetch_analytics(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> ActionResult:
        self._begin()
        response = await self.service.get_analytics(start_date, end_date)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to fetch analytics")

        self.state.analytics = response.data
        return self._done()

    async def refresh_all_orders(self) -> ActionResult:
        """
        Refetches pending and active orders concurrently. History is left alone.
        If either fetch fails its error stays on the state, even when the other
        one finishes later and succeeds.
        """
        results = await asyncio.gather(
            self.fetch_pending_orders(),
            self.fetch_active_orders(),
        )
        failed = next((r for r in results if not r.success), None)
        if failed:
            self.state.error = failed.error
            return failed
        return ActionResult.ok()

    # --- Transitions ---
    async def accept_order(self, order_id: str, prep_time_minutes: int) -> ActionResult:
        validate_prep_time(prep_time_minutes)

        self._begin()
        response = await self.service.accept_order(order_id, prep_time_minutes)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to accept order")

        already_active = any(o.order_id == order_id for o in self.state.active_orders)
        self.state.pending_orders = _without(self.state.pending_orders, order_id)
        self.state.active_orders = [response.data] + _without(self.state.active_orders, order_id)
        self.state.pending_count = max(0, self.state.pending_count - 1)
        if not already_active:
            self.state.active_count += 1

        logger.info(f"✅ Order {order_id} accepted with {prep_time_minutes} min prep time.")
        return self._done()

    async def reject_order(self, order_id: str, reason: str) -> ActionResult:
        reason = validate_rejection_reason(reason)

        self._begin()
        response = await self.service.reject_order(order_id, reason)
        if not response.success:
            return self._fail(response, "Failed to reject order")

        self.state.pending_orders = _without(self.state.pending_orders, order_id)
        self.state.pending_count = max(0, self.state.pending_count - 1)

        logger.info(f"Order {order_id} rejected: {reason}")
        return self._done()

    async def update_order_status(self, order_id: str, new_status: str | RestaurantOrderStatus) -> ActionResult:
        status = validate_kitchen_status(new_status)
        held = self.state.pending_orders + self.state.active_orders
        current = next((o for o in held if o.order_id == order_id), None)
        if current and not can_transition(current.order_status, status):
            raise OrderValidationError(
                f"Cannot move order from {current.order_status.value} to {status.value}", "new_status"
            )

        self._begin()
        response = await self.service.update_order_status(order_id, status)
        if not response.success or response.data is None:
            return self._fail(response, "Failed to update order status")

        self.state.active_orders = [
            response.data if o.order_id == order_id else o
            for o in self.state.active_orders
        ]

        logger.info(f"Order {order_id} is now {status.value}.")
        return self._done()

    # --- Housekeeping ---
    def clear_error(self) -> None:
        self.state.error = None

    def clear_selected_order(self) -> None:
        self.state.selected_order = None

    async def reset_store(self) -> None:
        self.state = RestaurantOrderState()
        await self._persist()
