import logging
from dataclasses import dataclass
from typing import Optional
import httpx
import redis.asyncio as redis

from partner_app.core.config import settings
from partner_app.schemas.state import RESTAURANT_PERSISTED_FIELDS, DELIVERY_PERSISTED_FIELDS
from partner_app.services.delivery_order_service import DeliveryOrderService
from partner_app.services.restaurant_order_service import RestaurantOrderService
from partner_app.stores.delivery_order_store import DeliveryOrderController
from partner_app.stores.persistence import StatePersister
from partner_app.stores.restaurant_order_store import RestaurantOrderController
from partner_app.utils.api_client import PartnerApiClient
from partner_app.utils.storage import KeyValueStorage, TokenStore

logger = logging.getLogger(__name__)


@dataclass
class PartnerAppState:
    """Everything the partner UI talks to, built once per process."""
    storage: KeyValueStorage
    tokens: TokenStore
    restaurant: RestaurantOrderController
    delivery: DeliveryOrderController

    async def hydrate(self) -> None:
        await self.restaurant.hydrate()
        await self.delivery.hydrate()

    async def sign_out(self) -> None:
        await self.tokens.clear()
        await self.restaurant.reset_store()
        await self.delivery.reset_store()

    async def shutdown(self) -> None:
        await self.delivery.effects.drain()


def build_app_state(
        http_client: httpx.AsyncClient,
        redis_client: Optional[redis.Redis],
        base_url: Optional[str] = None,
) -> PartnerAppState:
    storage = KeyValueStorage(redis_client)
    tokens = TokenStore(storage, settings.ACCESS_TOKEN_KEY)
    api_client = PartnerApiClient(http_client, tokens, base_url=base_url)

    restaurant = RestaurantOrderController(
        RestaurantOrderService(api_client),
        StatePersister(storage, settings.RESTAURANT_STORAGE_KEY, RESTAURANT_PERSISTED_FIELDS),
    )
    delivery = DeliveryOrderController(
        DeliveryOrderService(api_client),
        StatePersister(storage, settings.DELIVERY_STORAGE_KEY, DELIVERY_PERSISTED_FIELDS),
    )
    return PartnerAppState(storage=storage, tokens=tokens, restaurant=restaurant, delivery=delivery)
