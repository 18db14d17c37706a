"""
Shared fixtures: an in-memory Redis, a respx-mocked order backend and
controllers wired the same way the application wires them.
"""
import httpx
import pytest
import pytest_asyncio
import respx
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis

from partner_app.schemas.state import RESTAURANT_PERSISTED_FIELDS, DELIVERY_PERSISTED_FIELDS
from partner_app.services.delivery_order_service import DeliveryOrderService
from partner_app.services.restaurant_order_service import RestaurantOrderService
from partner_app.stores.delivery_order_store import DeliveryOrderController
from partner_app.stores.persistence import StatePersister
from partner_app.stores.restaurant_order_store import RestaurantOrderController
from partner_app.utils.api_client import PartnerApiClient
from partner_app.utils.storage import KeyValueStorage, TokenStore

BASE_URL = "http://orders.test/api/v1"


def api_url(path: str) -> str:
    return f"{BASE_URL}{path}"


def restaurant_order(order_id: str, status: str = "pending", **overrides) -> dict:
    order = {
        "order_id": order_id,
        "order_number": f"#{order_id}",
        "order_status": status,
        "customer": {"first_name": "Asha", "last_name": "Rao", "phone": "+911234567890"},
        "subtotal": 400.0,
        "tax_amount": 20.0,
        "delivery_fee": 30.0,
        "discount_amount": 0.0,
        "total_amount": 450.0,
        "payment_method": "upi",
        "payment_status": "completed",
        "created_at": "2026-10-18T10:00:00Z",
    }
    order.update(overrides)
    return order


def delivery_order(order_id: str, status: str = "ready_for_pickup", **overrides) -> dict:
    order = {
        "order_id": order_id,
        "order_number": f"#{order_id}",
        "order_status": status,
        "restaurant": {"name": "Dosa Corner", "address": "12 MG Road", "latitude": 12.97, "longitude": 77.59},
        "delivery_address": {"address_line1": "44 Residency Road", "city": "Bengaluru"},
        "items": [{"food_item_name": "Masala Dosa", "quantity": 2, "unit_price": 120.0}],
        "total_amount": 290.0,
        "payment_method": "cash",
        "distance_km": 3.4,
    }
    order.update(overrides)
    return order


@pytest.fixture
def redis_client() -> FakeRedis:
    return FakeRedis(server=FakeServer(), decode_responses=True)


@pytest.fixture
def storage(redis_client) -> KeyValueStorage:
    return KeyValueStorage(redis_client)


@pytest.fixture
def token_store(storage) -> TokenStore:
    return TokenStore(storage, "access_token")


@pytest_asyncio.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def api_client(http_client, token_store) -> PartnerApiClient:
    return PartnerApiClient(http_client, token_store, base_url=BASE_URL)


@pytest.fixture
def mock_api():
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def restaurant_service(api_client) -> RestaurantOrderService:
    return RestaurantOrderService(api_client)


@pytest.fixture
def delivery_service(api_client) -> DeliveryOrderService:
    return DeliveryOrderService(api_client)


@pytest.fixture
def restaurant_controller(restaurant_service, storage) -> RestaurantOrderController:
    persister = StatePersister(storage, "restaurant-order-storage", RESTAURANT_PERSISTED_FIELDS)
    return RestaurantOrderController(restaurant_service, persister)


@pytest.fixture
def delivery_controller(delivery_service, storage) -> DeliveryOrderController:
    persister = StatePersister(storage, "delivery-order-storage", DELIVERY_PERSISTED_FIELDS)
    return DeliveryOrderController(delivery_service, persister)
