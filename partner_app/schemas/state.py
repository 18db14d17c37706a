from typing import List, Optional
from pydantic import BaseModel
from partner_app.schemas.order import RestaurantOrder, RestaurantOrderDetail, OrderAnalytics
from partner_app.schemas.delivery import DeliveryOrder, DeliveryLocation, EarningsSummary


class RestaurantOrderState(BaseModel):
    pending_orders: List[RestaurantOrder] = []
    active_orders: List[RestaurantOrder] = []
    order_history: List[RestaurantOrder] = []
    selected_order: Optional[RestaurantOrderDetail] = None
    analytics: Optional[OrderAnalytics] = None
    is_loading: bool = False
    error: Optional[str] = None
    pending_count: int = 0
    active_count: int = 0

class DeliveryOrderState(BaseModel):
    available_orders: List[DeliveryOrder] = []
    active_deliveries: List[DeliveryOrder] = []
    completed_today: List[DeliveryOrder] = []
    selected_order: Optional[DeliveryOrder] = None
    is_online: bool = False
    current_location: Optional[DeliveryLocation] = None
    earnings: Optional[EarningsSummary] = None
    is_loading: bool = False
    error: Optional[str] = None
    available_count: int = 0
    active_count: int = 0


# Fields that survive a restart; in-flight lists always come from a fresh fetch.
RESTAURANT_PERSISTED_FIELDS = frozenset({"order_history"})
DELIVERY_PERSISTED_FIELDS = frozenset({"is_online", "current_location", "completed_today"})
