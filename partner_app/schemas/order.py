from typing import List, Optional
from pydantic import BaseModel, Field
from partner_app.models.order import RestaurantOrderStatus, KITCHEN_STATUSES


class Customer(BaseModel):
    user_id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

class DeliveryAddress(BaseModel):
    address_id: Optional[str] = None
    title: Optional[str] = None
    address_line1: str = ""
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

class OrderItem(BaseModel):
    order_item_id: Optional[str] = None
    food_item_id: Optional[str] = None
    food_item_name: str
    variant_name: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: Optional[float] = None
    special_instructions: Optional[str] = None

class RestaurantOrder(BaseModel):
    order_id: str
    order_number: Optional[str] = None
    order_status: RestaurantOrderStatus
    customer: Optional[Customer] = None
    delivery_address: Optional[DeliveryAddress] = None
    subtotal: float = 0.0
    tax_amount: float = 0.0
    delivery_fee: float = 0.0
    discount_amount: float = 0.0
    total_amount: float = 0.0
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    estimated_delivery_time: Optional[str] = None
    special_instructions: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

class RestaurantOrderDetail(RestaurantOrder):
    items: List[OrderItem] = []

class RestaurantOrderList(BaseModel):
    orders: List[RestaurantOrder] = []
    total_count: int = 0
    has_more: bool = False

class RevenueByDay(BaseModel):
    date: str
    revenue: float

class OrderAnalytics(BaseModel):
    total_orders: int = 0
    pending_orders: int = 0
    active_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
    total_revenue: float = 0.0
    average_order_value: float = 0.0
    orders_by_status: dict[str, int] = {}
    revenue_by_day: List[RevenueByDay] = []


# --- Partner API request bodies ---

class AcceptOrderRequest(BaseModel):
    prep_time_minutes: int

class RejectOrderRequest(BaseModel):
    rejection_reason: str

class UpdateStatusRequest(BaseModel):
    new_status: RestaurantOrderStatus = Field(..., description=f"One of {[s.value for s in KITCHEN_STATUSES]}")
