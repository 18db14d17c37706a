from typing import List, Optional
from pydantic import BaseModel, Field
from partner_app.models.order import DeliveryOrderStatus
from partner_app.schemas.order import Customer, DeliveryAddress


class DeliveryLocation(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

class PickupRestaurant(BaseModel):
    restaurant_id: Optional[str] = None
    name: str
    address: str = ""
    phone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

class DeliveryOrderItem(BaseModel):
    order_item_id: Optional[str] = None
    food_item_name: str
    quantity: int
    unit_price: float
    total_price: Optional[float] = None

class DeliveryOrder(BaseModel):
    order_id: str
    order_number: Optional[str] = None
    order_status: DeliveryOrderStatus
    restaurant: Optional[PickupRestaurant] = None
    customer: Optional[Customer] = None
    delivery_address: Optional[DeliveryAddress] = None
    items: List[DeliveryOrderItem] = []
    subtotal: float = 0.0
    tax_amount: float = 0.0
    delivery_fee: float = 0.0
    total_amount: float = 0.0
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    distance_km: Optional[float] = None
    estimated_delivery_time: Optional[str] = None
    special_instructions: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

class DeliveryOrderList(BaseModel):
    orders: List[DeliveryOrder] = []
    total_count: int = 0

class EarningsSummary(BaseModel):
    today_earnings: float = 0.0
    week_earnings: float = 0.0
    month_earnings: float = 0.0
    total_deliveries: int = 0
    completed_today: int = 0
    pending_amount: float = 0.0
    paid_amount: float = 0.0

class LocationUpdateAck(BaseModel):
    message: Optional[str] = None


# --- Partner API request bodies ---

class CompleteDeliveryRequest(BaseModel):
    delivery_otp: str
    proof_of_delivery: Optional[str] = None
