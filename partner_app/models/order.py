import enum


class OrderBucket(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    HISTORY = "history"

class RestaurantOrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY_FOR_PICKUP = "ready_for_pickup"
    DELIVERED = "delivered"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def bucket(self) -> OrderBucket:
        return _RESTAURANT_BUCKETS[self]

class DeliveryOrderStatus(str, enum.Enum):
    READY_FOR_PICKUP = "ready_for_pickup"
    ACCEPTED = "accepted"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"


_RESTAURANT_BUCKETS = {
    RestaurantOrderStatus.PENDING: OrderBucket.PENDING,
    RestaurantOrderStatus.CONFIRMED: OrderBucket.ACTIVE,
    RestaurantOrderStatus.PREPARING: OrderBucket.ACTIVE,
    RestaurantOrderStatus.READY_FOR_PICKUP: OrderBucket.ACTIVE,
    RestaurantOrderStatus.DELIVERED: OrderBucket.HISTORY,
    RestaurantOrderStatus.REJECTED: OrderBucket.HISTORY,
    RestaurantOrderStatus.CANCELLED: OrderBucket.HISTORY,
}

# Client-initiated restaurant transitions. Delivery of a ready order happens
# on the rider side and is only observed through a refetch.
RESTAURANT_TRANSITIONS = {
    RestaurantOrderStatus.PENDING: {RestaurantOrderStatus.CONFIRMED, RestaurantOrderStatus.REJECTED},
    RestaurantOrderStatus.CONFIRMED: {RestaurantOrderStatus.PREPARING},
    RestaurantOrderStatus.PREPARING: {RestaurantOrderStatus.READY_FOR_PICKUP},
}

# Statuses a restaurant may set through update-status
KITCHEN_STATUSES = (RestaurantOrderStatus.PREPARING, RestaurantOrderStatus.READY_FOR_PICKUP)


def can_transition(current: RestaurantOrderStatus, target: RestaurantOrderStatus) -> bool:
    return target in RESTAURANT_TRANSITIONS.get(current, set())
