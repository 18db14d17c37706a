"""
Client-side checks run before an order transition is sent to the backend.
"""
from partner_app.core.config import settings
from partner_app.core.exceptions import OrderValidationError
from partner_app.models.order import RestaurantOrderStatus, KITCHEN_STATUSES


def validate_prep_time(prep_time_minutes: int) -> int:
    low, high = settings.MIN_PREP_TIME_MINUTES, settings.MAX_PREP_TIME_MINUTES
    if isinstance(prep_time_minutes, bool) or not isinstance(prep_time_minutes, int):
        raise OrderValidationError("Preparation time must be a whole number of minutes", "prep_time_minutes")
    if not low <= prep_time_minutes <= high:
        raise OrderValidationError(
            f"Preparation time must be between {low} and {high} minutes", "prep_time_minutes"
        )
    return prep_time_minutes


def validate_rejection_reason(reason: str | None) -> str:
    if not reason or not reason.strip():
        raise OrderValidationError("A rejection reason is required", "rejection_reason")
    return reason.strip()


def validate_kitchen_status(new_status: str | RestaurantOrderStatus) -> RestaurantOrderStatus:
    try:
        status = RestaurantOrderStatus(new_status)
    except ValueError:
        status = None
    if status not in KITCHEN_STATUSES:
        allowed = ", ".join(s.value for s in KITCHEN_STATUSES)
        raise OrderValidationError(f"Status must be one of: {allowed}", "new_status")
    return status


def validate_delivery_otp(otp: str | None) -> str:
    if not otp or not otp.strip():
        raise OrderValidationError("Delivery OTP is required", "delivery_otp")
    return otp.strip()
