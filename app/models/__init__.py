# Models module
from app.models.company import Company, CompanyStatus
from app.models.driver import Driver
from app.models.vehicle import Vehicle, VehicleStatus, ACTIVE_VEHICLE_STATUSES
from app.models.booking import (
    Booking,
    BookingStatus,
    ParcelType,
    PaymentStatus,
    BOOKING_STATUS_ORDER,
    DISPATCHED_STATUSES,
    LEGACY_BOOKING_STATUSES,
)
from app.models.rate_card import RateCard

__all__ = [
    "Company",
    "CompanyStatus",
    "Driver",
    "Vehicle",
    "VehicleStatus",
    "ACTIVE_VEHICLE_STATUSES",
    "Booking",
    "BookingStatus",
    "ParcelType",
    "PaymentStatus",
    "BOOKING_STATUS_ORDER",
    "DISPATCHED_STATUSES",
    "LEGACY_BOOKING_STATUSES",
    "RateCard",
]
