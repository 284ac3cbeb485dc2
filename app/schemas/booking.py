"""Pydantic schemas for Booking models."""
from pydantic import Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema, Money
from app.schemas.company import CompanyBrief, DriverBrief
from app.schemas.vehicle import VehicleBrief
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal
import uuid

from app.models.booking import BookingStatus, ParcelType, PaymentStatus


class BookingCreate(BaseCreateSchema):
    """
    Booking submission schema.
    Amounts are priced from the company's rate card when omitted.
    """
    lr_number: Optional[str] = Field(None, max_length=30)
    booking_date: Optional[date] = None
    company_id: uuid.UUID

    consignee_name: Optional[str] = None
    consignee_contact: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    destination_pincode: Optional[str] = Field(None, max_length=10)

    article_count: int = Field(1, ge=1)
    # Free text; ParcelType lists the classes rate cards price
    parcel_type: str = ParcelType.STANDARD.value
    weight: Optional[float] = Field(None, ge=0)

    total_amount: Optional[Decimal] = Field(None, ge=0)
    gst_amount: Optional[Decimal] = Field(None, ge=0)
    grand_total: Optional[Decimal] = Field(None, ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING

    estimated_delivery: Optional[date] = None
    notes: Optional[str] = None


class BookingBatchCreate(BaseCreateSchema):
    """Several bookings submitted together from the batch-entry page."""
    bookings: List[BookingCreate] = Field(..., min_length=1)


class BookingUpdate(BaseUpdateSchema):
    """Assignment/status update. Only provided fields are written."""
    assigned_vehicle_id: Optional[uuid.UUID] = None
    assigned_driver_id: Optional[uuid.UUID] = None
    status: Optional[BookingStatus] = None


class BookingResponse(BaseResponseSchema):
    """Booking row with company, vehicle and driver embedded."""
    id: uuid.UUID
    lr_number: str
    booking_date: date
    company_id: Optional[uuid.UUID] = None

    consignee_name: Optional[str] = None
    consignee_contact: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    destination_pincode: Optional[str] = None

    article_count: int
    parcel_type: Optional[str] = None
    weight: Optional[float] = None
    status: str

    total_amount: Money
    gst_amount: Money
    grand_total: Money
    payment_status: str

    assigned_vehicle_id: Optional[uuid.UUID] = None
    assigned_driver_id: Optional[uuid.UUID] = None
    dispatched_at: Optional[datetime] = None
    estimated_delivery: Optional[date] = None
    delivered_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    company: Optional[CompanyBrief] = None
    vehicle: Optional[VehicleBrief] = None
    driver: Optional[DriverBrief] = None
