"""Pydantic schemas for Vehicle models."""
from pydantic import Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema
from app.schemas.company import DriverBrief
from typing import Optional
from datetime import datetime
import uuid

from app.models.vehicle import VehicleStatus


class VehicleCreate(BaseCreateSchema):
    """Vehicle creation schema."""
    registration_number: str = Field(..., min_length=2, max_length=20)
    vehicle_type: Optional[str] = None
    capacity: Optional[str] = None
    capacity_kg: Optional[float] = Field(None, ge=0)
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    status: VehicleStatus = VehicleStatus.AVAILABLE
    current_driver_id: Optional[uuid.UUID] = None


class VehicleBrief(BaseResponseSchema):
    """Vehicle embedded in booking rows."""
    id: uuid.UUID
    registration_number: str
    vehicle_type: Optional[str] = None
    capacity: Optional[str] = None
    status: str


class VehicleResponse(VehicleBrief):
    """Vehicle response schema with driver and in-transit parcel count."""
    capacity_kg: Optional[float] = None
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    current_driver_id: Optional[uuid.UUID] = None
    driver: Optional[DriverBrief] = None
    assigned_parcels: int = Field(0, alias="assignedParcels")
    created_at: datetime
    updated_at: datetime


class VehicleDispatchResponse(BaseResponseSchema):
    """Result of dispatching a vehicle."""
    vehicle: VehicleResponse
    bookings_dispatched: int = Field(0, alias="bookingsDispatched")
