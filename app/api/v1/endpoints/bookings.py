"""Booking API endpoints."""
from typing import Optional
from datetime import date
import uuid

from fastapi import APIRouter, Query, status

from app.api.deps import DB
from app.core.exceptions import operation_failed
from app.schemas.base import APIResponse, APIListResponse, success_response
from app.schemas.booking import (
    BookingCreate,
    BookingBatchCreate,
    BookingUpdate,
    BookingResponse,
)
from app.services.booking_service import BookingService


router = APIRouter()


@router.get("", response_model=APIListResponse[BookingResponse])
async def list_bookings(
    db: DB,
    company: Optional[str] = Query(None, description="Company name, or All"),
    booking_status: Optional[str] = Query(None, alias="status"),
    lr_number: Optional[str] = Query(None, alias="lrNumber"),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
):
    """List bookings, newest first."""
    service = BookingService(db)
    with operation_failed("Failed to fetch bookings"):
        bookings = await service.get_bookings(
            company=company,
            status=booking_status,
            lr_number=lr_number,
            date_from=date_from,
            date_to=date_to,
        )
    data = [BookingResponse.model_validate(b) for b in bookings]
    return success_response(data, count=len(data))


@router.post(
    "",
    response_model=APIResponse[BookingResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(data: BookingCreate, db: DB):
    """
    Create a booking.

    When amounts are omitted the subtotal is priced from the company's rate card
    and GST is added on top.
    """
    service = BookingService(db)
    with operation_failed("Failed to create booking"):
        booking = await service.create_booking(data)
    return success_response(BookingResponse.model_validate(booking))


@router.post(
    "/batch",
    response_model=APIListResponse[BookingResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_bookings_batch(data: BookingBatchCreate, db: DB):
    """Create several bookings at once; nothing is saved if any of them fails."""
    service = BookingService(db)
    with operation_failed("Failed to create bookings"):
        bookings = await service.create_bookings(data.bookings)
    result = [BookingResponse.model_validate(b) for b in bookings]
    return success_response(result, count=len(result))


@router.get("/{booking_id}", response_model=APIResponse[BookingResponse])
async def get_booking(booking_id: uuid.UUID, db: DB):
    service = BookingService(db)
    with operation_failed("Failed to fetch booking"):
        booking = await service.get_booking(booking_id)
    return success_response(BookingResponse.model_validate(booking))


@router.put("/{booking_id}", response_model=APIResponse[BookingResponse])
async def update_booking(booking_id: uuid.UUID, data: BookingUpdate, db: DB):
    """Assign vehicle/driver or move the booking forward in its lifecycle."""
    service = BookingService(db)
    with operation_failed("Failed to update booking"):
        booking = await service.update_booking(booking_id, data)
    return success_response(BookingResponse.model_validate(booking))
