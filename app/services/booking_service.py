"""Service for booking intake, listing and assignment/status updates."""
import logging
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, func, and_
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import NotFoundError, ConflictError
from app.models.booking import Booking, BookingStatus, BOOKING_STATUS_ORDER, LEGACY_BOOKING_STATUSES
from app.models.company import Company
from app.models.driver import Driver
from app.models.rate_card import RateCard
from app.models.vehicle import Vehicle
from app.schemas.booking import BookingCreate, BookingUpdate
from app.services.aggregation import TWO_PLACES

logger = logging.getLogger(__name__)


def quantize(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES)


def price_booking(rate_card: Optional[RateCard], article_count: int, parcel_type: Optional[str]) -> Decimal:
    """Subtotal for a consignment under a rate card; 0 when the company has no card."""
    if rate_card is None:
        return Decimal("0.00")
    articles = Decimal(article_count)
    subtotal = (
        Decimal(rate_card.base_rate)
        + Decimal(rate_card.per_article_rate) * articles
        + rate_card.surcharge_for(parcel_type) * articles
    )
    return quantize(subtotal)


def check_status_transition(current: str, new: str) -> None:
    """Statuses only move forward: BOOKED -> IN-TRANSIT -> DELIVERED."""
    if current == new:
        return
    if current in LEGACY_BOOKING_STATUSES or current not in BOOKING_STATUS_ORDER:
        # Legacy display states can move to any lifecycle status
        return
    if BOOKING_STATUS_ORDER[new] < BOOKING_STATUS_ORDER[current]:
        raise ConflictError(
            f"Cannot change booking status from {current} to {new}",
            error="Invalid status transition",
        )


class BookingService:
    """Service for booking management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== LR NUMBER GENERATION ====================

    async def generate_lr_number(self, booking_date: date) -> str:
        """Generate unique LR number: LR-YYYYMMDD-XXXX"""
        prefix = f"{settings.LR_NUMBER_PREFIX}-{booking_date.strftime('%Y%m%d')}-"

        stmt = select(func.count(Booking.id)).where(Booking.lr_number.like(f"{prefix}%"))
        count = (await self.db.execute(stmt)).scalar() or 0

        return f"{prefix}{(count + 1):04d}"

    # ==================== READ ====================

    def _with_relations(self, stmt):
        return stmt.options(
            selectinload(Booking.company),
            selectinload(Booking.vehicle),
            selectinload(Booking.driver),
        )

    async def get_booking(self, booking_id: uuid.UUID) -> Booking:
        """Get booking by ID with company, vehicle and driver."""
        stmt = (
            self._with_relations(select(Booking))
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        booking = result.scalar_one_or_none()
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    async def get_bookings(
        self,
        company: Optional[str] = None,
        status: Optional[str] = None,
        lr_number: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Booking]:
        """Bookings matching the filters, newest booking_date first."""
        stmt = self._with_relations(select(Booking)).order_by(
            Booking.booking_date.desc(), Booking.created_at.desc()
        )

        filters = []
        if status and status != "All":
            filters.append(Booking.status == status)
        if lr_number:
            filters.append(Booking.lr_number.ilike(f"%{lr_number}%"))
        if date_from:
            filters.append(Booking.booking_date >= date_from)
        if date_to:
            filters.append(Booking.booking_date <= date_to)
        if company and company != "All":
            stmt = stmt.join(Company, Booking.company_id == Company.id)
            filters.append(Company.name == company)

        if filters:
            stmt = stmt.where(and_(*filters))

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ==================== CREATE ====================

    async def _build_booking(self, data: BookingCreate) -> Booking:
        company = await self.db.get(Company, data.company_id)
        if not company:
            raise NotFoundError("Company not found")

        booking_date = data.booking_date or date.today()
        lr_number = data.lr_number or await self.generate_lr_number(booking_date)

        existing = await self.db.execute(select(Booking.id).where(Booking.lr_number == lr_number))
        if existing.scalar_one_or_none():
            raise ConflictError(f"Booking with LR number {lr_number} already exists")

        subtotal = data.total_amount
        if subtotal is None:
            rate_card = (
                await self.db.execute(select(RateCard).where(RateCard.company_id == company.id))
            ).scalar_one_or_none()
            subtotal = price_booking(rate_card, data.article_count, data.parcel_type)

        gst = data.gst_amount if data.gst_amount is not None else quantize(subtotal * settings.GST_RATE)
        grand_total = data.grand_total if data.grand_total is not None else subtotal + gst

        return Booking(
            lr_number=lr_number,
            booking_date=booking_date,
            company_id=company.id,
            consignee_name=data.consignee_name,
            consignee_contact=data.consignee_contact,
            origin=data.origin,
            destination=data.destination,
            destination_pincode=data.destination_pincode,
            article_count=data.article_count,
            parcel_type=data.parcel_type,
            weight=data.weight,
            status=BookingStatus.BOOKED.value,
            total_amount=subtotal,
            gst_amount=gst,
            grand_total=grand_total,
            payment_status=data.payment_status.value,
            estimated_delivery=data.estimated_delivery,
            notes=data.notes,
        )

    async def create_booking(self, data: BookingCreate) -> Booking:
        """Create a booking, pricing it from the company's rate card when amounts are omitted."""
        booking = await self._build_booking(data)
        self.db.add(booking)
        await self.db.commit()
        logger.info(f"Booking {booking.lr_number} created ({booking.grand_total})")
        return await self.get_booking(booking.id)

    async def create_bookings(self, items: List[BookingCreate]) -> List[Booking]:
        """Create a batch of bookings in a single commit."""
        created = []
        for data in items:
            booking = await self._build_booking(data)
            self.db.add(booking)
            # Flush so the next LR number sees this one
            await self.db.flush()
            created.append(booking)
        await self.db.commit()
        logger.info(f"Batch of {len(created)} bookings created")
        return [await self.get_booking(b.id) for b in created]

    # ==================== UPDATE ====================

    async def update_booking(self, booking_id: uuid.UUID, data: BookingUpdate) -> Booking:
        """Apply assignment and status changes."""
        booking = await self.get_booking(booking_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("assigned_vehicle_id") is not None:
            if not await self.db.get(Vehicle, update_data["assigned_vehicle_id"]):
                raise NotFoundError("Vehicle not found")
        if update_data.get("assigned_driver_id") is not None:
            if not await self.db.get(Driver, update_data["assigned_driver_id"]):
                raise NotFoundError("Driver not found")

        new_status = update_data.pop("status", None)
        if new_status is not None:
            new_status = BookingStatus(new_status).value
            check_status_transition(booking.status, new_status)
            now = datetime.now(timezone.utc)
            if new_status == BookingStatus.IN_TRANSIT.value and booking.dispatched_at is None:
                booking.dispatched_at = now
            if new_status == BookingStatus.DELIVERED.value and booking.delivered_at is None:
                booking.delivered_at = now
            booking.status = new_status

        for key, value in update_data.items():
            setattr(booking, key, value)

        await self.db.commit()
        return await self.get_booking(booking.id)
