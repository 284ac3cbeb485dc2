"""Booking (consignment) model."""
import uuid
from datetime import datetime, date, timezone
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, Date, ForeignKey, Integer, Float, Text
from sqlalchemy import CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.db_types import UUIDType, MoneyType

if TYPE_CHECKING:
    from app.models.company import Company
    from app.models.vehicle import Vehicle
    from app.models.driver import Driver


class BookingStatus(str, Enum):
    """Booking lifecycle status."""
    BOOKED = "BOOKED"
    IN_TRANSIT = "IN-TRANSIT"
    DELIVERED = "DELIVERED"


# Display states written by older versions of the booking pages. Accepted on
# read, never produced.
LEGACY_BOOKING_STATUSES = ("Pending", "Assigned", "Verified", "Submitted", "Dispatched")

# Position of each status along the lifecycle
BOOKING_STATUS_ORDER = {
    BookingStatus.BOOKED.value: 0,
    BookingStatus.IN_TRANSIT.value: 1,
    BookingStatus.DELIVERED.value: 2,
}

# Statuses counted as a dispatch in reports
DISPATCHED_STATUSES = (BookingStatus.IN_TRANSIT.value, BookingStatus.DELIVERED.value)


class ParcelType(str, Enum):
    """Tariff class of a consignment."""
    STANDARD = "Standard"
    EXPRESS = "Express"
    HEAVY = "Heavy"
    FRAGILE = "Fragile"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    PARTIAL = "Partial"


class Booking(Base):
    """
    Consignment booked by a company, identified by its LR number.
    Assigned to a vehicle/driver and moved BOOKED -> IN-TRANSIT -> DELIVERED.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("grand_total >= 0", name="ck_bookings_grand_total_non_negative"),
        Index("ix_bookings_booking_date", "booking_date"),
        Index("ix_bookings_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4
    )

    lr_number: Mapped[str] = mapped_column(
        String(30),
        unique=True,
        nullable=False,
        index=True,
        comment="Lading receipt number e.g. LR-20240115-0001"
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)

    company_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUIDType,
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Consignee
    consignee_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    consignee_contact: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    origin: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    destination: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    destination_pincode: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    # Consignment
    article_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    parcel_type: Mapped[Optional[str]] = mapped_column(
        String(30),
        nullable=True,
        comment="Standard, Express, Heavy, Fragile"
    )
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        default=BookingStatus.BOOKED.value,
        nullable=False,
        comment="BOOKED, IN-TRANSIT, DELIVERED"
    )

    # Amounts
    total_amount: Mapped[Decimal] = mapped_column(MoneyType, default=Decimal("0"), nullable=False)
    gst_amount: Mapped[Decimal] = mapped_column(MoneyType, default=Decimal("0"), nullable=False)
    grand_total: Mapped[Decimal] = mapped_column(MoneyType, default=Decimal("0"), nullable=False)
    payment_status: Mapped[str] = mapped_column(
        String(20),
        default=PaymentStatus.PENDING.value,
        nullable=False
    )

    # Assignment
    assigned_vehicle_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUIDType,
        ForeignKey("vehicles.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    assigned_driver_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUIDType,
        ForeignKey("drivers.id", ondelete="SET NULL"),
        nullable=True
    )

    dispatched_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    estimated_delivery: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    delivered_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    company: Mapped[Optional["Company"]] = relationship("Company", back_populates="bookings")
    vehicle: Mapped[Optional["Vehicle"]] = relationship("Vehicle", foreign_keys=[assigned_vehicle_id])
    driver: Mapped[Optional["Driver"]] = relationship("Driver", foreign_keys=[assigned_driver_id])

    def __repr__(self) -> str:
        return f"<Booking(lr_number='{self.lr_number}', status='{self.status}')>"
