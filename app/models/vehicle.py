"""Fleet vehicle model."""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, ForeignKey, Integer, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.db_types import UUIDType

if TYPE_CHECKING:
    from app.models.driver import Driver


class VehicleStatus(str, Enum):
    """Vehicle status enumeration."""
    AVAILABLE = "Available"
    DISPATCHED = "Dispatched"
    PENDING = "Pending"
    MAINTENANCE = "Maintenance"


# Statuses counted as "active" on the dashboard
ACTIVE_VEHICLE_STATUSES = (VehicleStatus.AVAILABLE.value, VehicleStatus.DISPATCHED.value)


class Vehicle(Base):
    """
    Vehicle in the company fleet.
    Dispatching a vehicle moves its booked consignments in transit.
    """
    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4
    )

    registration_number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True
    )
    vehicle_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    capacity: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Display capacity e.g. '4 Tons'"
    )
    capacity_kg: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    make: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    current_driver_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUIDType,
        ForeignKey("drivers.id", ondelete="SET NULL"),
        nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=VehicleStatus.AVAILABLE.value,
        nullable=False,
        index=True,
        comment="Available, Dispatched, Pending, Maintenance"
    )

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
    driver: Mapped[Optional["Driver"]] = relationship("Driver")

    def __repr__(self) -> str:
        return f"<Vehicle(registration_number='{self.registration_number}', status='{self.status}')>"
