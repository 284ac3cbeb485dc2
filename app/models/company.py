"""Customer company model.

Companies are the shippers that book consignments. Names are unique and
looked up case-insensitively.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional, List

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.db_types import UUIDType

if TYPE_CHECKING:
    from app.models.booking import Booking
    from app.models.rate_card import RateCard


class CompanyStatus(str, Enum):
    """Company status."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Company(Base):
    """Shipper company that owns bookings and a rate card."""
    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4
    )

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)

    # Contact
    contact_person: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    company_type: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Corporate, Retail, Distributor, ..."
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=CompanyStatus.ACTIVE.value,
        nullable=False
    )

    # Timestamps
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
    bookings: Mapped[List["Booking"]] = relationship("Booking", back_populates="company")
    rate_card: Mapped[Optional["RateCard"]] = relationship(
        "RateCard",
        back_populates="company",
        uselist=False
    )

    def __repr__(self) -> str:
        return f"<Company(name='{self.name}')>"
