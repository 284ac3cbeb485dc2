"""Rate Card model for per-company consignment pricing."""
import uuid
from datetime import datetime, date, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Dict

from sqlalchemy import DateTime, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.db_types import UUIDType, JSONType, MoneyType

if TYPE_CHECKING:
    from app.models.company import Company


class RateCard(Base):
    """
    Company rate card.
    One card per company; saving a card for a company replaces the previous one.

    Price of a booking:
        base_rate + per_article_rate * articles + surcharge[parcel_type] * articles
    """
    __tablename__ = "rate_cards"
    __table_args__ = (
        UniqueConstraint("company_id", name="uq_rate_cards_company"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4
    )

    company_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Pricing
    base_rate: Mapped[Decimal] = mapped_column(MoneyType, default=Decimal("0"), nullable=False)
    per_article_rate: Mapped[Decimal] = mapped_column(MoneyType, default=Decimal("0"), nullable=False)
    parcel_type_surcharges: Mapped[Dict[str, float]] = mapped_column(
        JSONType,
        default=dict,
        nullable=False,
        comment="Per-article surcharge by parcel type e.g. {'Express': 25}"
    )
    zone_rate: Mapped[Decimal] = mapped_column(MoneyType, default=Decimal("0"), nullable=False)

    effective_from: Mapped[date] = mapped_column(Date, nullable=False)

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
    company: Mapped["Company"] = relationship("Company", back_populates="rate_card")

    def surcharge_for(self, parcel_type: Optional[str]) -> Decimal:
        """Per-article surcharge for a parcel type, 0 when not listed."""
        if not parcel_type:
            return Decimal("0")
        value = (self.parcel_type_surcharges or {}).get(parcel_type, 0)
        return Decimal(str(value))

    def __repr__(self) -> str:
        return f"<RateCard(company_id='{self.company_id}', base_rate={self.base_rate})>"
