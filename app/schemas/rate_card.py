"""Pydantic schemas for Rate Card models."""
from pydantic import Field, model_validator

from app.schemas.base import BaseResponseSchema, BaseCreateSchema, Money
from typing import Optional, Dict
from datetime import datetime, date
from decimal import Decimal
import uuid


class RateCardUpsert(BaseCreateSchema):
    """
    Rate card save schema.
    The company is given by id or by name (matched case-insensitively).
    """
    company_id: Optional[uuid.UUID] = None
    company_name: Optional[str] = None

    base_rate: Decimal = Field(..., ge=0)
    per_article_rate: Decimal = Field(Decimal("0"), ge=0)
    parcel_type_surcharges: Dict[str, Decimal] = Field(default_factory=dict)
    zone_rate: Decimal = Field(Decimal("0"), ge=0)
    effective_from: Optional[date] = None

    @model_validator(mode="after")
    def require_company(self):
        if self.company_id is None and not (self.company_name and self.company_name.strip()):
            raise ValueError("company_id or company_name is required")
        return self


class RateCardResponse(BaseResponseSchema):
    id: uuid.UUID
    company_id: uuid.UUID
    company_name: Optional[str] = None
    base_rate: Money
    per_article_rate: Money
    parcel_type_surcharges: Dict[str, Money] = Field(default_factory=dict)
    zone_rate: Money
    effective_from: date
    updated_at: datetime
