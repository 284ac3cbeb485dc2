"""Pydantic schemas for Company and Driver models."""
from pydantic import Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema
from typing import Optional
from datetime import datetime
import uuid

from app.models.company import CompanyStatus


# ==================== COMPANY SCHEMAS ====================

class CompanyCreate(BaseCreateSchema):
    """Company creation schema."""
    name: str = Field(..., min_length=1, max_length=200)
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    company_type: Optional[str] = None
    status: CompanyStatus = CompanyStatus.ACTIVE


class CompanyBrief(BaseResponseSchema):
    """Company embedded in booking rows."""
    id: uuid.UUID
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    contact_person: Optional[str] = None


class CompanyResponse(CompanyBrief):
    """Company response schema."""
    address: Optional[str] = None
    company_type: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


# ==================== DRIVER SCHEMAS ====================

class DriverCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = None
    license_number: Optional[str] = None


class DriverBrief(BaseResponseSchema):
    id: uuid.UUID
    name: str
    phone: Optional[str] = None


class DriverResponse(DriverBrief):
    license_number: Optional[str] = None
    created_at: datetime
