"""
Reports API Endpoints

Revenue summary, monthly revenue trend, per-company summary, parcel type
distribution and vehicle dispatch counts. Every endpoint accepts the same
dateFrom / dateTo / companyId filters.
"""
from typing import List

from fastapi import APIRouter

from app.api.deps import DB, Filters
from app.core.exceptions import operation_failed
from app.schemas.base import APIResponse, APIListResponse, success_response
from app.schemas.report import (
    ReportSummary,
    RevenueTrendPoint,
    CompanySummaryRow,
    ParcelTypeShare,
    VehicleDispatchCount,
)
from app.services.report_service import ReportService


router = APIRouter()


@router.get("/summary", response_model=APIResponse[ReportSummary])
async def get_report_summary(db: DB, filters: Filters):
    """Total revenue, bookings, dispatches and average revenue per booking."""
    service = ReportService(db)
    with operation_failed("Failed to fetch summary"):
        return success_response(await service.get_summary(filters))


@router.get("/revenue-trend", response_model=APIListResponse[RevenueTrendPoint])
async def get_revenue_trend(db: DB, filters: Filters):
    """Revenue per month for the last 6 months present in the data."""
    service = ReportService(db)
    with operation_failed("Failed to fetch revenue trend"):
        trend: List[RevenueTrendPoint] = await service.get_revenue_trend(filters)
    return success_response(trend, count=len(trend))


@router.get("/company-summary", response_model=APIListResponse[CompanySummaryRow])
async def get_company_summary(db: DB, filters: Filters):
    service = ReportService(db)
    with operation_failed("Failed to fetch company summary"):
        rows = await service.get_company_summary(filters)
    return success_response(rows, count=len(rows))


@router.get("/parcel-type-distribution", response_model=APIListResponse[ParcelTypeShare])
async def get_parcel_type_distribution(db: DB, filters: Filters):
    service = ReportService(db)
    with operation_failed("Failed to fetch parcel type distribution"):
        rows = await service.get_parcel_type_distribution(filters)
    return success_response(rows, count=len(rows))


@router.get("/vehicle-dispatch", response_model=APIListResponse[VehicleDispatchCount])
async def get_vehicle_dispatch(db: DB, filters: Filters):
    """Top 10 vehicles by assigned bookings."""
    service = ReportService(db)
    with operation_failed("Failed to fetch vehicle dispatch"):
        rows = await service.get_vehicle_dispatch(filters)
    return success_response(rows, count=len(rows))
