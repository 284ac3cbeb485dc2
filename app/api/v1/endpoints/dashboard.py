"""
Dashboard API Endpoints

KPI cards, today's status overview, recent bookings, the weekly bookings
trend and the company distribution for the back-office home page.
"""
from typing import List, Optional

from fastapi import APIRouter, Query

from app.api.deps import SessionFactory
from app.core.exceptions import operation_failed
from app.schemas.base import APIResponse, APIListResponse, success_response
from app.schemas.booking import BookingResponse
from app.schemas.report import ChartSeries, DashboardOverview, DashboardStats, DashboardSummary
from app.services.dashboard_service import DashboardService, TREND_DAYS

router = APIRouter()


@router.get("/summary", response_model=APIResponse[DashboardSummary])
async def get_dashboard_summary(session_factory: SessionFactory):
    """
    Complete dashboard in one call.

    Returns stats with day-over-day growth, today's status overview,
    the 10 most recent bookings, bookings per weekday over the last 7 days
    and the top companies by booking count.
    """
    service = DashboardService(session_factory)
    with operation_failed("Failed to fetch dashboard summary"):
        summary = await service.get_summary()
    return success_response(summary)


@router.get("", response_model=APIResponse[DashboardOverview])
async def get_dashboard_overview(session_factory: SessionFactory):
    """Total bookings and the most recent bookings."""
    service = DashboardService(session_factory)
    with operation_failed("Failed to fetch dashboard data"):
        return success_response(await service.get_overview())


@router.get("/stats", response_model=APIResponse[DashboardStats])
async def get_dashboard_stats(session_factory: SessionFactory):
    service = DashboardService(session_factory)
    with operation_failed("Failed to fetch dashboard statistics"):
        return success_response(await service.get_stats())


@router.get("/recent-bookings", response_model=APIListResponse[BookingResponse])
async def get_recent_bookings(
    session_factory: SessionFactory,
    limit: Optional[int] = Query(None, ge=1, le=100),
):
    """Most recent bookings, newest booking date first."""
    service = DashboardService(session_factory)
    with operation_failed("Failed to fetch recent bookings"):
        bookings: List[BookingResponse] = await service.get_recent_bookings(limit)
    return success_response(bookings, count=len(bookings))


@router.get("/bookings-trend", response_model=APIResponse[ChartSeries])
async def get_bookings_trend(
    session_factory: SessionFactory,
    days: int = Query(TREND_DAYS, ge=1, le=90),
):
    """Bookings per day over the last `days` days, oldest first."""
    service = DashboardService(session_factory)
    with operation_failed("Failed to fetch bookings trend"):
        return success_response(await service.get_bookings_trend(days=days))


@router.get("/company-distribution", response_model=APIResponse[ChartSeries])
async def get_company_distribution(session_factory: SessionFactory):
    """Top companies by booking count; the rest are folded into Others."""
    service = DashboardService(session_factory)
    with operation_failed("Failed to fetch company distribution"):
        return success_response(await service.get_company_distribution())
