"""Pydantic schemas for report and dashboard payloads (camelCase keys)."""
from typing import List, Optional
from datetime import date

from pydantic import BaseModel

from app.schemas.base import CamelSchema
from app.schemas.booking import BookingResponse


# ==================== REPORTS ====================

class ReportFilters(BaseModel):
    """Common report filters; absent dates are unbounded, company 'All' is unfiltered."""
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    company_id: Optional[str] = None


class ReportSummary(CamelSchema):
    total_revenue: str
    total_bookings: int
    total_dispatches: int
    avg_revenue_per_booking: str


class RevenueTrendPoint(CamelSchema):
    month: str
    revenue: str


class CompanySummaryRow(CamelSchema):
    company: str
    total_revenue: str
    total_bookings: int
    avg_per_booking: str


class ParcelTypeShare(CamelSchema):
    type: str
    count: int
    percentage: float


class VehicleDispatchCount(CamelSchema):
    vehicle: str
    count: int


# ==================== DASHBOARD ====================

class ChartSeries(CamelSchema):
    labels: List[str]
    values: List[int]


class DashboardStats(CamelSchema):
    today_bookings: int
    today_bookings_growth: int
    active_vehicles: int
    active_vehicles_growth: int
    parcels_in_transit: int
    parcels_in_transit_growth: int
    pending_deliveries: int
    pending_deliveries_growth: int


class StatusOverview(CamelSchema):
    booked: int
    in_transit: int
    delivered: int


class DashboardSummary(CamelSchema):
    stats: DashboardStats
    status_overview: StatusOverview
    recent_bookings: List[BookingResponse]
    trend: ChartSeries
    company_distribution: ChartSeries


class DashboardOverview(CamelSchema):
    total_bookings: int
    recent_bookings: List[BookingResponse]
