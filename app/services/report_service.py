"""Service for booking reports: revenue, company, parcel-type and vehicle breakdowns."""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import AppError
from app.models.booking import Booking, DISPATCHED_STATUSES
from app.models.company import Company
from app.models.vehicle import Vehicle
from app.schemas.report import (
    ReportFilters,
    ReportSummary,
    RevenueTrendPoint,
    CompanySummaryRow,
    ParcelTypeShare,
    VehicleDispatchCount,
)
from app.services.aggregation import (
    format_money,
    label_or_unknown,
    merge_counts,
    monthly_revenue_trend,
    percentage_distribution,
    safe_average,
    sort_counts,
    to_decimal,
)

logger = logging.getLogger(__name__)


def parse_company_id(value: Optional[str]) -> Optional[uuid.UUID]:
    """Company filter value as UUID; None when absent or 'All'."""
    if not value or value == "All":
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise AppError(f"Invalid companyId: {value}", status_code=422, error="Invalid filter")


class ReportService:
    """Filter-and-aggregate reports over bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _conditions(self, filters: ReportFilters) -> list:
        """booking_date range (inclusive) and company filter."""
        conditions = []
        if filters.date_from:
            conditions.append(Booking.booking_date >= filters.date_from)
        if filters.date_to:
            conditions.append(Booking.booking_date <= filters.date_to)
        company_id = parse_company_id(filters.company_id)
        if company_id:
            conditions.append(Booking.company_id == company_id)
        return conditions

    # ==================== SUMMARY ====================

    async def get_summary(self, filters: ReportFilters) -> ReportSummary:
        """Total revenue, bookings, dispatches and average revenue per booking."""
        stmt = select(
            func.count(Booking.id).label("bookings"),
            func.coalesce(func.sum(Booking.grand_total), 0).label("revenue"),
            func.count(case((Booking.status.in_(DISPATCHED_STATUSES), 1))).label("dispatches"),
        ).where(*self._conditions(filters))
        row = (await self.db.execute(stmt)).one()

        total_bookings = int(row.bookings or 0)
        total_revenue = to_decimal(row.revenue)

        return ReportSummary(
            total_revenue=format_money(total_revenue),
            total_bookings=total_bookings,
            total_dispatches=int(row.dispatches or 0),
            avg_revenue_per_booking=format_money(safe_average(total_revenue, total_bookings)),
        )

    # ==================== REVENUE TREND ====================

    async def get_revenue_trend(self, filters: ReportFilters) -> List[RevenueTrendPoint]:
        """Monthly revenue for the most recent months present in the filtered data."""
        stmt = (
            select(Booking.booking_date, Booking.grand_total)
            .where(*self._conditions(filters))
            .order_by(Booking.booking_date)
        )
        rows = (await self.db.execute(stmt)).all()
        trend = monthly_revenue_trend(
            ((row.booking_date, row.grand_total) for row in rows),
            months=settings.REVENUE_TREND_MONTHS,
        )
        return [RevenueTrendPoint(**point) for point in trend]

    # ==================== COMPANY SUMMARY ====================

    async def get_company_summary(self, filters: ReportFilters) -> List[CompanySummaryRow]:
        """Revenue, booking count and average per company, highest revenue first."""
        stmt = (
            select(
                Company.name.label("company"),
                func.count(Booking.id).label("bookings"),
                func.coalesce(func.sum(Booking.grand_total), 0).label("revenue"),
            )
            .select_from(Booking)
            .outerjoin(Company, Booking.company_id == Company.id)
            .where(*self._conditions(filters))
            .group_by(Company.name)
        )
        rows = (await self.db.execute(stmt)).all()

        # Bookings without a company land in "Unknown"
        totals = {}
        for row in rows:
            name = label_or_unknown(row.company)
            revenue, bookings = totals.get(name, (to_decimal(0), 0))
            totals[name] = (revenue + to_decimal(row.revenue), bookings + int(row.bookings or 0))

        ranked = sorted(totals.items(), key=lambda item: item[1][0], reverse=True)
        return [
            CompanySummaryRow(
                company=name,
                total_revenue=format_money(revenue),
                total_bookings=bookings,
                avg_per_booking=format_money(safe_average(revenue, bookings)),
            )
            for name, (revenue, bookings) in ranked
        ]

    # ==================== PARCEL TYPE DISTRIBUTION ====================

    async def get_parcel_type_distribution(self, filters: ReportFilters) -> List[ParcelTypeShare]:
        """Bookings per parcel type with percentage share (1 decimal)."""
        stmt = (
            select(Booking.parcel_type, func.count(Booking.id).label("bookings"))
            .where(*self._conditions(filters))
            .group_by(Booking.parcel_type)
        )
        rows = (await self.db.execute(stmt)).all()
        distribution = percentage_distribution((row.parcel_type, row.bookings) for row in rows)
        return [ParcelTypeShare(**item) for item in distribution]

    # ==================== VEHICLE DISPATCH ====================

    async def get_vehicle_dispatch(self, filters: ReportFilters) -> List[VehicleDispatchCount]:
        """Bookings per assigned vehicle, top vehicles first."""
        stmt = (
            select(Vehicle.registration_number, func.count(Booking.id).label("bookings"))
            .select_from(Booking)
            .outerjoin(Vehicle, Booking.assigned_vehicle_id == Vehicle.id)
            .where(Booking.assigned_vehicle_id.is_not(None), *self._conditions(filters))
            .group_by(Vehicle.registration_number)
        )
        rows = (await self.db.execute(stmt)).all()
        counts = merge_counts((row.registration_number, row.bookings) for row in rows)
        ranked = sort_counts(counts)[:settings.TOP_VEHICLES_LIMIT]
        return [VehicleDispatchCount(vehicle=vehicle, count=count) for vehicle, count in ranked]
