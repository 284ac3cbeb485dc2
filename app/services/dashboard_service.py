"""
Dashboard Service

Composite dashboard read: KPI counts with day-over-day growth, today's status
overview, recent bookings, weekday trend and company distribution.

The constituent queries are independent, so they run in parallel, each on its
own session, and are joined before the response is built.

"Yesterday" for active vehicles, parcels in transit and pending deliveries is
approximated by rows whose updated_at is before the start of today. This is
not a historical snapshot: a row edited today drops out of the yesterday
figure even if its state was the same yesterday.
"""

import asyncio
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Awaitable, List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import QueryTimeoutError
from app.models.booking import Booking, BookingStatus
from app.models.company import Company
from app.models.vehicle import Vehicle, ACTIVE_VEHICLE_STATUSES
from app.schemas.booking import BookingResponse
from app.schemas.report import (
    ChartSeries,
    DashboardOverview,
    DashboardStats,
    DashboardSummary,
    StatusOverview,
)
from app.services.aggregation import (
    calculate_growth,
    daily_trend,
    merge_counts,
    top_n_with_others,
    weekday_trend,
)

logger = logging.getLogger(__name__)

TREND_DAYS = 7


def start_of_day_utc(day: date) -> datetime:
    """Local midnight of `day` as an aware UTC datetime (timestamps are stored in UTC)."""
    return datetime.combine(day, time.min).astimezone(timezone.utc)


class DashboardService:
    """Dashboard aggregates. Each query opens its own session so reads can run concurrently."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # ==================== QUERY HELPERS ====================

    async def _scalar(self, stmt) -> int:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar() or 0)

    async def _rows(self, stmt) -> Sequence[Any]:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.all()

    async def _gather(self, *queries: Awaitable) -> List[Any]:
        """
        Run independent queries concurrently; all must finish within REPORT_QUERY_TIMEOUT.

        If one query fails the others are cancelled before the error propagates.
        """
        tasks = [asyncio.ensure_future(query) for query in queries]
        try:
            return await asyncio.wait_for(
                asyncio.gather(*tasks),
                timeout=settings.REPORT_QUERY_TIMEOUT,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Dashboard queries did not complete within {settings.REPORT_QUERY_TIMEOUT}s"
            )
            raise QueryTimeoutError(
                f"Dashboard queries did not complete within {settings.REPORT_QUERY_TIMEOUT} seconds"
            )
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    # ==================== QUERIES ====================

    async def _count_bookings_on(self, day: date) -> int:
        stmt = select(func.count(Booking.id)).where(Booking.booking_date == day)
        return await self._scalar(stmt)

    async def _count_bookings(self) -> int:
        return await self._scalar(select(func.count(Booking.id)))

    async def _count_active_vehicles(self, updated_before: Optional[datetime] = None) -> int:
        stmt = select(func.count(Vehicle.id)).where(Vehicle.status.in_(ACTIVE_VEHICLE_STATUSES))
        if updated_before is not None:
            stmt = stmt.where(Vehicle.updated_at < updated_before)
        return await self._scalar(stmt)

    async def _sum_parcels_in_transit(self, updated_before: Optional[datetime] = None) -> int:
        stmt = select(func.coalesce(func.sum(Booking.article_count), 0)).where(
            Booking.status == BookingStatus.IN_TRANSIT.value
        )
        if updated_before is not None:
            stmt = stmt.where(Booking.updated_at < updated_before)
        return await self._scalar(stmt)

    async def _count_in_transit(self, updated_before: Optional[datetime] = None) -> int:
        stmt = select(func.count(Booking.id)).where(
            Booking.status == BookingStatus.IN_TRANSIT.value
        )
        if updated_before is not None:
            stmt = stmt.where(Booking.updated_at < updated_before)
        return await self._scalar(stmt)

    async def _status_counts_on(self, day: date) -> StatusOverview:
        stmt = (
            select(Booking.status, func.count(Booking.id))
            .where(
                Booking.booking_date == day,
                Booking.status.in_([s.value for s in BookingStatus]),
            )
            .group_by(Booking.status)
        )
        counts = {status: int(count) for status, count in await self._rows(stmt)}
        return StatusOverview(
            booked=counts.get(BookingStatus.BOOKED.value, 0),
            in_transit=counts.get(BookingStatus.IN_TRANSIT.value, 0),
            delivered=counts.get(BookingStatus.DELIVERED.value, 0),
        )

    async def _booking_dates_since(self, start: date) -> List[date]:
        stmt = select(Booking.booking_date).where(Booking.booking_date >= start)
        return [row.booking_date for row in await self._rows(stmt)]

    async def _company_counts(self) -> dict:
        stmt = (
            select(Company.name, func.count(Booking.id))
            .select_from(Booking)
            .outerjoin(Company, Booking.company_id == Company.id)
            .group_by(Company.name)
        )
        return merge_counts((name, count) for name, count in await self._rows(stmt))

    async def get_recent_bookings(self, limit: Optional[int] = None) -> List[BookingResponse]:
        """Most recent bookings with company, vehicle and driver."""
        limit = limit or settings.RECENT_BOOKINGS_LIMIT
        stmt = (
            select(Booking)
            .options(
                selectinload(Booking.company),
                selectinload(Booking.vehicle),
                selectinload(Booking.driver),
            )
            .order_by(Booking.booking_date.desc(), Booking.created_at.desc())
            .limit(limit)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [BookingResponse.model_validate(b) for b in result.scalars().all()]

    # ==================== COMPOSITES ====================

    def _stats_queries(self, today: date) -> List[Awaitable]:
        cutoff = start_of_day_utc(today)
        return [
            self._count_bookings_on(today),
            self._count_bookings_on(today - timedelta(days=1)),
            self._count_active_vehicles(),
            self._count_active_vehicles(updated_before=cutoff),
            self._sum_parcels_in_transit(),
            self._sum_parcels_in_transit(updated_before=cutoff),
            self._count_in_transit(),
            self._count_in_transit(updated_before=cutoff),
        ]

    @staticmethod
    def _build_stats(values: Sequence[int]) -> DashboardStats:
        (
            today_bookings, yesterday_bookings,
            active_vehicles, active_vehicles_yesterday,
            parcels, parcels_yesterday,
            pending, pending_yesterday,
        ) = values
        return DashboardStats(
            today_bookings=today_bookings,
            today_bookings_growth=calculate_growth(today_bookings, yesterday_bookings),
            active_vehicles=active_vehicles,
            active_vehicles_growth=calculate_growth(active_vehicles, active_vehicles_yesterday),
            parcels_in_transit=parcels,
            parcels_in_transit_growth=calculate_growth(parcels, parcels_yesterday),
            pending_deliveries=pending,
            pending_deliveries_growth=calculate_growth(pending, pending_yesterday),
        )

    async def get_summary(self, today: Optional[date] = None) -> DashboardSummary:
        """Complete dashboard document in one round of parallel queries."""
        today = today or date.today()
        stats_queries = self._stats_queries(today)

        results = await self._gather(
            *stats_queries,
            self._status_counts_on(today),
            self.get_recent_bookings(),
            self._booking_dates_since(today - timedelta(days=TREND_DAYS - 1)),
            self._company_counts(),
        )
        stats_values = results[:len(stats_queries)]
        status_overview, recent_bookings, trend_dates, company_counts = results[len(stats_queries):]

        logger.debug(f"Dashboard summary built for {today.isoformat()}")

        return DashboardSummary(
            stats=self._build_stats(stats_values),
            status_overview=status_overview,
            recent_bookings=recent_bookings,
            trend=ChartSeries(**weekday_trend(trend_dates)),
            company_distribution=ChartSeries(
                **top_n_with_others(company_counts, limit=settings.TOP_COMPANIES_LIMIT)
            ),
        )

    async def get_stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or date.today()
        return self._build_stats(await self._gather(*self._stats_queries(today)))

    async def get_overview(self) -> DashboardOverview:
        """Total booking count and the most recent bookings."""
        total, recent = await self._gather(self._count_bookings(), self.get_recent_bookings())
        return DashboardOverview(total_bookings=total, recent_bookings=recent)

    async def get_bookings_trend(self, days: int = TREND_DAYS, today: Optional[date] = None) -> ChartSeries:
        """Bookings per day over a rolling window ending today."""
        today = today or date.today()
        dates = await self._booking_dates_since(today - timedelta(days=days - 1))
        return ChartSeries(**daily_trend(dates, end=today, days=days))

    async def get_company_distribution(self) -> ChartSeries:
        company_counts = await self._company_counts()
        return ChartSeries(**top_n_with_others(company_counts, limit=settings.TOP_COMPANIES_LIMIT))
