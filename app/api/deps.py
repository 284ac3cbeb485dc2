from typing import Annotated, Optional
from datetime import date

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import get_db, get_session_factory
from app.schemas.report import ReportFilters


def get_report_filters(
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
    company_id: Optional[str] = Query(None, alias="companyId"),
) -> ReportFilters:
    """Common dateFrom/dateTo/companyId query parameters of the report endpoints."""
    return ReportFilters(date_from=date_from, date_to=date_to, company_id=company_id)


# Type aliases for cleaner dependency injection
DB = Annotated[AsyncSession, Depends(get_db)]
SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
Filters = Annotated[ReportFilters, Depends(get_report_filters)]
