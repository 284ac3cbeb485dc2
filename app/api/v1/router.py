from fastapi import APIRouter

from app.api.v1.endpoints import (
    # Dashboard & Reports
    dashboard,
    reports,
    # Operations
    bookings,
    vehicles,
    # Master data
    companies,
    rate_cards,
)

api_router = APIRouter(prefix="/api/v1")

# Dashboard & Reports
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])

# Operations
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["Vehicles"])
api_router.include_router(vehicles.driver_router, prefix="/drivers", tags=["Drivers"])

# Master data
api_router.include_router(companies.router, prefix="/companies", tags=["Companies"])
api_router.include_router(rate_cards.router, prefix="/ratecards", tags=["Rate Cards"])
