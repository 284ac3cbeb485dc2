from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.api.v1.router import api_router
from app.core.exceptions import AppError
from app.database import async_session_factory
from app.schemas.base import ErrorResponse


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
    - Create missing tables
    - Seed demo data when DEMO_DATA_ENABLED is set
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    from app.database_init import startup_initialization
    await startup_initialization()

    yield

    # Shutdown
    logger.info("Shutting down...")


# OpenAPI Tags with detailed descriptions
OPENAPI_TAGS = [
    {"name": "Dashboard", "description": "KPI cards, status overview, trends and company distribution"},
    {"name": "Reports", "description": "Revenue, company, parcel type and vehicle dispatch reports"},
    {"name": "Bookings", "description": "Consignment bookings (LR), batch entry, assignment and status"},
    {"name": "Vehicles", "description": "Fleet vehicles and dispatch"},
    {"name": "Drivers", "description": "Driver records"},
    {"name": "Companies", "description": "Shipper companies"},
    {"name": "Rate Cards", "description": "Per-company pricing used for new bookings"},
]

FULL_API_DESCRIPTION = """
## HoraDel Transport Back-office API

Reporting and aggregation over bookings, companies and vehicles.

### Response format

Success: `{"success": true, "data": ..., "count": n}` (count on list endpoints)

Failure: `{"success": false, "error": "...", "message": "..."}`

### Error Codes

| Code | Description |
|------|-------------|
| 404 | Not Found - Resource doesn't exist |
| 409 | Conflict - Duplicate resource or invalid status transition |
| 422 | Unprocessable Entity - Validation failed |
| 500 | Internal Server Error |
| 504 | Gateway Timeout - Dashboard queries took too long |
"""

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=FULL_API_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=OPENAPI_TAGS,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router)


def error_response(status_code: int, error: str, message) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error} - {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.error} - {exc.message}")
    return error_response(exc.status_code, exc.error, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, "Request failed", exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return error_response(422, "Validation failed", "; ".join(messages))


# Global exception handler: log the traceback, return the message only
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(500, "Internal server error", str(exc))


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint with database validation."""
    from sqlalchemy import text
    from datetime import datetime, timezone

    health_status = {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": "unknown"
        }
    }

    # Check database connectivity
    try:
        async with async_session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar()
            health_status["checks"]["database"] = "connected"
    except Exception as e:
        logger.warning(f"Health check database error: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = f"error: {str(e)}"

    # Return 503 if unhealthy
    if health_status["status"] == "unhealthy":
        return JSONResponse(status_code=503, content=health_status)

    return health_status


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
    }
