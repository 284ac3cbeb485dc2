"""Vehicle and driver API endpoints."""
import uuid

from fastapi import APIRouter, status

from app.api.deps import DB
from app.core.exceptions import operation_failed
from app.schemas.base import APIResponse, APIListResponse, success_response
from app.schemas.company import DriverCreate, DriverResponse
from app.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleDispatchResponse
from app.services.vehicle_service import VehicleService, DriverService


router = APIRouter()
driver_router = APIRouter()


# ==================== VEHICLES ====================

@router.get("", response_model=APIListResponse[VehicleResponse])
async def list_vehicles(db: DB):
    """All vehicles with their driver and number of parcels in transit."""
    with operation_failed("Failed to fetch vehicles"):
        vehicles = await VehicleService(db).get_vehicles()
    return success_response(vehicles, count=len(vehicles))


@router.post(
    "",
    response_model=APIResponse[VehicleResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_vehicle(data: VehicleCreate, db: DB):
    service = VehicleService(db)
    with operation_failed("Failed to create vehicle"):
        vehicle = await service.create_vehicle(data)
        return success_response(await service.to_response(vehicle))


@router.post("/{vehicle_id}/dispatch", response_model=APIResponse[VehicleDispatchResponse])
async def dispatch_vehicle(vehicle_id: uuid.UUID, db: DB):
    """Mark the vehicle Dispatched and move its assigned bookings IN-TRANSIT."""
    service = VehicleService(db)
    with operation_failed("Failed to dispatch vehicle"):
        vehicle, dispatched = await service.dispatch_vehicle(vehicle_id)
        return success_response(
            VehicleDispatchResponse(
                vehicle=await service.to_response(vehicle),
                bookings_dispatched=dispatched,
            )
        )


# ==================== DRIVERS ====================

@driver_router.get("", response_model=APIListResponse[DriverResponse])
async def list_drivers(db: DB):
    with operation_failed("Failed to fetch drivers"):
        drivers = await DriverService(db).get_drivers()
    data = [DriverResponse.model_validate(d) for d in drivers]
    return success_response(data, count=len(data))


@driver_router.post(
    "",
    response_model=APIResponse[DriverResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_driver(data: DriverCreate, db: DB):
    with operation_failed("Failed to create driver"):
        driver = await DriverService(db).create_driver(data)
    return success_response(DriverResponse.model_validate(driver))
