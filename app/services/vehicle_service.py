"""Service for fleet vehicles, drivers and the dispatch action."""
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from sqlalchemy import select, func, update
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ConflictError
from app.models.booking import Booking, BookingStatus, DISPATCHED_STATUSES
from app.models.driver import Driver
from app.models.vehicle import Vehicle, VehicleStatus
from app.schemas.company import DriverCreate
from app.schemas.vehicle import VehicleCreate, VehicleResponse

logger = logging.getLogger(__name__)


class VehicleService:
    """Service for vehicle management and dispatch."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_vehicle(self, vehicle_id: uuid.UUID) -> Vehicle:
        stmt = (
            select(Vehicle)
            .options(selectinload(Vehicle.driver))
            .where(Vehicle.id == vehicle_id)
            .execution_options(populate_existing=True)
        )
        vehicle = (await self.db.execute(stmt)).scalar_one_or_none()
        if not vehicle:
            raise NotFoundError("Vehicle not found")
        return vehicle

    async def _in_transit_counts(self) -> Dict[uuid.UUID, int]:
        """IN-TRANSIT bookings per assigned vehicle."""
        stmt = (
            select(Booking.assigned_vehicle_id, func.count(Booking.id))
            .where(
                Booking.status == BookingStatus.IN_TRANSIT.value,
                Booking.assigned_vehicle_id.is_not(None),
            )
            .group_by(Booking.assigned_vehicle_id)
        )
        rows = (await self.db.execute(stmt)).all()
        return {vehicle_id: int(count) for vehicle_id, count in rows}

    async def to_response(self, vehicle: Vehicle) -> VehicleResponse:
        counts = await self._in_transit_counts()
        return VehicleResponse.model_validate(vehicle).model_copy(
            update={"assigned_parcels": counts.get(vehicle.id, 0)}
        )

    async def get_vehicles(self) -> List[VehicleResponse]:
        """All vehicles by registration number, with driver and assigned parcel count."""
        stmt = (
            select(Vehicle)
            .options(selectinload(Vehicle.driver))
            .order_by(Vehicle.registration_number)
        )
        vehicles = (await self.db.execute(stmt)).scalars().all()
        counts = await self._in_transit_counts()

        return [
            VehicleResponse.model_validate(v).model_copy(
                update={"assigned_parcels": counts.get(v.id, 0)}
            )
            for v in vehicles
        ]

    async def create_vehicle(self, data: VehicleCreate) -> Vehicle:
        """Create new vehicle."""
        registration_number = data.registration_number.strip().upper()
        existing = await self.db.execute(
            select(Vehicle.id).where(Vehicle.registration_number == registration_number)
        )
        if existing.scalar_one_or_none():
            raise ConflictError(f"Vehicle {registration_number} already exists")

        if data.current_driver_id and not await self.db.get(Driver, data.current_driver_id):
            raise NotFoundError("Driver not found")

        vehicle = Vehicle(**data.model_dump(exclude={"registration_number", "status"}))
        vehicle.registration_number = registration_number
        vehicle.status = data.status.value
        self.db.add(vehicle)
        await self.db.commit()
        logger.info(f"Vehicle {registration_number} added")
        return await self.get_vehicle(vehicle.id)

    async def dispatch_vehicle(self, vehicle_id: uuid.UUID) -> Tuple[Vehicle, int]:
        """
        Mark a vehicle Dispatched and move its not-yet-dispatched bookings IN-TRANSIT.

        Both changes are committed together.
        """
        vehicle = await self.get_vehicle(vehicle_id)
        now = datetime.now(timezone.utc)

        vehicle.status = VehicleStatus.DISPATCHED.value
        result = await self.db.execute(
            update(Booking)
            .where(
                Booking.assigned_vehicle_id == vehicle.id,
                Booking.status.not_in(DISPATCHED_STATUSES),
            )
            .values(
                status=BookingStatus.IN_TRANSIT.value,
                dispatched_at=func.coalesce(Booking.dispatched_at, now),
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        dispatched = result.rowcount or 0
        logger.info(f"Vehicle {vehicle.registration_number} dispatched with {dispatched} bookings")
        return await self.get_vehicle(vehicle.id), dispatched


class DriverService:
    """Service for driver records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_drivers(self) -> List[Driver]:
        result = await self.db.execute(select(Driver).order_by(Driver.name))
        return list(result.scalars().all())

    async def create_driver(self, data: DriverCreate) -> Driver:
        driver = Driver(**data.model_dump())
        self.db.add(driver)
        await self.db.commit()
        await self.db.refresh(driver)
        return driver
