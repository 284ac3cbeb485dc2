"""
Demo dataset for an empty database.

Seeded only when DEMO_DATA_ENABLED is set and there are no bookings yet.
Never used as a fallback for failed queries.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.booking import Booking, BookingStatus, PaymentStatus
from app.models.company import Company
from app.models.driver import Driver
from app.models.rate_card import RateCard
from app.models.vehicle import Vehicle, VehicleStatus
from app.services.booking_service import price_booking, quantize

logger = logging.getLogger(__name__)

DEMO_COMPANIES = [
    # name, contact, phone, base rate, per-article rate, zone rate
    ("TechCorp", "Ravi Kumar", "9876543210", 500, 15, 100),
    ("GlobalTrade", "Anita Sharma", "9876543211", 450, 12, 90),
    ("FastShip", "Vikram Singh", "9876543212", 600, 18, 120),
    ("QuickMove", "Priya Nair", "9876543213", 550, 16, 110),
    ("EasyLogistics", "Arjun Mehta", "9876543214", 480, 14, 95),
    ("MetroMart", "Sneha Iyer", "9876543215", 520, 15, 105),
]

DEMO_SURCHARGES = {"Standard": 0, "Express": 25, "Heavy": 30, "Fragile": 20}

DEMO_DRIVERS = [
    ("Ramesh Yadav", "9812345670", "MH1220190012345"),
    ("Suresh Patil", "9812345671", "MH1420180054321"),
    ("Mahesh Gupta", "9812345672", "DL0420170098765"),
    ("Dinesh Rao", "9812345673", "KA0120200011122"),
]

DEMO_VEHICLES = [
    ("MH12AB1234", "Truck", "4 Tons", 4000, VehicleStatus.AVAILABLE),
    ("MH14CD5678", "Truck", "6 Tons", 6000, VehicleStatus.DISPATCHED),
    ("DL04EF9012", "Mini Truck", "2 Tons", 2000, VehicleStatus.AVAILABLE),
    ("KA01GH3456", "Container", "10 Tons", 10000, VehicleStatus.PENDING),
]

DEMO_DESTINATIONS = [
    ("Mumbai", "400001"),
    ("Pune", "411001"),
    ("Delhi", "110001"),
    ("Bengaluru", "560001"),
    ("Chennai", "600001"),
    ("Hyderabad", "500001"),
]

PARCEL_TYPES = list(DEMO_SURCHARGES)


async def seed_demo_data(db: AsyncSession, today: Optional[date] = None) -> int:
    """Insert the demo dataset if there are no bookings. Returns the number of bookings created."""
    existing = (await db.execute(select(func.count(Booking.id)))).scalar() or 0
    if existing:
        logger.info(f"Found {existing} bookings. Skipping demo data.")
        return 0

    today = today or date.today()
    now = datetime.now(timezone.utc)

    companies = []
    for name, contact, phone, base, per_article, zone in DEMO_COMPANIES:
        company = Company(name=name, contact_person=contact, phone=phone, company_type="Corporate")
        company.rate_card = RateCard(
            base_rate=Decimal(base),
            per_article_rate=Decimal(per_article),
            parcel_type_surcharges=dict(DEMO_SURCHARGES),
            zone_rate=Decimal(zone),
            effective_from=today - timedelta(days=30),
        )
        db.add(company)
        companies.append(company)

    drivers = [Driver(name=n, phone=p, license_number=lic) for n, p, lic in DEMO_DRIVERS]
    db.add_all(drivers)
    await db.flush()

    vehicles = []
    for i, (reg, vtype, capacity, capacity_kg, status) in enumerate(DEMO_VEHICLES):
        vehicle = Vehicle(
            registration_number=reg,
            vehicle_type=vtype,
            capacity=capacity,
            capacity_kg=capacity_kg,
            status=status.value,
            current_driver_id=drivers[i % len(drivers)].id,
        )
        vehicles.append(vehicle)
    db.add_all(vehicles)
    await db.flush()

    # Bookings spread over the last ~8 months, denser in the most recent week
    offsets = [0, 0, 0, 1, 1, 2, 3, 4, 5, 6] + list(range(9, 240, 9))
    sequence_by_day = {}
    created = 0
    for i, offset in enumerate(offsets):
        booking_date = today - timedelta(days=offset)
        company = companies[i % len(companies)]
        parcel_type = PARCEL_TYPES[i % len(PARCEL_TYPES)]
        article_count = 1 + (i * 3) % 12
        destination, pincode = DEMO_DESTINATIONS[i % len(DEMO_DESTINATIONS)]

        if offset == 0:
            status = BookingStatus.BOOKED
        elif offset <= 3:
            status = BookingStatus.IN_TRANSIT
        else:
            status = BookingStatus.DELIVERED
        vehicle = vehicles[i % len(vehicles)] if status != BookingStatus.BOOKED or i % 2 else None

        subtotal = price_booking(company.rate_card, article_count, parcel_type)
        gst = quantize(subtotal * settings.GST_RATE)

        sequence_by_day[booking_date] = sequence_by_day.get(booking_date, 0) + 1
        lr_number = (
            f"{settings.LR_NUMBER_PREFIX}-{booking_date.strftime('%Y%m%d')}-"
            f"{sequence_by_day[booking_date]:04d}"
        )

        db.add(Booking(
            lr_number=lr_number,
            booking_date=booking_date,
            company_id=company.id,
            consignee_name=f"Consignee {i + 1}",
            consignee_contact=f"90000{i:05d}",
            origin="Mumbai",
            destination=destination,
            destination_pincode=pincode,
            article_count=article_count,
            parcel_type=parcel_type,
            weight=float(article_count * 5),
            status=status.value,
            total_amount=subtotal,
            gst_amount=gst,
            grand_total=subtotal + gst,
            payment_status=(PaymentStatus.PAID if status == BookingStatus.DELIVERED else PaymentStatus.PENDING).value,
            assigned_vehicle_id=vehicle.id if vehicle else None,
            assigned_driver_id=vehicle.current_driver_id if vehicle else None,
            dispatched_at=now - timedelta(days=offset) if status != BookingStatus.BOOKED else None,
            delivered_at=now - timedelta(days=offset - 2) if status == BookingStatus.DELIVERED else None,
        ))
        created += 1

    await db.commit()
    logger.info(
        f"Demo data seeded: {len(companies)} companies, {len(vehicles)} vehicles, {created} bookings"
    )
    return created
