"""
Shared fixtures: a fresh SQLite database per test and an in-process API client.
"""
import os
import tempfile

# Settings are read at import time; point them at a throwaway database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "horadel_test.db"),
)

import itertools
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.database import Base, custom_json_dumps, get_db, get_session_factory
from app.models import Booking, BookingStatus, Company, Driver, RateCard, Vehicle


@pytest.fixture
async def engine(tmp_path):
    from app import models  # noqa: F401

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        json_serializer=custom_json_dumps,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    from app.main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class Seeder:
    """Inserts rows directly through a session, committing after each call."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._lr = itertools.count(1)

    async def _save(self, obj):
        self.session.add(obj)
        await self.session.commit()
        return obj

    async def company(self, name: str = "TechCorp", **kwargs) -> Company:
        return await self._save(Company(name=name, **kwargs))

    async def driver(self, name: str = "Ramesh Yadav", **kwargs) -> Driver:
        return await self._save(Driver(name=name, **kwargs))

    async def vehicle(self, registration_number: str = "MH12AB1234", **kwargs) -> Vehicle:
        kwargs.setdefault("status", "Available")
        return await self._save(Vehicle(registration_number=registration_number, **kwargs))

    async def rate_card(self, company: Company, **kwargs) -> RateCard:
        kwargs.setdefault("base_rate", Decimal("500"))
        kwargs.setdefault("per_article_rate", Decimal("15"))
        kwargs.setdefault("parcel_type_surcharges", {"Express": 25})
        kwargs.setdefault("zone_rate", Decimal("100"))
        kwargs.setdefault("effective_from", date(2024, 1, 1))
        return await self._save(RateCard(company_id=company.id, **kwargs))

    async def booking(
        self,
        company: Optional[Company] = None,
        booking_date: Optional[date] = None,
        grand_total: Decimal = Decimal("100"),
        status: str = BookingStatus.BOOKED.value,
        vehicle: Optional[Vehicle] = None,
        **kwargs,
    ) -> Booking:
        kwargs.setdefault("lr_number", f"LR-TEST-{next(self._lr):04d}")
        kwargs.setdefault("article_count", 1)
        kwargs.setdefault("parcel_type", "Standard")
        booking = Booking(
            booking_date=booking_date or date.today(),
            company_id=company.id if company else None,
            grand_total=Decimal(grand_total),
            total_amount=Decimal(grand_total),
            gst_amount=Decimal("0"),
            status=status,
            assigned_vehicle_id=vehicle.id if vehicle else None,
            **kwargs,
        )
        return await self._save(booking)


@pytest.fixture
def seed(db):
    return Seeder(db)


@pytest.fixture
def missing_id():
    return str(uuid.uuid4())
