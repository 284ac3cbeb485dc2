"""
Database initialization at application startup.

Creates missing tables and, when DEMO_DATA_ENABLED is set, fills an empty
database with the demo dataset.
"""

import logging

from app.config import settings
from app.database import async_session_factory, init_db

logger = logging.getLogger(__name__)


async def seed_demo_data_if_enabled() -> int:
    """Seed the demo dataset when enabled. Returns the number of bookings created."""
    if not settings.DEMO_DATA_ENABLED:
        logger.info("Demo data disabled")
        return 0

    from app.services.demo_data import seed_demo_data

    async with async_session_factory() as session:
        return await seed_demo_data(session)


async def startup_initialization():
    """
    Startup sequence:
    1. Create tables that do not exist yet
    2. Seed demo data (optional)
    """
    logger.info("Starting database initialization...")
    await init_db()
    await seed_demo_data_if_enabled()
    logger.info("Database initialization complete")
