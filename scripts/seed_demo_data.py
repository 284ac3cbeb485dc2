"""
Seed the demo dataset into an empty database.

Usage: python -m scripts.seed_demo_data
"""
import asyncio
import logging

from app.database import init_db, get_db_session
from app.services.demo_data import seed_demo_data


async def seed():
    await init_db()

    async with get_db_session() as session:
        created = await seed_demo_data(session)

    if created:
        print(f"Seeded {created} demo bookings.")
    else:
        print("Database already has bookings; nothing seeded.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    asyncio.run(seed())
