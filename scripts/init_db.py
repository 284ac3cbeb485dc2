"""Initialize database tables.

Usage: python -m scripts.init_db
"""
import asyncio
import logging

from app.database import init_db


async def init():
    """Create all tables."""
    print("Creating database tables...")
    await init_db()
    print("Database tables created successfully!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    asyncio.run(init())
