"""
create_tables.py
----------------
One-shot script to create all database tables.
Use this for quick setup; lookup rows (facility_type, kommun) are seeded
separately.

Usage:
    python create_tables.py
"""

import asyncio

from app.core.config import settings
from app.db.session import Database


async def create_all_tables() -> None:
    database = Database(settings.DATABASE_URL, echo=True)
    await database.create_all()
    await database.dispose()
    print("All tables created successfully.")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
