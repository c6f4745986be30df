"""
Script to create sample businesses and users for local development.

Businesses are provisioned outside the API, so a fresh database needs this
before reviews can move any Biashara score.
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.db.database import AsyncSessionLocal, init_db, close_db
from app.models import Entity, User

SAMPLE_ENTITIES = [
    {"id": "biz1", "name": "Mama Oliech Restaurant"},
    {"id": "biz2", "name": "Kilimani Auto Garage"},
    {"id": "biz3", "name": "Java House Westlands"},
    {"id": "biz4", "name": "Nyali Beach Salon"},
]

SAMPLE_USERS = [
    {"id": "u1", "name": "Wanjiru Kamau", "email": "wanjiru@example.com"},
    {"id": "u2", "name": "Otieno Ochieng", "email": "otieno@example.com"},
]


async def create_sample_data():
    """Insert sample rows, skipping any that already exist."""
    print("Creating sample data...")

    async with AsyncSessionLocal() as db:
        created = 0
        for data in SAMPLE_ENTITIES:
            if await db.get(Entity, data["id"]) is None:
                db.add(Entity(biashara_score=0.0, total_reviews=0, **data))
                created += 1

        for data in SAMPLE_USERS:
            if await db.get(User, data["id"]) is None:
                db.add(User(**data))
                created += 1

        await db.commit()

    print(f"✓ Created {created} rows")


async def main():
    print("Initializing database...")
    await init_db()
    print("✓ Database initialized\n")

    await create_sample_data()
    await close_db()


if __name__ == "__main__":
    asyncio.run(main())
