"""
Seed demo data into Firestore.

Clears the demo collections, then creates an establishment, a professional
who is an active member of it, a client, the professional's procedures and
Monday-Friday working hours.

Usage:
    python scripts/seed_demo.py

Security:
    IMPORTANT: This deletes every document in the seeded collections.
    Never point it at a production project.
"""

import asyncio
import sys
from pathlib import Path

# Add repository root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from serviflex.core import collections
from serviflex.core.firebase import close_firebase, get_firestore_client, init_firebase
from serviflex.core.logging_config import setup_logging
from serviflex.repositories.establishments import EstablishmentRepository
from serviflex.repositories.procedures import ProcedureRepository
from serviflex.repositories.users import UserRepository
from serviflex.repositories.working_hours import WorkingHoursRepository

DEMO_PASSWORD = "changeme123"

SEEDED_COLLECTIONS = (
    collections.CLIENTS,
    collections.PROFESSIONALS,
    collections.ESTABLISHMENTS,
    collections.PROCEDURES,
    collections.WORKING_HOURS,
    collections.APPOINTMENTS,
    collections.RATINGS,
    collections.NOTIFICATIONS,
)


async def clear_collection(db, name: str) -> int:
    """Delete every document of a collection, including establishment members."""
    deleted = 0
    for snapshot in await db.collection(name).get():
        if name == collections.ESTABLISHMENTS:
            members = snapshot.reference.collection(collections.ESTABLISHMENT_MEMBERS)
            for member in await members.get():
                await member.reference.delete()
        await snapshot.reference.delete()
        deleted += 1
    return deleted


async def seed_demo(db) -> dict:
    """
    Clear and seed the demo collections.

    Returns:
        Ids of the seeded establishment, professional and client
    """
    for name in SEEDED_COLLECTIONS:
        deleted = await clear_collection(db, name)
        print(f"Cleared {name}: {deleted} documents")

    establishments = EstablishmentRepository(db)
    establishment = await establishments.create_establishment({
        "name": "Studio da Beleza",
        "description": "Beauty and wellness studio",
        "photo_url": "",
        "category": "Beauty",
        "location": {"street": "Rua das Flores, 123", "city": "Uberlandia", "state": "MG"},
    })

    professional = await UserRepository(db, collections.PROFESSIONALS).create_user({
        "name": "Ana Souza",
        "email": "ana@example.com",
        "password": DEMO_PASSWORD,
        "phone": "(34) 98888-0000",
        "image_url": "",
        "establishment_id": establishment["id"],
    })
    await establishments.add_member(establishment["id"], professional["id"], professional["name"])

    client = await UserRepository(db, collections.CLIENTS).create_user({
        "name": "Carlos Lima",
        "email": "carlos@example.com",
        "password": DEMO_PASSWORD,
        "phone": "(34) 97777-0000",
        "photo_url": "",
    })

    procedures = ProcedureRepository(db)
    for name, price, duration in (("Haircut", 50.0, 30), ("Manicure", 35.0, 45), ("Hair coloring", 120.0, 90)):
        await procedures.create({
            "professional_id": professional["id"],
            "name": name,
            "description": "",
            "price": price,
            "duration_minutes": duration,
            "image_url": None,
        })

    await WorkingHoursRepository(db).create_many(
        professional["id"],
        ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        "09:00",
        "18:00",
    )

    return {
        "establishment_id": establishment["id"],
        "professional_id": professional["id"],
        "client_id": client["id"],
    }


async def main() -> None:
    setup_logging(level="WARNING", json_format=False)
    init_firebase()
    try:
        ids = await seed_demo(get_firestore_client())
    finally:
        close_firebase()

    print("Demo data created successfully!")
    for key, value in ids.items():
        print(f"  {key}: {value}")
    print(f"Login with ana@example.com or carlos@example.com / {DEMO_PASSWORD}")


if __name__ == "__main__":
    print("Seeding demo data...")
    asyncio.run(main())
    print("Done!")
