"""
Seed sample pets into the database.

Pets that already exist (same name and species) are skipped.

Usage:
    python scripts/seed_pets.py
"""
import asyncio

from sqlalchemy import select

from petshop.database import async_session_maker
from petshop.models.pet import Pet, PetStatus


SAMPLE_PETS = [
    {"name": "Buddy", "species": "dog", "breed": "Golden Retriever", "age": 3, "gender": "male",
     "description": "Friendly and loves long walks."},
    {"name": "Luna", "species": "cat", "breed": "Siamese", "age": 2, "gender": "female",
     "description": "Quiet, curious and fond of sunny windows."},
    {"name": "Max", "species": "dog", "breed": "Beagle", "age": 5, "gender": "male",
     "description": "Great with children."},
    {"name": "Coco", "species": "rabbit", "breed": None, "age": 1, "gender": "female",
     "description": "Litter trained."},
    {"name": "Kiwi", "species": "bird", "breed": "Budgerigar", "age": 1, "gender": None,
     "description": "Chirpy and social."},
]


async def seed_pets() -> None:
    """Insert the sample pets."""
    async with async_session_maker() as session:
        pets_added = 0
        pets_skipped = 0

        for pet_data in SAMPLE_PETS:
            result = await session.execute(
                select(Pet.id).where(
                    Pet.name == pet_data["name"],
                    Pet.species == pet_data["species"],
                )
            )
            if result.first() is not None:
                pets_skipped += 1
                continue

            session.add(Pet(status=PetStatus.AVAILABLE.value, **pet_data))
            pets_added += 1

        await session.commit()

    print(f"Pets added: {pets_added}, skipped: {pets_skipped}")


if __name__ == "__main__":
    asyncio.run(seed_pets())
