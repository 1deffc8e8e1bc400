"""Seed the pre-built companion catalogue into the companions table."""
import asyncio
import sys
from datetime import datetime, timedelta, timezone
sys.path.insert(0, ".")

from sqlalchemy import select
from kindred.database import async_session_factory, engine
from kindred.models.companion import Companion


PREBUILT_COMPANIONS = [
    {
        "name": "Sofia",
        "age": 27,
        "gender": "female",
        "bio": "Passionate painter who loves long talks about art and life.",
        "hobbies": ["painting", "photography", "hiking"],
        "personality": ["warm", "creative", "romantic"],
        "likes": ["sunsets", "galleries", "espresso"],
        "dislikes": ["rudeness", "rush hour"],
        "location": "Barcelona, Spain",
    },
    {
        "name": "Marcus",
        "age": 31,
        "gender": "male",
        "bio": "Easygoing gamer and weekend chef, always up for a laugh.",
        "hobbies": ["gaming", "cooking", "basketball"],
        "personality": ["friendly", "fun", "energetic"],
        "likes": ["street food", "co-op games"],
        "dislikes": ["spoilers"],
        "location": "Chicago, Illinois",
    },
    {
        "name": "Aiyana",
        "age": 38,
        "gender": "female",
        "bio": "Yoga teacher and meditation guide with a thoughtful, creative soul.",
        "hobbies": ["yoga", "meditation", "music"],
        "personality": ["peaceful", "calm", "thoughtful"],
        "likes": ["sunrise", "herbal tea"],
        "dislikes": ["noise"],
        "location": "Sedona, Arizona",
    },
    {
        "name": "Kai",
        "age": 24,
        "gender": "nonbinary",
        "bio": "Indie musician writing songs about small everyday moments.",
        "hobbies": ["music", "reading", "travel"],
        "personality": ["curious", "creative", "funny"],
        "likes": ["vinyl", "road trips"],
        "dislikes": ["small talk"],
        "location": "Portland",
    },
    {
        "name": "Elena",
        "age": 47,
        "gender": "female",
        "bio": "Former diplomat who is passionate about languages and history.",
        "hobbies": ["reading", "travel", "cooking"],
        "personality": ["intelligent", "warm", "adventurous"],
        "likes": ["old maps", "red wine"],
        "dislikes": ["dishonesty"],
        "location": "Lisbon, Portugal",
    },
    {
        "name": "Daniel",
        "age": 29,
        "gender": "male",
        "bio": "Trail runner and amateur astronomer who loves quiet nights.",
        "hobbies": ["running", "hiking", "astronomy"],
        "personality": ["adventurous", "caring", "romantic"],
        "likes": ["clear skies", "mountains"],
        "dislikes": ["crowds"],
        "location": "Denver, Colorado",
    },
]


def build_companion(position: int, data: dict, base_time: datetime) -> Companion:
    """Pre-built row whose created_at follows its position in the catalogue."""
    return Companion(
        is_prebuilt=True,
        created_at=base_time + timedelta(seconds=position),
        **data,
    )


async def seed():
    base_time = datetime.now(timezone.utc)
    async with async_session_factory() as session:
        for position, c in enumerate(PREBUILT_COMPANIONS):
            existing = await session.execute(
                select(Companion).where(
                    Companion.name == c["name"],
                    Companion.is_prebuilt.is_(True),
                )
            )
            if existing.scalar_one_or_none() is None:
                session.add(build_companion(position, c, base_time))
                print(f"  Seeded companion {c['name']} ({c['location']})")
            else:
                print(f"  Companion {c['name']} already exists, skipping.")
        await session.commit()
    await engine.dispose()
    print("Done seeding companions.")


if __name__ == "__main__":
    asyncio.run(seed())
