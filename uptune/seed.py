"""Starter community lists, inserted once into an empty database."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from uptune.models.community_list import CommunityList

logger = logging.getLogger(__name__)

STARTER_LISTS = [
    {
        "title": "Your Ultimate High School Anthem",
        "description": "The track that takes you right back to those hallways, friendships, and unforgettable moments.",
        "slug": "high-school-anthem",
        "emoji": "🎓",
        "is_weekly_challenge": True,
    },
    {
        "title": "Best Song Ever",
        "description": "No guilty pleasures, no hedging. The one song you'd defend to the end.",
        "slug": "best-song-ever",
        "emoji": "🏆",
    },
    {
        "title": "Ultimate Driving Song",
        "description": "Windows down, volume up. What goes on first when you hit the open road?",
        "slug": "ultimate-driving-song",
        "emoji": "🚗",
    },
    {
        "title": "Disco Classics",
        "description": "Mirror balls and four-on-the-floor. The tracks that still fill every dance floor.",
        "slug": "disco-classics",
        "emoji": "🪩",
    },
    {
        "title": "Desert Island Discs",
        "description": "Stranded with one record player. Which song makes the cut?",
        "slug": "desert-island-discs",
        "emoji": "🏝️",
    },
]


async def seed_community_lists(db: AsyncSession) -> int:
    """Insert the starter lists if no lists exist yet; return how many were created."""
    existing = (await db.execute(select(func.count(CommunityList.id)))).scalar() or 0
    if existing:
        logger.info(f"Skipping community list seed, {existing} lists already present")
        return 0

    for data in STARTER_LISTS:
        db.add(CommunityList(**data))
    await db.commit()

    logger.info(f"Seeded {len(STARTER_LISTS)} community lists")
    return len(STARTER_LISTS)
