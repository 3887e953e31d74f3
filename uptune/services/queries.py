"""Read-side projections for community lists. Safe to poll."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from uptune.models.community_list import CommunityList
from uptune.models.entry_vote import EntryVote
from uptune.models.list_entry import ListEntry
from uptune.services import store
from uptune.services.identity import VoterIdentity


@dataclass
class ListSummary:
    community_list: CommunityList
    total_votes: int
    entry_count: int


async def get_list(db: AsyncSession, list_id: int) -> Optional[CommunityList]:
    result = await db.execute(select(CommunityList).where(CommunityList.id == list_id))
    return result.scalar_one_or_none()


async def get_list_by_slug(db: AsyncSession, slug: str) -> Optional[CommunityList]:
    """Active list with this slug, or None."""
    result = await db.execute(
        select(CommunityList).where(
            CommunityList.slug == slug,
            CommunityList.is_active.is_(True),
        )
    )
    return result.scalar_one_or_none()


async def get_lists(db: AsyncSession) -> List[ListSummary]:
    """
    Active lists, weekly challenge first, then by total entry score, then newest.
    Totals are aggregated on every call.
    """
    total_votes = func.coalesce(func.sum(ListEntry.vote_score), 0).label("total_votes")
    entry_count = func.count(ListEntry.id).label("entry_count")

    result = await db.execute(
        select(CommunityList, total_votes, entry_count)
        .outerjoin(ListEntry, ListEntry.list_id == CommunityList.id)
        .where(CommunityList.is_active.is_(True))
        .group_by(CommunityList.id)
        .order_by(
            CommunityList.is_weekly_challenge.desc(),
            total_votes.desc(),
            CommunityList.created_at.desc(),
            CommunityList.id.desc(),
        )
    )
    return [
        ListSummary(community_list=row, total_votes=int(total), entry_count=int(count))
        for row, total, count in result.all()
    ]


async def get_entries(db: AsyncSession, list_id: int) -> Sequence[ListEntry]:
    """Leaderboard order: highest score first, earlier submissions win ties."""
    result = await db.execute(
        select(ListEntry)
        .where(ListEntry.list_id == list_id)
        .order_by(
            ListEntry.vote_score.desc(),
            ListEntry.created_at.asc(),
            ListEntry.id.asc(),
        )
    )
    return result.scalars().all()


async def get_entry(db: AsyncSession, list_id: int, track_id: str) -> Optional[ListEntry]:
    return await store.find_entry(db, list_id, track_id)


async def get_vote(db: AsyncSession, entry_id: int, voter: VoterIdentity) -> Optional[EntryVote]:
    return await store.find_vote(db, entry_id, voter)
