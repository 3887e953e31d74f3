"""
Storage adapter for list entries and votes.

Inserts report a unique-key collision as a ``DuplicateKey`` value instead of
leaking engine-specific ``IntegrityError`` codes to the services above.
A collision is only reported once the conflicting row has been re-read;
any other constraint failure is re-raised untouched.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from uptune.models.entry_vote import EntryVote
from uptune.models.list_entry import ListEntry
from uptune.services.identity import VoterIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicateKey:
    """An insert collided with the row ``existing_id``."""
    existing_id: int


@dataclass
class EntryMetadata:
    """Track details supplied with a submission."""
    spotify_track_id: str
    song_title: str
    artist_name: str
    album_name: Optional[str] = None
    image_url: Optional[str] = None
    context_reason: Optional[str] = None
    submitter_name: Optional[str] = None


# ═══════════════════════════════════════════════════════════════
#  Lookups
# ═══════════════════════════════════════════════════════════════

async def find_entry(db: AsyncSession, list_id: int, track_id: str) -> Optional[ListEntry]:
    result = await db.execute(
        select(ListEntry).where(
            ListEntry.list_id == list_id,
            ListEntry.spotify_track_id == track_id,
        )
    )
    return result.scalar_one_or_none()


async def find_vote(db: AsyncSession, entry_id: int, voter: VoterIdentity) -> Optional[EntryVote]:
    if voter.user_key is not None:
        voter_clause = EntryVote.user_id == voter.user_key
    else:
        voter_clause = EntryVote.guest_session_id == voter.guest_key

    result = await db.execute(
        select(EntryVote).where(EntryVote.entry_id == entry_id, voter_clause)
    )
    return result.scalar_one_or_none()


async def lock_entry(db: AsyncSession, entry_id: int) -> Optional[ListEntry]:
    """Load an entry, taking a row lock on engines that support FOR UPDATE."""
    result = await db.execute(
        select(ListEntry)
        .where(ListEntry.id == entry_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


# ═══════════════════════════════════════════════════════════════
#  Inserts
# ═══════════════════════════════════════════════════════════════

async def insert_entry(
    db: AsyncSession, list_id: int, metadata: EntryMetadata
) -> Union[ListEntry, DuplicateKey]:
    """Insert a new entry with a zero score, or report the (list, track) collision."""
    entry = ListEntry(
        list_id=list_id,
        spotify_track_id=metadata.spotify_track_id,
        song_title=metadata.song_title,
        artist_name=metadata.artist_name,
        album_name=metadata.album_name,
        image_url=metadata.image_url,
        context_reason=metadata.context_reason,
        submitter_name=metadata.submitter_name,
        vote_score=0,
    )
    db.add(entry)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        existing = await find_entry(db, list_id, metadata.spotify_track_id)
        if existing is None:
            raise
        logger.debug(f"Entry insert collided with entry {existing.id} on list {list_id}")
        return DuplicateKey(existing.id)

    await db.refresh(entry)
    return entry


async def insert_vote(
    db: AsyncSession, entry_id: int, voter: VoterIdentity, direction: int
) -> Union[EntryVote, DuplicateKey]:
    """Insert a vote row, or report that this voter already has one on the entry."""
    vote = EntryVote(
        entry_id=entry_id,
        user_id=voter.user_key,
        guest_session_id=voter.guest_key,
        vote_direction=direction,
    )
    db.add(vote)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        existing = await find_vote(db, entry_id, voter)
        if existing is None:
            raise
        logger.debug(f"Vote insert collided with vote {existing.id} on entry {entry_id}")
        return DuplicateKey(existing.id)

    await db.refresh(vote)
    return vote


# ═══════════════════════════════════════════════════════════════
#  Score
# ═══════════════════════════════════════════════════════════════

async def recompute_score(db: AsyncSession, entry_id: int) -> int:
    """Write SUM(vote_direction) back onto the entry and return it."""
    total_result = await db.execute(
        select(func.coalesce(func.sum(EntryVote.vote_direction), 0)).where(
            EntryVote.entry_id == entry_id
        )
    )
    total = int(total_result.scalar_one())

    await db.execute(
        update(ListEntry).where(ListEntry.id == entry_id).values(vote_score=total)
    )
    return total
