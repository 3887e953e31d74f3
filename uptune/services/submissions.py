"""Turns a repeat track submission into a vote on the existing entry."""

import logging
from dataclasses import dataclass, fields, replace
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from uptune.models.list_entry import ListEntry
from uptune.services import queries, store
from uptune.services.errors import ListNotFound, ValidationError
from uptune.services.identity import VoterIdentity
from uptune.services.store import EntryMetadata
from uptune.services.voting import UPVOTE, cast_vote

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Someone already picked this song, so your vote was added to it instead."

REQUIRED_FIELDS = ("spotify_track_id", "song_title", "artist_name")


@dataclass
class SubmissionResult:
    entry: ListEntry
    is_duplicate: bool = False
    message: Optional[str] = None


def clean_metadata(metadata: EntryMetadata) -> EntryMetadata:
    """Strip whitespace, blank optionals to None, and require the core fields."""
    cleaned = {}
    for field in fields(metadata):
        value = getattr(metadata, field.name)
        if isinstance(value, str):
            value = value.strip() or None
        cleaned[field.name] = value

    missing = [name for name in REQUIRED_FIELDS if not cleaned[name]]
    if missing:
        raise ValidationError(
            "Invalid submission data",
            details=[{"field": name, "error": "required"} for name in missing],
        )
    return replace(metadata, **cleaned)


async def submit_entry(
    db: AsyncSession,
    list_id: int,
    metadata: EntryMetadata,
    submitter: VoterIdentity,
) -> SubmissionResult:
    """
    Add a track to a community list.

    A new (list, track) pair creates an entry with a zero score and casts no
    vote. If the track is already on the list, the submission becomes a +1
    vote from ``submitter`` on the existing entry instead (AlreadyVoted
    propagates if they have voted on it before).
    """
    metadata = clean_metadata(metadata)

    community_list = await queries.get_list(db, list_id)
    if community_list is None or not community_list.is_active:
        raise ListNotFound(list_id)

    outcome = await store.insert_entry(db, list_id, metadata)
    if not isinstance(outcome, store.DuplicateKey):
        await db.commit()
        logger.info(
            f"New entry {outcome.id} on list {list_id}: "
            f"{metadata.song_title} by {metadata.artist_name}"
        )
        return SubmissionResult(entry=outcome)

    logger.info(
        f"Track {metadata.spotify_track_id} already on list {list_id} "
        f"(entry {outcome.existing_id}); merging submission into a vote"
    )
    entry = await cast_vote(db, outcome.existing_id, submitter, UPVOTE)
    return SubmissionResult(entry=entry, is_duplicate=True, message=DUPLICATE_MESSAGE)
