"""Vote aggregator: applies one vote and recomputes the entry score atomically."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from uptune.models.list_entry import ListEntry
from uptune.services import store
from uptune.services.errors import AlreadyVoted, EntryNotFound, ValidationError
from uptune.services.identity import VoterIdentity

logger = logging.getLogger(__name__)

UPVOTE = 1
DOWNVOTE = -1
VALID_DIRECTIONS = (UPVOTE, DOWNVOTE)


async def cast_vote(
    db: AsyncSession,
    entry_id: int,
    voter: VoterIdentity,
    direction: int,
) -> ListEntry:
    """
    Record ``voter``'s vote on an entry and return the entry with its new score.

    Runs as one transaction: lock the entry, reject a repeat voter, insert the
    vote, then write SUM(vote_direction) back to ``vote_score``. The score is
    always recomputed from the vote rows, never incremented in place.

    Raises EntryNotFound, AlreadyVoted or ValidationError; on any failure the
    transaction is rolled back and nothing is written.
    """
    if direction not in VALID_DIRECTIONS:
        raise ValidationError(
            "voteDirection must be 1 or -1",
            details=[{"field": "voteDirection", "value": direction}],
        )

    try:
        entry = await store.lock_entry(db, entry_id)
        if entry is None:
            raise EntryNotFound(entry_id)

        # Clean error for the common case; the unique constraint settles races.
        if await store.find_vote(db, entry_id, voter) is not None:
            raise AlreadyVoted(entry_id)

        outcome = await store.insert_vote(db, entry_id, voter, direction)
        if isinstance(outcome, store.DuplicateKey):
            raise AlreadyVoted(entry_id)

        score = await store.recompute_score(db, entry_id)
        await db.commit()
    except AlreadyVoted:
        await db.rollback()
        logger.info(f"Rejected repeat vote on entry {entry_id} by {voter}")
        raise
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Vote {direction:+d} on entry {entry_id} by {voter}; score is now {score}")
    return entry
