"""Community lists router — submissions, votes and leaderboard reads (JSON only)."""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from uptune.database import get_db
from uptune.routers.auth import get_current_user_id
from uptune.schemas.community import (
    DuplicateSubmissionOut,
    EntryOut,
    EntrySubmit,
    ListOut,
    VoteCast,
    VoteOut,
    VoteResultOut,
)
from uptune.services import queries, submissions, voting
from uptune.services.identity import AuthenticatedUser, VoterIdentity, voter_identity
from uptune.services.queries import ListSummary
from uptune.services.store import EntryMetadata

router = APIRouter(prefix="/api/community-lists", tags=["community-lists"])


def _resolve_voter(
    token_user_id: Optional[str],
    user_id: Optional[str],
    guest_session_id: Optional[str],
) -> VoterIdentity:
    """A verified token wins over identity fields sent in the request."""
    if token_user_id:
        return AuthenticatedUser(token_user_id)
    return voter_identity(user_id, guest_session_id)


def _list_out(summary: ListSummary) -> ListOut:
    return ListOut.model_validate(summary.community_list).model_copy(
        update={"total_votes": summary.total_votes, "entry_count": summary.entry_count}
    )


# ═══════════════════════════════════════════════════════════════
#  GET /api/community-lists → active lists, most active first
# ═══════════════════════════════════════════════════════════════

@router.get("", response_model=List[ListOut])
async def list_community_lists(db: AsyncSession = Depends(get_db)):
    summaries = await queries.get_lists(db)
    return [_list_out(s) for s in summaries]


# ═══════════════════════════════════════════════════════════════
#  GET /api/community-lists/entries/{entry_id}/vote → caller's vote or null
# ═══════════════════════════════════════════════════════════════

@router.get("/entries/{entry_id}/vote", response_model=Optional[VoteOut])
async def get_my_vote(
    entry_id: int,
    user_id: Optional[str] = Query(None, alias="userId", max_length=255),
    guest_session_id: Optional[str] = Query(None, alias="guestSessionId", max_length=255),
    current_user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    voter = _resolve_voter(current_user_id, user_id, guest_session_id)
    vote = await queries.get_vote(db, entry_id, voter)
    if vote is None:
        return None
    return VoteOut.model_validate(vote)


# ═══════════════════════════════════════════════════════════════
#  POST /api/community-lists/entries/{entry_id}/vote → cast a vote
# ═══════════════════════════════════════════════════════════════

@router.post("/entries/{entry_id}/vote", response_model=VoteResultOut)
async def cast_vote(
    entry_id: int,
    payload: VoteCast,
    current_user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    voter = _resolve_voter(current_user_id, payload.user_id, payload.guest_session_id)
    entry = await voting.cast_vote(db, entry_id, voter, payload.vote_direction)
    return VoteResultOut(vote_score=entry.vote_score)


# ═══════════════════════════════════════════════════════════════
#  GET /api/community-lists/{slug} → single list
# ═══════════════════════════════════════════════════════════════

@router.get("/{slug}", response_model=ListOut)
async def get_community_list(slug: str, db: AsyncSession = Depends(get_db)):
    community_list = await queries.get_list_by_slug(db, slug)
    if not community_list:
        raise HTTPException(status_code=404, detail="Community list not found")
    return ListOut.model_validate(community_list)


# ═══════════════════════════════════════════════════════════════
#  GET /api/community-lists/{list_id}/entries → leaderboard (polled)
# ═══════════════════════════════════════════════════════════════

@router.get("/{list_id}/entries", response_model=List[EntryOut])
async def get_entries(list_id: int, db: AsyncSession = Depends(get_db)):
    if await queries.get_list(db, list_id) is None:
        raise HTTPException(status_code=404, detail="Community list not found")
    entries = await queries.get_entries(db, list_id)
    return [EntryOut.model_validate(e) for e in entries]


# ═══════════════════════════════════════════════════════════════
#  POST /api/community-lists/{list_id}/entries → submit a song
# ═══════════════════════════════════════════════════════════════

@router.post("/{list_id}/entries", response_model=Union[EntryOut, DuplicateSubmissionOut])
@router.post("/{list_id}/submit", response_model=Union[EntryOut, DuplicateSubmissionOut], include_in_schema=False)
async def submit_entry(
    list_id: int,
    payload: EntrySubmit,
    current_user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    submitter = _resolve_voter(current_user_id, payload.user_id, payload.guest_session_id)
    metadata = EntryMetadata(
        spotify_track_id=payload.spotify_track_id,
        song_title=payload.song_title,
        artist_name=payload.artist_name,
        album_name=payload.album_name,
        image_url=payload.image_url,
        context_reason=payload.context_reason,
        submitter_name=payload.submitter_name,
    )

    result = await submissions.submit_entry(db, list_id, metadata, submitter)
    if result.is_duplicate:
        return DuplicateSubmissionOut(
            message=result.message,
            existing_entry=EntryOut.model_validate(result.entry),
        )
    return EntryOut.model_validate(result.entry)
