"""Community list Pydantic schemas (camelCase JSON on the wire)."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ── Responses ──

class ListOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    slug: str
    emoji: Optional[str] = None
    is_active: bool
    is_weekly_challenge: bool
    created_at: Optional[datetime] = None
    # Only filled in by the index endpoint, which aggregates per call.
    total_votes: Optional[int] = None
    entry_count: Optional[int] = None


class EntryOut(CamelModel):
    id: int
    list_id: int
    spotify_track_id: str
    song_title: str
    artist_name: str
    album_name: Optional[str] = None
    image_url: Optional[str] = None
    context_reason: Optional[str] = None
    submitter_name: Optional[str] = None
    vote_score: int
    created_at: Optional[datetime] = None


class DuplicateSubmissionOut(CamelModel):
    success: bool = True
    is_duplicate: bool = True
    message: str
    existing_entry: EntryOut


class VoteOut(CamelModel):
    id: int
    entry_id: int
    user_id: Optional[str] = None
    guest_session_id: Optional[str] = None
    vote_direction: int
    created_at: Optional[datetime] = None


class VoteResultOut(CamelModel):
    success: bool = True
    vote_score: int


# ── Requests ──

class EntrySubmit(CamelModel):
    """Body of POST /api/community-lists/{listId}/entries."""
    spotify_track_id: str = Field(min_length=1, max_length=100)
    song_title: str = Field(min_length=1, max_length=300)
    artist_name: str = Field(min_length=1, max_length=300)
    album_name: Optional[str] = Field(default=None, max_length=300)
    image_url: Optional[str] = Field(default=None, max_length=500)
    context_reason: Optional[str] = None
    submitter_name: Optional[str] = Field(default=None, max_length=100)
    guest_session_id: Optional[str] = Field(default=None, max_length=255)
    user_id: Optional[str] = Field(default=None, max_length=255)


class VoteCast(CamelModel):
    """Body of POST /api/community-lists/entries/{entryId}/vote."""
    # Only the JSON integers 1 and -1; true and 1.0 are rejected.
    vote_direction: Optional[StrictInt] = None
    # Older web clients send "up"/"down" instead of a direction.
    vote_type: Optional[Literal["up", "down"]] = None
    user_id: Optional[str] = Field(default=None, max_length=255)
    guest_session_id: Optional[str] = Field(default=None, max_length=255)

    @field_validator("vote_direction")
    @classmethod
    def _check_direction(cls, value):
        if value is not None and value not in (1, -1):
            raise ValueError("voteDirection must be 1 or -1")
        return value

    @model_validator(mode="after")
    def _resolve_direction(self):
        if self.vote_direction is None:
            if self.vote_type is None:
                raise ValueError("voteDirection is required")
            self.vote_direction = 1 if self.vote_type == "up" else -1
        return self
