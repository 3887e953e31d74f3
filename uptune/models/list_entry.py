"""ListEntry model — one submitted track within a community list."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from uptune.database import Base


class ListEntry(Base):
    __tablename__ = "list_entries"
    __table_args__ = (
        # A track appears at most once per list; duplicates become votes.
        UniqueConstraint("list_id", "spotify_track_id", name="uq_list_entries_list_track"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    list_id: Mapped[int] = mapped_column(
        ForeignKey("community_lists.id"), index=True, nullable=False
    )
    spotify_track_id: Mapped[str] = mapped_column(String(100), nullable=False)

    # ── Display metadata ──
    song_title: Mapped[str] = mapped_column(String(300), nullable=False)
    artist_name: Mapped[str] = mapped_column(String(300), nullable=False)
    album_name: Mapped[Optional[str]] = mapped_column(String(300))
    image_url: Mapped[Optional[str]] = mapped_column(String(500))
    context_reason: Mapped[Optional[str]] = mapped_column(Text)
    submitter_name: Mapped[Optional[str]] = mapped_column(String(100))

    # Cached SUM(entry_votes.vote_direction); written only by the vote aggregator.
    vote_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
