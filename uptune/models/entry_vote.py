"""EntryVote model — one voter's +1/-1 on a list entry."""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, SmallInteger, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from uptune.database import Base


class EntryVote(Base):
    __tablename__ = "entry_votes"
    __table_args__ = (
        CheckConstraint("vote_direction IN (1, -1)", name="ck_entry_votes_direction"),
        CheckConstraint(
            "(user_id IS NOT NULL AND guest_session_id IS NULL)"
            " OR (user_id IS NULL AND guest_session_id IS NOT NULL)",
            name="ck_entry_votes_one_voter",
        ),
        # NULLs never collide, so together these allow one vote per voter per entry.
        UniqueConstraint("entry_id", "user_id", name="uq_entry_votes_entry_user"),
        UniqueConstraint("entry_id", "guest_session_id", name="uq_entry_votes_entry_guest"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    entry_id: Mapped[int] = mapped_column(
        ForeignKey("list_entries.id"), index=True, nullable=False
    )

    # ── Voter identity (exactly one) ──
    user_id: Mapped[Optional[str]] = mapped_column(String(255))
    guest_session_id: Mapped[Optional[str]] = mapped_column(String(255))

    # 1 = upvote, -1 = downvote.
    vote_direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
