"""CommunityList model — themed lists that songs are submitted into."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from uptune.database import Base


class CommunityList(Base):
    __tablename__ = "community_lists"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True, nullable=False)
    emoji: Mapped[Optional[str]] = mapped_column(String(16))

    # ── Flags ──
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_weekly_challenge: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
