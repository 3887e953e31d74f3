"""
Uptune – Async SQLAlchemy engine, session, and declarative base.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from uptune.config import settings


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine with the per-backend tweaks Uptune relies on."""
    engine_kwargs = {
        "echo": echo,
        "future": True,
    }

    # If using PostgreSQL (Render/Supabase), disable prepared statement caching
    # because PgBouncer (transaction mode) does not support it properly.
    if "postgresql" in url:
        engine_kwargs["connect_args"] = {"statement_cache_size": 0}
    elif url.startswith("sqlite"):
        # Concurrent writers queue on the database lock instead of failing fast.
        engine_kwargs["connect_args"] = {"timeout": settings.SQLITE_BUSY_TIMEOUT}

    new_engine = create_async_engine(url, **engine_kwargs)

    if url.startswith("sqlite"):
        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


# ── Engine ──
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# ── Session factory ──
async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ── Dependency for FastAPI routes ──
async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async database session, auto-closed on exit."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
