"""Shared fixtures: a throwaway SQLite file database per test and an API client."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from uptune import models  # noqa: F401
from uptune.database import Base, build_engine, get_db
from uptune.main import app
from uptune.models.community_list import CommunityList
from uptune.services.identity import GuestSession
from uptune.services.store import EntryMetadata
from uptune.services.submissions import submit_entry


@pytest.fixture
async def engine(tmp_path):
    # A file (not :memory:) so concurrent sessions get their own connections.
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'uptune-test.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def make_list(session_factory, slug: str, **kwargs) -> int:
    """Insert a community list and return its id."""
    fields = {"title": slug.replace("-", " ").title(), "description": f"All about {slug}", "emoji": "🎵"}
    fields.update(kwargs)
    async with session_factory() as session:
        community_list = CommunityList(slug=slug, **fields)
        session.add(community_list)
        await session.commit()
        return community_list.id


@pytest.fixture
async def disco_list(session_factory) -> int:
    return await make_list(session_factory, "disco-classics", title="Disco Classics")


def track(track_id: str, title: str = "Le Freak", artist: str = "Chic", **kwargs) -> EntryMetadata:
    return EntryMetadata(spotify_track_id=track_id, song_title=title, artist_name=artist, **kwargs)


def guest(name: str) -> GuestSession:
    return GuestSession(f"guest_{name}")


async def make_entry(session_factory, list_id: int, track_id: str, **kwargs) -> int:
    """Submit a fresh track and return the new entry id."""
    async with session_factory() as session:
        result = await submit_entry(session, list_id, track(track_id, **kwargs), guest("submitter"))
        assert not result.is_duplicate
        return result.entry.id
