"""Tests for the storage adapter's typed insert outcomes."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from tests.conftest import guest, make_entry, track
from uptune.models.entry_vote import EntryVote
from uptune.models.list_entry import ListEntry
from uptune.services import store
from uptune.services.identity import AuthenticatedUser


class TestInsertEntry:
    async def test_new_entry_starts_at_zero(self, db, disco_list):
        entry = await store.insert_entry(db, disco_list, track("abc"))
        await db.commit()

        assert isinstance(entry, ListEntry)
        assert entry.vote_score == 0
        assert entry.list_id == disco_list
        assert entry.created_at is not None

    async def test_same_track_reports_duplicate(self, db, session_factory, disco_list):
        entry_id = await make_entry(session_factory, disco_list, "abc")

        outcome = await store.insert_entry(db, disco_list, track("abc", title="Le Freak (Remix)"))

        assert outcome == store.DuplicateKey(entry_id)
        count = (await db.execute(select(func.count(ListEntry.id)))).scalar()
        assert count == 1

    async def test_same_track_on_other_list_is_not_duplicate(self, db, session_factory, disco_list):
        from tests.conftest import make_list

        other_list = await make_list(session_factory, "driving-songs")
        await make_entry(session_factory, disco_list, "abc")

        outcome = await store.insert_entry(db, other_list, track("abc"))
        assert isinstance(outcome, ListEntry)

    async def test_other_constraint_failures_propagate(self, db):
        """A foreign-key failure is not a duplicate and must not be swallowed."""
        with pytest.raises(IntegrityError):
            await store.insert_entry(db, 9999, track("abc"))


class TestInsertVote:
    async def test_second_vote_by_same_voter_is_duplicate(self, db, session_factory, disco_list):
        entry_id = await make_entry(session_factory, disco_list, "abc")

        first = await store.insert_vote(db, entry_id, guest("x"), 1)
        await db.commit()
        second = await store.insert_vote(db, entry_id, guest("x"), 1)

        assert isinstance(first, EntryVote)
        assert second == store.DuplicateKey(first.id)

    async def test_user_and_guest_with_same_key_do_not_collide(self, db, session_factory, disco_list):
        entry_id = await make_entry(session_factory, disco_list, "abc")

        as_guest = await store.insert_vote(db, entry_id, guest("x"), 1)
        as_user = await store.insert_vote(db, entry_id, AuthenticatedUser("guest_x"), 1)
        await db.commit()

        assert isinstance(as_guest, EntryVote)
        assert isinstance(as_user, EntryVote)
        assert as_user.user_id == "guest_x" and as_user.guest_session_id is None

    async def test_direction_check_constraint(self, db, session_factory, disco_list):
        entry_id = await make_entry(session_factory, disco_list, "abc")
        with pytest.raises(IntegrityError):
            await store.insert_vote(db, entry_id, guest("x"), 2)


class TestRecomputeScore:
    async def test_score_is_sum_of_directions(self, db, session_factory, disco_list):
        entry_id = await make_entry(session_factory, disco_list, "abc")
        for name, direction in [("a", 1), ("b", 1), ("c", -1), ("d", 1)]:
            await store.insert_vote(db, entry_id, guest(name), direction)

        total = await store.recompute_score(db, entry_id)
        await db.commit()

        assert total == 2
        entry = await store.lock_entry(db, entry_id)
        assert entry.vote_score == 2

    async def test_no_votes_is_zero(self, db, session_factory, disco_list):
        entry_id = await make_entry(session_factory, disco_list, "abc")
        assert await store.recompute_score(db, entry_id) == 0
