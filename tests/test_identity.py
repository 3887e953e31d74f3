"""Tests for building voter identities from request fields."""

import pytest

from uptune.services.errors import ValidationError
from uptune.services.identity import AuthenticatedUser, GuestSession, voter_identity


class TestVoterIdentity:
    def test_user_id_gives_authenticated_user(self):
        assert voter_identity(user_id="user-1") == AuthenticatedUser("user-1")

    def test_guest_session_gives_guest(self):
        assert voter_identity(guest_session_id="guest_abc") == GuestSession("guest_abc")

    def test_both_rejected(self):
        with pytest.raises(ValidationError, match="not both"):
            voter_identity(user_id="user-1", guest_session_id="guest_abc")

    def test_neither_rejected(self):
        with pytest.raises(ValidationError, match="required"):
            voter_identity()

    def test_blank_values_count_as_missing(self):
        """Whitespace-only fields are treated as absent."""
        assert voter_identity(user_id="   ", guest_session_id="guest_abc") == GuestSession("guest_abc")
        with pytest.raises(ValidationError):
            voter_identity(user_id="", guest_session_id="  ")

    def test_storage_keys(self):
        user = AuthenticatedUser("user-1")
        guest = GuestSession("guest_abc")
        assert (user.user_key, user.guest_key) == ("user-1", None)
        assert (guest.user_key, guest.guest_key) == (None, "guest_abc")
