"""Voter identity, either an authenticated user or an anonymous guest session."""

from dataclasses import dataclass
from typing import Optional, Union

from uptune.services.errors import ValidationError


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: str

    @property
    def user_key(self) -> Optional[str]:
        return self.user_id

    @property
    def guest_key(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class GuestSession:
    token: str

    @property
    def user_key(self) -> Optional[str]:
        return None

    @property
    def guest_key(self) -> Optional[str]:
        return self.token


VoterIdentity = Union[AuthenticatedUser, GuestSession]


def voter_identity(user_id: Optional[str] = None, guest_session_id: Optional[str] = None) -> VoterIdentity:
    """
    Build a VoterIdentity from raw request fields.

    Exactly one of ``user_id`` / ``guest_session_id`` must be non-blank.
    """
    user_id = (user_id or "").strip() or None
    guest_session_id = (guest_session_id or "").strip() or None

    if user_id and guest_session_id:
        raise ValidationError(
            "Provide either userId or guestSessionId, not both",
            details=[{"field": "userId"}, {"field": "guestSessionId"}],
        )
    if user_id:
        return AuthenticatedUser(user_id)
    if guest_session_id:
        return GuestSession(guest_session_id)
    raise ValidationError(
        "A userId or guestSessionId is required",
        details=[{"field": "userId"}, {"field": "guestSessionId"}],
    )
