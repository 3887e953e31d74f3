"""Domain errors raised by the community list services.

Routers translate these into HTTP responses; each carries the stable
``code`` that clients switch on (e.g. to disable a vote button after
``ALREADY_VOTED``).
"""

from typing import Any, List, Optional


class CommunityError(Exception):
    """Base class for expected, user-facing failures."""

    code = "COMMUNITY_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(CommunityError):
    code = "VALIDATION_ERROR"
    status_code = 400


class ListNotFound(CommunityError):
    code = "LIST_NOT_FOUND"
    status_code = 404

    def __init__(self, list_ref):
        super().__init__(f"Community list {list_ref!r} not found")
        self.list_ref = list_ref


class EntryNotFound(CommunityError):
    code = "ENTRY_NOT_FOUND"
    status_code = 404

    def __init__(self, entry_id: int):
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id


class AlreadyVoted(CommunityError):
    code = "ALREADY_VOTED"
    status_code = 400

    def __init__(self, entry_id: int):
        super().__init__("You have already voted on this song")
        self.entry_id = entry_id
