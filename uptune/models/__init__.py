"""
Uptune – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them through a single
``from uptune.models import *`` import before ``create_all`` runs.
"""

from uptune.models.community_list import CommunityList  # noqa: F401
from uptune.models.list_entry import ListEntry          # noqa: F401
from uptune.models.entry_vote import EntryVote          # noqa: F401
