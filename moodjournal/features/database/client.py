"""
Database Client - access to the journal's Supabase tables.

Thin wrapper that hands out the focused repository classes.
"""

import logging
from functools import lru_cache

from moodjournal.core.database import get_supabase
from moodjournal.features.database.repositories.entries import EntriesRepository
from moodjournal.features.database.repositories.profiles import ProfilesRepository

logger = logging.getLogger("MoodJournal.Database")


class DatabaseClient:
    """
    Database client providing access to all repositories.

    Usage:
        db = get_database_client()
        rows = db.entries.list_for_owner(user_id)
        profile = db.profiles.get(user_id)
    """

    def __init__(self, client=None):
        """Initialize with an explicit Supabase client, or the shared one."""
        self._client = client if client is not None else get_supabase()

        self.entries = EntriesRepository(self._client)
        self.profiles = ProfilesRepository(self._client)

        logger.info("Database client initialized with all repositories")

    @property
    def client(self):
        """Direct access to the Supabase client (auth lives here)."""
        return self._client


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    """Get the singleton database client."""
    return DatabaseClient()
