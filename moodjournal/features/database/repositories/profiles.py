"""Profiles Repository - user_profiles lookups."""

import logging
from typing import Dict, Optional

from moodjournal.core.config import settings
from moodjournal.core.logging_utils import mask_identity
from moodjournal.features.database.repositories.base import translate_store_error

logger = logging.getLogger("MoodJournal.Database.Profiles")


class ProfilesRepository:
    """Repository for profile rows, keyed by user id."""

    def __init__(self, client, table: Optional[str] = None):
        self.client = client
        self.table = table or settings.PROFILES_TABLE

    def get(self, user_id: str) -> Optional[Dict]:
        """Get a profile row, or None when the user has none yet."""
        try:
            result = self.client.table(self.table).select("*").eq(
                "id", user_id
            ).limit(1).execute()
        except Exception as e:
            logger.error(f"Error fetching profile for {mask_identity(user_id)}: {e}")
            raise translate_store_error(e, "load the profile") from e

        return result.data[0] if result.data else None
