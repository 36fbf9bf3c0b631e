"""
Entries Repository - journal entry data access.

Every query and mutation is scoped by owner (user_id); the store assigns
id and created_at on insert.
"""

import logging
from typing import Dict, List, Optional

from moodjournal.core.config import settings
from moodjournal.core.logging_utils import mask_identity, sanitize_for_logging
from moodjournal.features.database.repositories.base import translate_store_error

logger = logging.getLogger("MoodJournal.Database.Entries")


class EntriesRepository:
    """Repository for journal entry operations."""

    def __init__(self, client, table: Optional[str] = None):
        """Initialize with Supabase client."""
        self.client = client
        self.table = table or settings.ENTRIES_TABLE

    def insert(
        self,
        owner_id: str,
        mood: int,
        activities: List[str],
        journal_text: str,
        prompt: str,
        insight_text: Optional[str] = None,
    ) -> Dict:
        """
        Insert one entry.

        Returns:
            The stored row, including the assigned id and created_at
        """
        payload = {
            "user_id": owner_id,
            "mood": mood,
            "activities": list(activities),
            "journal_text": journal_text,
            "prompt": prompt,
            "ai_insights": insight_text or None,
        }
        try:
            result = self.client.table(self.table).insert(payload).execute()
        except Exception as e:
            logger.error(f"Error inserting entry {sanitize_for_logging(payload)}: {e}")
            raise translate_store_error(e, "save the entry") from e

        if not result.data:
            raise translate_store_error(RuntimeError("insert returned no row"), "save the entry")

        row = result.data[0]
        logger.info(f"Entry created: {row.get('id')}")
        return row

    def list_for_owner(self, owner_id: str) -> List[Dict]:
        """All entries owned by owner_id, newest first."""
        try:
            result = self.client.table(self.table).select("*").eq(
                "user_id", owner_id
            ).order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Error fetching entries for {mask_identity(owner_id)}: {e}")
            raise translate_store_error(e, "load entries") from e

        return result.data or []

    def delete(self, entry_id: str, owner_id: str) -> int:
        """
        Delete one entry, matched by id AND owner.

        Returns:
            Number of rows removed (0 if nothing matched)
        """
        try:
            result = self.client.table(self.table).delete().eq(
                "id", entry_id
            ).eq("user_id", owner_id).execute()
        except Exception as e:
            logger.error(f"Error deleting entry {entry_id}: {e}")
            raise translate_store_error(e, "delete the entry") from e

        deleted = len(result.data or [])
        logger.info(f"Deleted entry {entry_id} ({deleted} row(s))")
        return deleted
