"""
Database Feature Module - Supabase data access.

Usage:
    from moodjournal.features.database import get_database_client

    db = get_database_client()
    rows = db.entries.list_for_owner(user_id)
"""

from moodjournal.features.database.client import DatabaseClient, get_database_client

__all__ = [
    "DatabaseClient",
    "get_database_client",
]
