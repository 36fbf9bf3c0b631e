"""
Features Module - Self-contained feature units.

- database: Supabase repositories
- entries: Entry/draft models and the cached EntryStore
- analytics: Trend analytics over the entry list
- insights: AI reflections with fallback
- checkin: The save flow
- session: Identity lifecycle and per-user workspaces
"""

from moodjournal.features.database import DatabaseClient, get_database_client

__all__ = [
    "DatabaseClient",
    "get_database_client",
]
