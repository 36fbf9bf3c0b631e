"""Database Repositories - Organized data access."""

from moodjournal.features.database.repositories.entries import EntriesRepository
from moodjournal.features.database.repositories.profiles import ProfilesRepository

__all__ = [
    "EntriesRepository",
    "ProfilesRepository",
]
