"""Journal entries: models and the cached EntryStore."""

from moodjournal.features.entries.models import DraftCheckIn, Entry
from moodjournal.features.entries.store import EntryStore

__all__ = [
    "DraftCheckIn",
    "Entry",
    "EntryStore",
]
