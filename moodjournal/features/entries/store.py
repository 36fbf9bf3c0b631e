"""
EntryStore - the in-memory view of one user's journal.

The cache only ever holds confirmed rows: create prepends after the store
returns the row, delete removes after the store confirms. Remote failures are
logged and re-raised unchanged; nothing is retried here.

Callers must not overlap load() calls for the same identity. Overlapping
loads are not deduplicated and whichever resolves last replaces the cache.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from moodjournal.core.logging_utils import mask_identity
from moodjournal.core.tracing import get_tracer
from moodjournal.features.database.repositories.entries import EntriesRepository
from moodjournal.features.entries.models import DraftCheckIn, Entry, validate_mood
from moodjournal.shared.errors import AuthRequired, Forbidden, NotFound, ValidationError

logger = logging.getLogger("MoodJournal.EntryStore")
tracer = get_tracer(__name__)


class EntryStore:
    """Owns the cached entry list for the current identity."""

    def __init__(self, repository: EntriesRepository):
        self._repository = repository
        self._entries: List[Entry] = []
        self._identity: Optional[str] = None
        self._pending_loads = 0
        # Bumped by clear(); a load that straddles a clear() is discarded
        self._generation = 0
        self._loaded = False

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """Snapshot of the cache, newest first."""
        return tuple(self._entries)

    @property
    def identity(self) -> Optional[str]:
        return self._identity

    @property
    def is_loading(self) -> bool:
        return self._pending_loads > 0

    @property
    def is_loaded(self) -> bool:
        """Whether a load has completed since the last clear()."""
        return self._loaded

    def get(self, entry_id: str) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    async def load(self, identity: Optional[str]) -> Tuple[Entry, ...]:
        """Replace the cache with every entry owned by identity."""
        if not identity:
            raise AuthRequired("Sign in to load your journal")

        generation = self._generation
        self._pending_loads += 1
        try:
            with tracer.start_as_current_span("entries.load") as span:
                rows = await asyncio.to_thread(self._repository.list_for_owner, identity)
                entries = [Entry.from_row(row) for row in rows]
                span.set_attribute("entries.count", len(entries))
        finally:
            self._pending_loads -= 1

        if generation != self._generation:
            logger.info(f"Discarding load for {mask_identity(identity)}: session changed while loading")
            return self.entries

        foreign = [e.id for e in entries if e.owner_id != identity]
        if foreign:
            logger.error(f"Dropping {len(foreign)} entries not owned by {mask_identity(identity)}")
            entries = [e for e in entries if e.owner_id == identity]

        self._identity = identity
        self._entries = entries
        self._loaded = True
        logger.info(f"Loaded {len(entries)} entries for {mask_identity(identity)}")
        return self.entries

    async def create(self, identity: Optional[str], draft: DraftCheckIn) -> Entry:
        """
        Persist a draft and prepend the stored entry to the cache.

        The draft itself is left untouched; resetting it is the save flow's job.
        If the session was cleared or switched while the insert was in
        flight, the stored entry is returned but not added to the cache.
        """
        if not identity:
            raise AuthRequired("Sign in to save entries")
        if self._identity is not None and identity != self._identity:
            raise Forbidden("Cannot save entries for another user")
        if draft.mood is None:
            raise ValidationError("Please select a mood first!", details={"field": "mood"})
        validate_mood(draft.mood)

        generation = self._generation
        with tracer.start_as_current_span("entries.create") as span:
            span.set_attribute("entry.mood", draft.mood)
            span.set_attribute("entry.activities", len(draft.activities))
            span.set_attribute("entry.has_insight", draft.insight_text is not None)
            row = await asyncio.to_thread(
                self._repository.insert,
                identity,
                draft.mood,
                list(draft.activities),
                draft.journal_text,
                draft.prompt,
                draft.insight_text,
            )

        entry = Entry.from_row(row)
        if entry.owner_id != identity:
            # The write went through; only the cache is kept out of it
            logger.error(
                f"Store inconsistency: entry {entry.id} saved for {mask_identity(identity)} "
                f"came back owned by {mask_identity(entry.owner_id)}; not caching it"
            )
            return entry

        if generation != self._generation or self._identity not in (None, identity):
            logger.info(f"Entry {entry.id} saved after the session changed; not caching it")
            return entry

        self._identity = identity
        self._entries.insert(0, entry)
        logger.info(f"Entry {entry.id} saved ({len(self._entries)} total)")
        return entry

    async def delete(self, identity: Optional[str], entry_id: str) -> Optional[Entry]:
        """
        Delete an entry owned by identity.

        Returns:
            The removed entry, or None when a concurrent delete already
            removed it from the cache.
        """
        if not identity:
            raise AuthRequired("Sign in to delete entries")

        entry = self.get(entry_id)
        if entry is None:
            raise NotFound(f"Entry {entry_id} not found", details={"entry_id": entry_id})
        if entry.owner_id != identity:
            raise Forbidden("You can only delete your own entries")

        with tracer.start_as_current_span("entries.delete") as span:
            deleted = await asyncio.to_thread(self._repository.delete, entry_id, identity)
            span.set_attribute("entries.deleted_rows", deleted)

        if deleted == 0:
            # Already gone remotely; the cache catches up below.
            logger.info(f"Entry {entry_id} was already deleted in the store")

        current = self.get(entry_id)
        if current is None:
            logger.debug(f"Entry {entry_id} already removed from cache")
            return None

        self._entries = [e for e in self._entries if e.id != entry_id]
        logger.info(f"Entry {entry_id} deleted ({len(self._entries)} remaining)")
        return current

    def clear(self) -> None:
        """Forget everything; called when the session ends."""
        self._entries = []
        self._identity = None
        self._generation += 1
        self._loaded = False
        logger.info("Entry cache cleared")
