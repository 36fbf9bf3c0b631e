"""
Check-in flow: explicit "Get Insights" and the save operation.

Saving a draft that has journal text but no insight first asks the
orchestrator for one (with no recent-entry context) and stores whatever comes
back, real or fallback. An insight obtained earlier for the same draft is
reused as-is.
"""

import logging
from typing import Optional

from moodjournal.features.entries.models import DraftCheckIn, Entry
from moodjournal.features.entries.store import EntryStore
from moodjournal.features.insights.orchestrator import InsightOrchestrator
from moodjournal.shared.errors import AuthRequired, ValidationError

logger = logging.getLogger("MoodJournal.CheckIn")


def needs_insight(draft: DraftCheckIn) -> bool:
    """True when saving this draft must first obtain an insight."""
    return draft.has_text and not draft.has_insight


class CheckInService:
    """Coordinates the orchestrator and the store for one user's drafts."""

    def __init__(self, store: EntryStore, orchestrator: InsightOrchestrator):
        self.store = store
        self.orchestrator = orchestrator
        self._saving = False

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def is_busy(self) -> bool:
        """Whether the check-in controls should be disabled."""
        return self._saving or self.orchestrator.in_flight

    async def get_insights(self, draft: DraftCheckIn) -> str:
        """Explicit request, with the three most recent entries as context."""
        text = await self.orchestrator.request_insight(draft, self.store.entries, trigger="explicit")
        draft.insight_text = text
        return text

    async def save(self, identity: Optional[str], draft: DraftCheckIn) -> Entry:
        """
        Persist the draft and reset it.

        On a store failure the draft keeps its content (and any insight
        already fetched) so the caller can retry without a second insight call.
        """
        if not identity:
            raise AuthRequired("Sign in to save entries")
        if draft.mood is None:
            raise ValidationError("Please select a mood first!", details={"field": "mood"})

        self._saving = True
        try:
            if needs_insight(draft):
                logger.info("Draft has text but no insight; requesting one before saving")
                draft.insight_text = await self.orchestrator.request_insight(draft, (), trigger="save")

            entry = await self.store.create(identity, draft)
        finally:
            self._saving = False

        draft.reset()
        return entry
