"""Request/response shapes for the insight backend."""

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from moodjournal.core.config import settings
from moodjournal.features.entries.models import DraftCheckIn, Entry
from moodjournal.shared.constants import NO_ACTIVITIES, activity_label, mood_label


class RecentEntrySummary(BaseModel):
    mood: str
    activities: str
    text: str


class InsightRequest(BaseModel):
    """Body of POST /api/ai-insights (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    mood: str
    activities: str
    journal_text: str = Field(alias="journalText")
    recent_entries: List[RecentEntrySummary] = Field(default_factory=list, alias="recentEntries")


class InsightResponse(BaseModel):
    insight: Optional[str] = None


def join_activity_labels(activity_ids: Sequence[str]) -> str:
    return ", ".join(activity_label(a) for a in activity_ids)


def summarize_entry(entry: Entry, excerpt_length: Optional[int] = None) -> RecentEntrySummary:
    if excerpt_length is None:
        excerpt_length = settings.RECENT_TEXT_EXCERPT
    return RecentEntrySummary(
        mood=mood_label(entry.mood),
        activities=join_activity_labels(entry.activities),
        text=entry.journal_text[:excerpt_length],
    )


def build_insight_request(
    draft: DraftCheckIn,
    recent_entries: Sequence[Entry] = (),
    max_recent: Optional[int] = None,
) -> InsightRequest:
    """
    Build the request body for a draft.

    Only the first `max_recent` of `recent_entries` (newest first) are sent,
    each cut down to mood label, activity labels and a text excerpt.
    """
    if max_recent is None:
        max_recent = settings.RECENT_CONTEXT_ENTRIES
    return InsightRequest(
        mood=mood_label(draft.mood),
        activities=join_activity_labels(draft.activities) or NO_ACTIVITIES,
        journal_text=draft.journal_text,
        recent_entries=[summarize_entry(e) for e in list(recent_entries)[:max_recent]],
    )
