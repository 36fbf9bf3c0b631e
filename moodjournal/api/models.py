from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from moodjournal.features.analytics.formatting import entry_time, long_date
from moodjournal.features.entries.models import DraftCheckIn, Entry
from moodjournal.shared.constants import activity_option, mood_option

# =========================================================================
# VOCABULARY MODELS
# =========================================================================

class MoodOut(BaseModel):
    value: int
    label: str
    emoji: str
    color: str

class ActivityOut(BaseModel):
    id: str
    label: str
    icon: str

    @classmethod
    def for_id(cls, activity_id: str) -> "ActivityOut":
        option = activity_option(activity_id)
        if option is None:
            return cls(id=activity_id, label=activity_id, icon="")
        return cls(id=option.id, label=option.label, icon=option.icon)

class OptionsResponse(BaseModel):
    moods: List[MoodOut]
    activities: List[ActivityOut]
    prompts: List[str]

# =========================================================================
# ENTRY MODELS
# =========================================================================

class EntryOut(BaseModel):
    id: str
    created_at: datetime
    display_date: str
    display_time: str
    mood: int
    mood_label: str
    mood_emoji: str
    activities: List[ActivityOut]
    journal_text: str
    prompt: str
    insight_text: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryOut":
        mood = mood_option(entry.mood)
        return cls(
            id=entry.id,
            created_at=entry.created_at,
            display_date=long_date(entry.created_at),
            display_time=entry_time(entry.created_at),
            mood=entry.mood,
            mood_label=mood.label if mood else "",
            mood_emoji=mood.emoji if mood else "",
            activities=[ActivityOut.for_id(a) for a in entry.activities],
            journal_text=entry.journal_text,
            prompt=entry.prompt,
            insight_text=entry.insight_text,
        )

class EntriesResponse(BaseModel):
    entries: List[EntryOut]
    count: int
    loading: bool = False

class DeleteResponse(BaseModel):
    status: str  # 'deleted' or 'already_deleted'
    entry_id: str

# =========================================================================
# CHECK-IN MODELS
# =========================================================================

class DraftUpdateRequest(BaseModel):
    """Fields left out are not changed."""
    mood: Optional[int] = None
    activities: Optional[List[str]] = None
    journal_text: Optional[str] = None

class DraftOut(BaseModel):
    prompt: str
    mood: Optional[int] = None
    activities: List[str] = Field(default_factory=list)
    journal_text: str = ""
    insight_text: Optional[str] = None
    saving: bool = False
    loading_insight: bool = False

    @classmethod
    def from_draft(cls, draft: DraftCheckIn, saving: bool = False, loading_insight: bool = False) -> "DraftOut":
        return cls(
            prompt=draft.prompt,
            mood=draft.mood,
            activities=list(draft.activities),
            journal_text=draft.journal_text,
            insight_text=draft.insight_text,
            saving=saving,
            loading_insight=loading_insight,
        )

class InsightResponse(BaseModel):
    insight: str

class SaveResponse(BaseModel):
    status: str
    entry: EntryOut

# =========================================================================
# PROFILE MODELS
# =========================================================================

class ProfileResponse(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    greeting: str
