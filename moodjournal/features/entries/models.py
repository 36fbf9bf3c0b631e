"""
Entry and draft models.

Entry is the persisted, immutable journaling record. DraftCheckIn is the
mutable check-in being composed; it never reaches the store directly, only
through EntryStore.create.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from moodjournal.shared.constants import (
    DAILY_PROMPTS,
    MAX_MOOD,
    MIN_MOOD,
    is_known_activity,
)
from moodjournal.shared.errors import ValidationError


class Entry(BaseModel):
    """One persisted check-in. id and created_at come from the store."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    created_at: datetime
    mood: int = Field(ge=MIN_MOOD, le=MAX_MOOD)
    activities: List[str] = Field(default_factory=list)
    journal_text: str = ""
    prompt: str = ""
    insight_text: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Entry":
        """Build an Entry from a journal_entries row."""
        try:
            return cls(
                id=str(row["id"]),
                owner_id=str(row["user_id"]),
                created_at=row["created_at"],
                mood=row["mood"],
                activities=list(row.get("activities") or []),
                journal_text=row.get("journal_text") or "",
                prompt=row.get("prompt") or "",
                insight_text=row.get("ai_insights") or None,
            )
        except KeyError as e:
            raise ValidationError(f"Entry row is missing column {e}") from e
        except PydanticValidationError as e:
            raise ValidationError(
                "Entry row failed validation",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


def validate_mood(mood: Any) -> int:
    """Return mood if it is an integer in [1, 5], else raise ValidationError."""
    if isinstance(mood, bool) or not isinstance(mood, int) or not MIN_MOOD <= mood <= MAX_MOOD:
        raise ValidationError(
            f"Mood must be an integer between {MIN_MOOD} and {MAX_MOOD}",
            details={"field": "mood", "value": mood},
        )
    return mood


def pick_prompt(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(DAILY_PROMPTS)


@dataclass
class DraftCheckIn:
    """
    The check-in being composed.

    The prompt is chosen once for the composition session and survives
    reset(); everything else goes back to empty after a successful save.
    """

    prompt: str = field(default_factory=pick_prompt)
    mood: Optional[int] = None
    activities: List[str] = field(default_factory=list)
    journal_text: str = ""
    insight_text: Optional[str] = None

    def set_mood(self, mood: int) -> None:
        self.mood = validate_mood(mood)

    def toggle_activity(self, activity_id: str) -> bool:
        """
        Select or deselect an activity tag.

        Returns:
            True if the tag is selected after the call.
        """
        if not is_known_activity(activity_id):
            raise ValidationError(
                f"Unknown activity: {activity_id}",
                details={"field": "activities", "value": activity_id},
            )
        if activity_id in self.activities:
            self.activities.remove(activity_id)
            return False
        self.activities.append(activity_id)
        return True

    def set_text(self, text: str) -> None:
        self.journal_text = text or ""

    @property
    def has_text(self) -> bool:
        return bool(self.journal_text.strip())

    @property
    def has_insight(self) -> bool:
        return bool(self.insight_text)

    def reset(self) -> None:
        self.mood = None
        self.activities = []
        self.journal_text = ""
        self.insight_text = None
