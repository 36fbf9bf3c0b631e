"""
Shared vocabularies for check-ins: the mood scale, the activity tags and the
daily writing prompts, plus the fallback reflections used when insight
generation degrades.
"""

from typing import Dict, NamedTuple, Optional, Tuple


class MoodOption(NamedTuple):
    value: int
    label: str
    emoji: str
    color: str


class ActivityOption(NamedTuple):
    id: str
    label: str
    icon: str


MOODS: Tuple[MoodOption, ...] = (
    MoodOption(1, "Terrible", "😢", "#e57373"),
    MoodOption(2, "Bad", "😔", "#ffb74d"),
    MoodOption(3, "Okay", "😐", "#dce775"),
    MoodOption(4, "Good", "🙂", "#81c784"),
    MoodOption(5, "Amazing", "😄", "#64b5f6"),
)

MIN_MOOD = 1
MAX_MOOD = 5

# Moods at or above this value count as a good day
GOOD_DAY_THRESHOLD = 4

ACTIVITIES: Tuple[ActivityOption, ...] = (
    ActivityOption("sleep", "Good Sleep", "🌙"),
    ActivityOption("exercise", "Exercise", "🚶"),
    ActivityOption("social", "Socialized", "💬"),
    ActivityOption("work", "Productive", "✏️"),
    ActivityOption("relax", "Relaxed", "🍵"),
    ActivityOption("creative", "Creative", "🎨"),
)

DAILY_PROMPTS: Tuple[str, ...] = (
    "What's one thing you're grateful for today?",
    "What made you smile today?",
    "How are you really feeling right now?",
    "What challenge did you overcome today?",
    "What would make tomorrow better?",
    "What's something you learned about yourself today?",
    "Who or what supported you today?",
    "What emotion are you sitting with right now?",
)

MOOD_NOT_SPECIFIED = "Not specified"
NO_ACTIVITIES = "None"

# Backend answered but had nothing to say
INSIGHT_EMPTY_FALLBACK = "Thank you for sharing. Remember, it's okay to have ups and downs."
# Backend unreachable, failed, or returned garbage
INSIGHT_ERROR_FALLBACK = (
    "I'm having trouble connecting right now, but what you're feeling is valid. "
    "Keep journaling."
)

_MOODS_BY_VALUE: Dict[int, MoodOption] = {m.value: m for m in MOODS}
_ACTIVITIES_BY_ID: Dict[str, ActivityOption] = {a.id: a for a in ACTIVITIES}


def mood_option(value: Optional[int]) -> Optional[MoodOption]:
    """Look up a mood by its numeric value."""
    if value is None:
        return None
    return _MOODS_BY_VALUE.get(value)


def mood_label(value: Optional[int]) -> str:
    option = mood_option(value)
    return option.label if option else MOOD_NOT_SPECIFIED


def activity_option(activity_id: str) -> Optional[ActivityOption]:
    return _ACTIVITIES_BY_ID.get(activity_id)


def activity_label(activity_id: str) -> str:
    """Label for an activity id; unknown ids are shown as-is."""
    option = _ACTIVITIES_BY_ID.get(activity_id)
    return option.label if option else activity_id


def is_known_activity(activity_id: str) -> bool:
    return activity_id in _ACTIVITIES_BY_ID
