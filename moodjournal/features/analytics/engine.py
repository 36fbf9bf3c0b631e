"""
Analytics over an entry snapshot.

Every function takes the entries as EntryStore exposes them (newest first)
and returns a fresh value; inputs are never mutated, so results can be
recomputed on every render.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from pydantic import BaseModel

from moodjournal.core.config import settings
from moodjournal.features.analytics.formatting import chart_date
from moodjournal.features.entries.models import Entry
from moodjournal.shared.constants import ACTIVITIES, GOOD_DAY_THRESHOLD, ActivityOption


class TrendPoint(BaseModel):
    date: str
    mood: int


class ActivityCorrelation(BaseModel):
    activity_id: str
    label: str
    icon: str
    avg_mood: float
    count: int


class AnalyticsSummary(BaseModel):
    total_entries: int
    average_mood: float
    good_days: int
    trend: List[TrendPoint]
    correlations: List[ActivityCorrelation]


def round_one(value: float) -> float:
    """Round half-up to one decimal (3.25 -> 3.3, not banker's 3.2)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def average_mood(entries: Sequence[Entry]) -> float:
    """Mean mood to one decimal; 0 for no entries."""
    if not entries:
        return 0.0
    return round_one(sum(e.mood for e in entries) / len(entries))


def good_day_count(entries: Sequence[Entry]) -> int:
    return sum(1 for e in entries if e.mood >= GOOD_DAY_THRESHOLD)


def mood_trend_series(entries: Sequence[Entry], window_size: Optional[int] = None) -> List[TrendPoint]:
    """
    The `window_size` most recent entries, oldest first, as chart points.

    Entries are expected newest first; the window is a prefix of that order.
    """
    if window_size is None:
        window_size = settings.TREND_WINDOW_SIZE
    window = list(entries[:max(window_size, 0)])
    window.reverse()
    return [TrendPoint(date=chart_date(e.created_at), mood=e.mood) for e in window]


def activity_mood_correlation(
    entries: Sequence[Entry],
    activity_vocabulary: Sequence[ActivityOption] = ACTIVITIES,
) -> List[ActivityCorrelation]:
    """
    Average mood per activity tag, best first.

    Tags no entry carries are left out. Equal averages keep vocabulary order
    (the sort is stable; there is no secondary key).
    """
    rows = []
    for activity in activity_vocabulary:
        moods = [e.mood for e in entries if activity.id in e.activities]
        if not moods:
            continue
        rows.append(ActivityCorrelation(
            activity_id=activity.id,
            label=activity.label,
            icon=activity.icon,
            avg_mood=round_one(sum(moods) / len(moods)),
            count=len(moods),
        ))
    return sorted(rows, key=lambda row: row.avg_mood, reverse=True)


def summarize(entries: Sequence[Entry], window_size: Optional[int] = None) -> AnalyticsSummary:
    return AnalyticsSummary(
        total_entries=len(entries),
        average_mood=average_mood(entries),
        good_days=good_day_count(entries),
        trend=mood_trend_series(entries, window_size),
        correlations=activity_mood_correlation(entries),
    )
