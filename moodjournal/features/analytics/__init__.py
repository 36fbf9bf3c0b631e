"""Trend analytics derived from the entry list on demand."""

from moodjournal.features.analytics.engine import (
    ActivityCorrelation,
    AnalyticsSummary,
    TrendPoint,
    activity_mood_correlation,
    average_mood,
    good_day_count,
    mood_trend_series,
    summarize,
)

__all__ = [
    "ActivityCorrelation",
    "AnalyticsSummary",
    "TrendPoint",
    "activity_mood_correlation",
    "average_mood",
    "good_day_count",
    "mood_trend_series",
    "summarize",
]
