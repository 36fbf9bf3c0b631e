"""AI reflections for check-ins, with graceful fallback."""

from moodjournal.features.insights.orchestrator import InsightOrchestrator
from moodjournal.features.insights.payload import InsightRequest, build_insight_request

__all__ = [
    "InsightOrchestrator",
    "InsightRequest",
    "build_insight_request",
]
