"""Analytics API Routes - trend metrics over the signed-in user's entries."""

from fastapi import APIRouter, Depends, Query

from moodjournal.api.dependencies import get_workspace
from moodjournal.core.config import settings
from moodjournal.features.analytics.engine import AnalyticsSummary, summarize
from moodjournal.features.session.workspace import JournalWorkspace

router = APIRouter(tags=["Analytics"])


@router.get("/analytics", response_model=AnalyticsSummary)
async def get_analytics(
    window: int = Query(default=settings.TREND_WINDOW_SIZE, ge=1, le=365),
    workspace: JournalWorkspace = Depends(get_workspace),
) -> AnalyticsSummary:
    """Average mood, good days, trend series and activity correlation."""
    await workspace.ensure_loaded()
    return summarize(workspace.store.entries, window_size=window)
