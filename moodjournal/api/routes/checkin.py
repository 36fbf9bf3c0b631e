"""
Check-in API Routes

Compose a draft (mood, activities, text), ask for an insight, and save.
While an insight request or a save is running the draft is busy and further
check-in calls get 409 CONFLICT; the core itself does not lock.
"""

import logging

from fastapi import APIRouter, Depends

from moodjournal.api.dependencies import get_workspace
from moodjournal.api.models import (
    ActivityOut,
    DraftOut,
    DraftUpdateRequest,
    EntryOut,
    InsightResponse,
    MoodOut,
    OptionsResponse,
    SaveResponse,
)
from moodjournal.features.session.workspace import JournalWorkspace
from moodjournal.shared.constants import ACTIVITIES, DAILY_PROMPTS, MOODS, is_known_activity
from moodjournal.shared.errors import Conflict, ValidationError

router = APIRouter(prefix="/checkin", tags=["Check-in"])
logger = logging.getLogger("MoodJournal.API.CheckIn")


def _draft_out(workspace: JournalWorkspace) -> DraftOut:
    return DraftOut.from_draft(
        workspace.draft,
        saving=workspace.checkin.is_saving,
        loading_insight=workspace.orchestrator.in_flight,
    )


def _ensure_idle(workspace: JournalWorkspace) -> None:
    if workspace.checkin.is_busy:
        raise Conflict("Hang on, your last request is still in progress")


@router.get("/options", response_model=OptionsResponse)
async def get_options() -> OptionsResponse:
    """Mood scale, activity vocabulary and prompts for building the form."""
    return OptionsResponse(
        moods=[MoodOut(**m._asdict()) for m in MOODS],
        activities=[ActivityOut(**a._asdict()) for a in ACTIVITIES],
        prompts=list(DAILY_PROMPTS),
    )


@router.get("/draft", response_model=DraftOut)
async def get_draft(workspace: JournalWorkspace = Depends(get_workspace)) -> DraftOut:
    return _draft_out(workspace)


@router.put("/draft", response_model=DraftOut)
async def update_draft(
    request: DraftUpdateRequest,
    workspace: JournalWorkspace = Depends(get_workspace),
) -> DraftOut:
    _ensure_idle(workspace)
    draft = workspace.draft

    # Validate everything before touching the draft
    unknown = [a for a in request.activities or [] if not is_known_activity(a)]
    if unknown:
        raise ValidationError(f"Unknown activities: {', '.join(unknown)}", details={"field": "activities"})

    if request.mood is not None:
        draft.set_mood(request.mood)
    if request.activities is not None:
        draft.activities = list(dict.fromkeys(request.activities))
    if request.journal_text is not None:
        draft.set_text(request.journal_text)
    return _draft_out(workspace)


@router.delete("/draft", response_model=DraftOut)
async def discard_draft(workspace: JournalWorkspace = Depends(get_workspace)) -> DraftOut:
    _ensure_idle(workspace)
    workspace.draft.reset()
    return _draft_out(workspace)


@router.post("/activities/{activity_id}/toggle", response_model=DraftOut)
async def toggle_activity(activity_id: str, workspace: JournalWorkspace = Depends(get_workspace)) -> DraftOut:
    _ensure_idle(workspace)
    workspace.draft.toggle_activity(activity_id)
    return _draft_out(workspace)


@router.post("/insight", response_model=InsightResponse)
async def get_insight(workspace: JournalWorkspace = Depends(get_workspace)) -> InsightResponse:
    """Explicit "Get Insights": uses the three most recent entries as context."""
    await workspace.ensure_loaded()
    _ensure_idle(workspace)
    text = await workspace.checkin.get_insights(workspace.draft)
    return InsightResponse(insight=text)


@router.post("/save", response_model=SaveResponse)
async def save_checkin(workspace: JournalWorkspace = Depends(get_workspace)) -> SaveResponse:
    await workspace.ensure_loaded()
    _ensure_idle(workspace)
    identity = workspace.session.require_identity()
    entry = await workspace.checkin.save(identity.user_id, workspace.draft)
    logger.info(f"Check-in saved as entry {entry.id}")
    return SaveResponse(status="saved", entry=EntryOut.from_entry(entry))
