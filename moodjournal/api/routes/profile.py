"""Profile API Routes - who is signed in and how to greet them."""

from fastapi import APIRouter, Depends

from moodjournal.api.dependencies import get_workspace
from moodjournal.api.models import ProfileResponse
from moodjournal.features.analytics.formatting import greeting
from moodjournal.features.session.workspace import JournalWorkspace

router = APIRouter(tags=["Profile"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(workspace: JournalWorkspace = Depends(get_workspace)) -> ProfileResponse:
    identity = workspace.session.require_identity()
    return ProfileResponse(
        user_id=identity.user_id,
        display_name=workspace.session.display_name,
        greeting=greeting(),
    )
