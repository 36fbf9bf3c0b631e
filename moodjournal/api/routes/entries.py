"""
Entries API Routes

Read and delete the signed-in user's journal entries. Entries are created
through the check-in routes.
"""

import logging

from fastapi import APIRouter, Depends

from moodjournal.api.dependencies import get_workspace
from moodjournal.api.models import DeleteResponse, EntriesResponse, EntryOut
from moodjournal.features.session.workspace import JournalWorkspace

router = APIRouter(tags=["Entries"])
logger = logging.getLogger("MoodJournal.API.Entries")


def _entries_response(workspace: JournalWorkspace) -> EntriesResponse:
    entries = workspace.store.entries
    return EntriesResponse(
        entries=[EntryOut.from_entry(e) for e in entries],
        count=len(entries),
        loading=workspace.store.is_loading,
    )


@router.get("/entries", response_model=EntriesResponse)
async def list_entries(workspace: JournalWorkspace = Depends(get_workspace)) -> EntriesResponse:
    """Entries newest first."""
    await workspace.ensure_loaded()
    return _entries_response(workspace)


@router.post("/entries/reload", response_model=EntriesResponse)
async def reload_entries(workspace: JournalWorkspace = Depends(get_workspace)) -> EntriesResponse:
    """Re-read the entries from the store."""
    await workspace.session.reload()
    return _entries_response(workspace)


@router.delete("/entries/{entry_id}", response_model=DeleteResponse)
async def delete_entry(entry_id: str, workspace: JournalWorkspace = Depends(get_workspace)) -> DeleteResponse:
    await workspace.ensure_loaded()
    identity = workspace.session.require_identity()
    removed = await workspace.store.delete(identity.user_id, entry_id)
    if removed is None:
        logger.info(f"Entry {entry_id} was deleted by a concurrent request")
        return DeleteResponse(status="already_deleted", entry_id=entry_id)
    return DeleteResponse(status="deleted", entry_id=entry_id)
