"""
Per-identity workspaces for the HTTP adapter.

A workspace is everything one signed-in user works with: their
SessionContext (and through it the EntryStore), an InsightOrchestrator, the
CheckInService and the current draft. The registry keeps the most recently
used ones and evicts the oldest past its size limit.
"""

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Optional

from moodjournal.core.config import settings
from moodjournal.core.logging_utils import mask_identity
from moodjournal.features.checkin.service import CheckInService
from moodjournal.features.database.client import DatabaseClient
from moodjournal.features.entries.models import DraftCheckIn
from moodjournal.features.entries.store import EntryStore
from moodjournal.features.insights.orchestrator import InsightOrchestrator
from moodjournal.features.session.context import SessionContext
from moodjournal.features.session.models import Identity

logger = logging.getLogger("MoodJournal.Session.Workspaces")


@dataclass
class JournalWorkspace:
    session: SessionContext
    checkin: CheckInService
    draft: DraftCheckIn = field(default_factory=DraftCheckIn)

    @property
    def store(self) -> EntryStore:
        return self.session.store

    @property
    def orchestrator(self) -> InsightOrchestrator:
        return self.checkin.orchestrator

    async def ensure_loaded(self) -> None:
        """Load entries if the initial load has not succeeded yet."""
        if not self.store.is_loaded:
            await self.session.reload()

    @classmethod
    def build(cls, db: DatabaseClient, orchestrator: Optional[InsightOrchestrator] = None) -> "JournalWorkspace":
        store = EntryStore(db.entries)
        session = SessionContext(store, db.profiles)
        return cls(
            session=session,
            checkin=CheckInService(store, orchestrator or InsightOrchestrator()),
        )


WorkspaceFactory = Callable[[], JournalWorkspace]


class WorkspaceRegistry:
    """Bounded, most-recently-used map of user id to workspace."""

    def __init__(self, factory: WorkspaceFactory, max_workspaces: Optional[int] = None):
        self._factory = factory
        self._max = max_workspaces or settings.MAX_WORKSPACES
        self._workspaces: "OrderedDict[str, JournalWorkspace]" = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._workspaces)

    async def get(self, identity: Identity) -> JournalWorkspace:
        """Workspace for identity, created and signed in on first use."""
        async with self._lock:
            workspace = self._workspaces.get(identity.user_id)
            if workspace is not None:
                self._workspaces.move_to_end(identity.user_id)
                return workspace

            workspace = self._factory()
            self._workspaces[identity.user_id] = workspace
            self._evict()

        logger.info(f"Workspace opened for {mask_identity(identity.user_id)}")
        await workspace.session.set_identity(identity)
        return workspace

    async def discard(self, user_id: str) -> None:
        async with self._lock:
            workspace = self._workspaces.pop(user_id, None)
        if workspace is not None:
            await workspace.session.set_identity(None)

    def _evict(self) -> None:
        """
        Drop least recently used workspaces past the limit.

        Workspaces with a save or insight request running are skipped, so
        the registry may briefly hold more than the limit.
        """
        # The newest workspace is the one just opened; never a candidate
        for user_id in list(self._workspaces)[:-1]:
            if len(self._workspaces) <= self._max:
                break
            workspace = self._workspaces[user_id]
            if workspace.checkin.is_busy:
                logger.debug(f"Skipping eviction of busy workspace {mask_identity(user_id)}")
                continue
            del self._workspaces[user_id]
            workspace.session.end()
            logger.info(f"Workspace evicted for {mask_identity(user_id)}")
