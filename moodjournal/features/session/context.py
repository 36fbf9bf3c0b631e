"""
SessionContext - ties the identity lifecycle to the EntryStore.

Signing in loads the profile and the entries side by side; signing out
clears the cache. Profile lookups degrade to a derived display name, while
entry-load failures reach the caller.
"""

import asyncio
import logging
from typing import Callable, Optional, Set

from moodjournal.core.logging_utils import mask_identity
from moodjournal.features.database.repositories.profiles import ProfilesRepository
from moodjournal.features.entries.store import EntryStore
from moodjournal.features.session.models import Identity, Profile, resolve_display_name
from moodjournal.features.session.provider import SessionProvider
from moodjournal.shared.errors import AuthRequired, JournalError

logger = logging.getLogger("MoodJournal.Session")


class SessionContext:
    """Current identity, its profile, and the store it drives."""

    def __init__(
        self,
        store: EntryStore,
        profiles: ProfilesRepository,
        provider: Optional[SessionProvider] = None,
    ):
        self.store = store
        self._profiles = profiles
        self._provider = provider
        self._identity: Optional[Identity] = None
        self._profile: Optional[Profile] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def user_id(self) -> Optional[str]:
        return self._identity.user_id if self._identity else None

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def display_name(self) -> Optional[str]:
        if self._identity is None:
            return None
        return resolve_display_name(self._identity, self._profile)

    def require_identity(self) -> Identity:
        if self._identity is None:
            raise AuthRequired()
        return self._identity

    async def set_identity(self, identity: Optional[Identity]) -> None:
        """
        Apply an identity transition.

        A transition to the identity already active is ignored (token
        refreshes re-announce the same user).
        """
        previous = self._identity
        if identity == previous and identity is not None:
            return

        if identity is None:
            self.end()
            return

        if previous is not None and previous.user_id != identity.user_id:
            self.store.clear()

        self._identity = identity
        self._profile = None
        logger.info(f"Session established for {mask_identity(identity.user_id)}")

        await asyncio.gather(
            self._load_profile(identity),
            self.store.load(identity.user_id),
        )

    def end(self) -> None:
        """Drop the identity and clear the journal."""
        self._identity = None
        self._profile = None
        self.store.clear()
        logger.info("Signed out; journal cleared")

    async def _load_profile(self, identity: Identity) -> None:
        try:
            row = await asyncio.to_thread(self._profiles.get, identity.user_id)
        except JournalError as e:
            logger.error(f"Error fetching profile: {e.message}")
            row = None

        if self._identity != identity:
            return
        self._profile = Profile.from_row(row) if row else None

    async def start(self) -> None:
        """Adopt the provider's stored session and follow its changes."""
        if self._provider is None:
            raise RuntimeError("SessionContext.start() needs a session provider")

        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self._provider.subscribe(self._on_identity_changed)
        await self.set_identity(self._provider.current_identity())

    def _on_identity_changed(self, identity: Optional[Identity]) -> None:
        # Auth callbacks may fire from the client's own thread
        if self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._schedule_transition, identity)

    def _schedule_transition(self, identity: Optional[Identity]) -> None:
        task = asyncio.ensure_future(self.set_identity(identity))
        self._tasks.add(task)
        task.add_done_callback(self._transition_done)

    def _transition_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Identity transition failed: {task.exception()}")

    async def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    async def reload(self) -> None:
        """Reload the current identity's entries."""
        identity = self.require_identity()
        await self.store.load(identity.user_id)
