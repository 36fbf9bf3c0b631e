"""Identity lifecycle: providers, SessionContext and per-user workspaces."""

from moodjournal.features.session.context import SessionContext
from moodjournal.features.session.models import Identity, Profile, resolve_display_name
from moodjournal.features.session.provider import SessionProvider, SupabaseSessionProvider
from moodjournal.features.session.workspace import JournalWorkspace, WorkspaceRegistry

__all__ = [
    "Identity",
    "JournalWorkspace",
    "Profile",
    "SessionContext",
    "SessionProvider",
    "SupabaseSessionProvider",
    "WorkspaceRegistry",
    "resolve_display_name",
]
