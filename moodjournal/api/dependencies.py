import asyncio
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from moodjournal.features.database import DatabaseClient, get_database_client
from moodjournal.features.session.models import Identity
from moodjournal.features.session.provider import SessionProvider, SupabaseSessionProvider
from moodjournal.features.session.workspace import JournalWorkspace, WorkspaceRegistry
from moodjournal.shared.errors import AuthRequired


def get_database() -> DatabaseClient:
    """Provide the singleton Supabase database client for request handlers."""
    return get_database_client()


@lru_cache(maxsize=1)
def get_session_provider() -> SessionProvider:
    """Provide the Supabase Auth provider used to verify bearer tokens."""
    return SupabaseSessionProvider(get_database().client)


@lru_cache(maxsize=1)
def get_registry() -> WorkspaceRegistry:
    """Provide the per-identity workspace registry."""
    return WorkspaceRegistry(lambda: JournalWorkspace.build(get_database()))


async def get_identity(
    authorization: Optional[str] = Header(default=None),
    provider: SessionProvider = Depends(get_session_provider),
) -> Identity:
    """Resolve 'Authorization: Bearer <access token>' to an identity."""
    if not authorization:
        raise AuthRequired()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthRequired("Expected a bearer token")
    return await asyncio.to_thread(provider.verify_token, token.strip())


async def get_workspace(
    identity: Identity = Depends(get_identity),
    registry: WorkspaceRegistry = Depends(get_registry),
) -> JournalWorkspace:
    return await registry.get(identity)
