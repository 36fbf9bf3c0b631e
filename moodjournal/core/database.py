"""
Supabase client bootstrap.

The client is created on first use so that importing the package never
requires credentials (tests and tooling import freely).
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from moodjournal.core.config import settings
from moodjournal.shared.errors import ConfigurationError

logger = logging.getLogger("MoodJournal.Database")


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Get the shared Supabase client."""
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY must be set")

    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client created")
    return client
