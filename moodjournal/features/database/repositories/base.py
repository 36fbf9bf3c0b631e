"""Translation of Supabase/PostgREST failures into journal errors."""

import httpx
from postgrest.exceptions import APIError

from moodjournal.shared.errors import JournalError, NotFound, TransientError

# PostgREST: "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"


def translate_store_error(exc: Exception, action: str) -> JournalError:
    """Map a client exception raised while performing `action` to a JournalError."""
    if isinstance(exc, JournalError):
        return exc
    if isinstance(exc, APIError):
        if exc.code == NO_ROWS_CODE:
            return NotFound(f"Nothing found while trying to {action}")
        return TransientError(
            f"Store rejected {action}: {exc.message}",
            details={"code": exc.code},
        )
    if isinstance(exc, httpx.HTTPError):
        return TransientError(f"Network failure during {action}: {exc}")
    return TransientError(f"Unexpected failure during {action}: {exc}")
