"""
Logging helpers that keep journal content and identities out of the logs.

Includes:
- Redaction/truncation of free text and emails
- A structured event line for every insight request
"""
import json
import logging
import re
from typing import Any, Optional

# Keys whose values never reach a log line
SENSITIVE_KEYS = [
    "journal_text", "journaltext", "text", "insight", "ai_insights", "user_id",
    "email", "password", "token", "access_token", "refresh_token",
    "authorization", "api_key", "secret",
]

_EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
_CONTROL_CHARS = re.compile(r'[\x00-\x1F\x7F]')


def sanitize_for_logging(data: Any, max_len: int = 100) -> Any:
    """
    Sanitize data for safe logging.

    Dict values under sensitive keys are replaced by their length only;
    strings lose control characters and are truncated to `max_len`.
    """
    if data is None:
        return "None"

    if isinstance(data, dict):
        sanitized = {}
        for k, v in data.items():
            if str(k).lower() in SENSITIVE_KEYS:
                sanitized[k] = f"<redacted len={len(v) if isinstance(v, str) else '?'}>"
            else:
                sanitized[k] = sanitize_for_logging(v, max_len)
        return sanitized

    if isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item, max_len) for item in data]

    if isinstance(data, (int, float, bool)):
        return data

    cleaned = _CONTROL_CHARS.sub('', redact_emails(str(data)))
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "..."
    return cleaned


def redact_emails(text: str) -> str:
    """Replace email addresses with [EMAIL_REDACTED]."""
    return _EMAIL_PATTERN.sub('[EMAIL_REDACTED]', text)


def mask_identity(user_id: Optional[str]) -> str:
    """Short, stable prefix of a user id for log lines."""
    if not user_id:
        return "<none>"
    return f"{user_id[:8]}…"


_insight_logger = logging.getLogger("MoodJournal.Insights.Events")


def log_insight_call(
    outcome: str,
    duration_ms: int,
    status_code: Optional[int] = None,
    recent_entries: int = 0,
    text_length: int = 0,
    trigger: str = "explicit",
) -> None:
    """
    Emit one structured line per insight request.

    Args:
        outcome: "insight", "empty" (no insight field) or "error"
        duration_ms: Wall time of the call
        status_code: HTTP status if a response arrived
        recent_entries: Number of summarized recent entries sent along
        text_length: Length of the journal text (never the text itself)
        trigger: "explicit" (Get Insights) or "save" (implicit during save)
    """
    event = {
        "event": "insight_call",
        "outcome": outcome,
        "duration_ms": duration_ms,
        "recent_entries": recent_entries,
        "text_length": text_length,
        "trigger": trigger,
    }
    if status_code is not None:
        event["status_code"] = status_code

    _insight_logger.info("INSIGHT_CALL %s", json.dumps(event))
