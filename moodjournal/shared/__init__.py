# Shared vocabularies, errors and logging
from .constants import ACTIVITIES, DAILY_PROMPTS, MOODS
from .errors import ErrorCode, JournalError

__all__ = [
    "ACTIVITIES",
    "DAILY_PROMPTS",
    "MOODS",
    "ErrorCode",
    "JournalError",
]
