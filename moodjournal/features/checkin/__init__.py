"""The check-in save flow."""

from moodjournal.features.checkin.service import CheckInService, needs_insight

__all__ = [
    "CheckInService",
    "needs_insight",
]
