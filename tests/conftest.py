"""Shared fakes and builders for the journal tests."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from moodjournal.features.entries.models import Entry
from moodjournal.shared.errors import TransientError

BASE_TIME = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
INSIGHT_URL = "http://insights.test/api/ai-insights"


def make_row(
    entry_id: str = "entry-1",
    owner_id: str = "user-1",
    mood: int = 3,
    activities: Optional[List[str]] = None,
    journal_text: str = "",
    prompt: str = "What made you smile today?",
    insight: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Dict:
    """A journal_entries row as Supabase returns it."""
    return {
        "id": entry_id,
        "user_id": owner_id,
        "created_at": (created_at or BASE_TIME).isoformat(),
        "mood": mood,
        "activities": activities or [],
        "journal_text": journal_text,
        "prompt": prompt,
        "ai_insights": insight,
    }


def make_entries(moods: List[int], owner_id: str = "user-1", activities: Optional[List[List[str]]] = None) -> List[Entry]:
    """Entries newest first, one day apart, with the given moods."""
    entries = []
    for i, mood in enumerate(moods):
        entries.append(Entry.from_row(make_row(
            entry_id=f"entry-{i}",
            owner_id=owner_id,
            mood=mood,
            activities=activities[i] if activities else [],
            journal_text=f"Day {i}",
            created_at=BASE_TIME - timedelta(days=i),
        )))
    return entries


class FakeEntriesRepository:
    """In-memory stand-in for EntriesRepository."""

    def __init__(self, rows: Optional[List[Dict]] = None):
        self.rows: List[Dict] = list(rows or [])
        self.calls: List[tuple] = []
        self.fail_with: Optional[Exception] = None
        self._counter = 0

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def insert(self, owner_id, mood, activities, journal_text, prompt, insight_text=None) -> Dict:
        self.calls.append(("insert", owner_id))
        self._maybe_fail()
        self._counter += 1
        row = make_row(
            entry_id=f"stored-{self._counter}",
            owner_id=owner_id,
            mood=mood,
            activities=list(activities),
            journal_text=journal_text,
            prompt=prompt,
            insight=insight_text,
            created_at=BASE_TIME + timedelta(days=30, minutes=self._counter),
        )
        self.rows.append(row)
        return dict(row)

    def list_for_owner(self, owner_id: str) -> List[Dict]:
        self.calls.append(("list", owner_id))
        self._maybe_fail()
        owned = [dict(r) for r in self.rows if r["user_id"] == owner_id]
        return sorted(owned, key=lambda r: r["created_at"], reverse=True)

    def delete(self, entry_id: str, owner_id: str) -> int:
        self.calls.append(("delete", entry_id, owner_id))
        self._maybe_fail()
        before = len(self.rows)
        self.rows = [r for r in self.rows if not (r["id"] == entry_id and r["user_id"] == owner_id)]
        return before - len(self.rows)


class FakeProfilesRepository:
    def __init__(self, profiles: Optional[Dict[str, Dict]] = None, fail: bool = False):
        self.profiles = profiles or {}
        self.fail = fail

    def get(self, user_id: str) -> Optional[Dict]:
        if self.fail:
            raise TransientError("profile store down")
        return self.profiles.get(user_id)


class InsightBackend:
    """Scriptable insight endpoint served through httpx.MockTransport."""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, json={"insight": "You showed up for yourself."}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def repo() -> FakeEntriesRepository:
    return FakeEntriesRepository()


@pytest.fixture
def backend() -> InsightBackend:
    return InsightBackend()
