"""Tests for the HTTP adapter, with fake stores and a mocked insight backend."""

import asyncio
from datetime import timedelta

import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from moodjournal.api.dependencies import get_registry, get_session_provider
from moodjournal.features.checkin.service import CheckInService
from moodjournal.features.entries.store import EntryStore
from moodjournal.features.insights.orchestrator import InsightOrchestrator
from moodjournal.features.session.context import SessionContext
from moodjournal.features.session.models import Identity
from moodjournal.features.session.provider import SessionProvider
from moodjournal.features.session.workspace import JournalWorkspace, WorkspaceRegistry
from moodjournal.shared.constants import INSIGHT_ERROR_FALLBACK
from moodjournal.shared.errors import AuthRequired, TransientError
from tests.conftest import (
    BASE_TIME,
    INSIGHT_URL,
    FakeEntriesRepository,
    FakeProfilesRepository,
    InsightBackend,
    make_row,
)

ALICE = Identity(user_id="user-1", email="alice@example.com")
AUTH = {"Authorization": "Bearer good-token"}


class FakeProvider(SessionProvider):
    def current_identity(self):
        return None

    def subscribe(self, listener):
        return lambda: None

    def verify_token(self, access_token):
        if access_token != "good-token":
            raise AuthRequired("Session expired, please sign in again")
        return ALICE


class Harness:
    def __init__(self, rows=None, backend=None):
        self.repo = FakeEntriesRepository(rows)
        self.profiles = FakeProfilesRepository({"user-1": {"id": "user-1", "display_name": "Alice"}})
        self.backend = backend or InsightBackend()
        self.registry = WorkspaceRegistry(self._build, max_workspaces=4)

    def _build(self) -> JournalWorkspace:
        store = EntryStore(self.repo)
        orchestrator = InsightOrchestrator(client=self.backend.client(), url=INSIGHT_URL, timeout=5)
        return JournalWorkspace(
            session=SessionContext(store, self.profiles),
            checkin=CheckInService(store, orchestrator),
        )

    def workspace(self) -> JournalWorkspace:
        return asyncio.run(self.registry.get(ALICE))


@pytest.fixture
def harness():
    return Harness(rows=[
        make_row(entry_id="e1", mood=5, activities=["exercise"], journal_text="Ran 5k",
                 created_at=BASE_TIME),
        make_row(entry_id="e2", mood=2, activities=["work"], journal_text="Deadline",
                 created_at=BASE_TIME - timedelta(days=1)),
    ])


@pytest.fixture
def client(harness):
    app.dependency_overrides[get_session_provider] = FakeProvider
    app.dependency_overrides[get_registry] = lambda: harness.registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestPublicRoutes:
    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["insight_client_ready"] is True

    def test_options(self, client):
        body = client.get("/api/v1/checkin/options").json()
        assert [m["label"] for m in body["moods"]] == ["Terrible", "Bad", "Okay", "Good", "Amazing"]
        assert len(body["activities"]) == 6
        assert len(body["prompts"]) == 8

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Correlation-ID"] == "req-42"


class TestAuth:
    def test_missing_token(self, client):
        response = client.get("/api/v1/entries")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_REQUIRED"

    def test_invalid_token(self, client):
        response = client.get("/api/v1/entries", headers={"Authorization": "Bearer expired"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Session expired, please sign in again"

    def test_wrong_scheme(self, client):
        response = client.get("/api/v1/entries", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401


class TestEntriesRoutes:
    def test_list_entries(self, client):
        body = client.get("/api/v1/entries", headers=AUTH).json()

        assert body["count"] == 2
        first = body["entries"][0]
        assert first["id"] == "e1"
        assert first["mood_label"] == "Amazing"
        assert first["display_date"] == "Thursday, October 1, 2026"
        assert first["display_time"] == "9:00 AM"
        assert first["activities"] == [{"id": "exercise", "label": "Exercise", "icon": "🚶"}]

    def test_profile(self, client):
        body = client.get("/api/v1/profile", headers=AUTH).json()
        assert body["display_name"] == "Alice"
        assert body["greeting"].startswith("Good ")

    def test_delete_entry(self, client, harness):
        response = client.delete("/api/v1/entries/e2", headers=AUTH)

        assert response.json() == {"status": "deleted", "entry_id": "e2"}
        assert [e.id for e in harness.workspace().store.entries] == ["e1"]

    def test_delete_unknown_entry(self, client):
        response = client.delete("/api/v1/entries/nope", headers=AUTH)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_store_outage_is_503(self, client, harness):
        client.get("/api/v1/entries", headers=AUTH)
        harness.repo.fail_with = TransientError("store down")

        response = client.post("/api/v1/entries/reload", headers=AUTH)

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "TRANSIENT_ERROR"


class TestAnalyticsRoute:
    def test_summary(self, client):
        body = client.get("/api/v1/analytics", headers=AUTH).json()

        assert body["total_entries"] == 2
        assert body["average_mood"] == 3.5
        assert body["good_days"] == 1
        assert [p["mood"] for p in body["trend"]] == [2, 5]
        assert [c["activity_id"] for c in body["correlations"]] == ["exercise", "work"]

    def test_window_must_be_positive(self, client):
        response = client.get("/api/v1/analytics?window=0", headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestCheckInRoutes:
    def test_compose_and_save(self, client, harness):
        draft = client.put("/api/v1/checkin/draft", headers=AUTH, json={
            "mood": 4,
            "activities": ["sleep", "relax", "sleep"],
            "journal_text": "Slept in and read all afternoon",
        }).json()
        assert draft["activities"] == ["sleep", "relax"]

        response = client.post("/api/v1/checkin/save", headers=AUTH)

        assert response.status_code == 200
        entry = response.json()["entry"]
        assert entry["mood"] == 4
        assert entry["insight_text"] == "You showed up for yourself."
        assert harness.backend.call_count == 1
        assert client.get("/api/v1/entries", headers=AUTH).json()["entries"][0]["id"] == entry["id"]
        assert client.get("/api/v1/checkin/draft", headers=AUTH).json()["mood"] is None

    def test_toggle_activity(self, client):
        client.post("/api/v1/checkin/activities/creative/toggle", headers=AUTH)
        body = client.post("/api/v1/checkin/activities/social/toggle", headers=AUTH).json()
        assert body["activities"] == ["creative", "social"]

    def test_unknown_activity_rejected_without_changes(self, client):
        client.put("/api/v1/checkin/draft", headers=AUTH, json={"mood": 3})

        response = client.put("/api/v1/checkin/draft", headers=AUTH, json={"mood": 5, "activities": ["yoga"]})

        assert response.status_code == 400
        assert client.get("/api/v1/checkin/draft", headers=AUTH).json()["mood"] == 3

    def test_insight_requires_text(self, client, harness):
        response = client.post("/api/v1/checkin/insight", headers=AUTH)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Please write a journal entry to get AI insights!"
        assert harness.backend.call_count == 0

    def test_insight_then_save_reuses_it(self, client, harness):
        client.put("/api/v1/checkin/draft", headers=AUTH, json={"mood": 3, "journal_text": "Quiet day"})

        insight = client.post("/api/v1/checkin/insight", headers=AUTH).json()["insight"]
        saved = client.post("/api/v1/checkin/save", headers=AUTH).json()

        assert saved["entry"]["insight_text"] == insight
        assert harness.backend.call_count == 1

    def test_save_without_mood(self, client):
        response = client.post("/api/v1/checkin/save", headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Please select a mood first!"

    def test_backend_outage_still_saves(self, client):
        harness = Harness(backend=InsightBackend(lambda request: httpx.Response(503)))
        app.dependency_overrides[get_registry] = lambda: harness.registry
        client.put("/api/v1/checkin/draft", headers=AUTH, json={"mood": 2, "journal_text": "Rough one"})

        entry = client.post("/api/v1/checkin/save", headers=AUTH).json()["entry"]

        assert entry["insight_text"] == INSIGHT_ERROR_FALLBACK

    def test_busy_draft_is_conflict(self, client, harness):
        client.get("/api/v1/checkin/draft", headers=AUTH)
        harness.workspace().checkin._saving = True

        response = client.post("/api/v1/checkin/save", headers=AUTH)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"
