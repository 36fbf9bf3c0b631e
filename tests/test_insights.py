"""Tests for the insight payload and the orchestrator's fallback behaviour."""

import asyncio
import json
import logging

import httpx
import pytest

from moodjournal.features.entries.models import DraftCheckIn
from moodjournal.features.insights.orchestrator import InsightOrchestrator
from moodjournal.features.insights.payload import build_insight_request
from moodjournal.shared.constants import INSIGHT_EMPTY_FALLBACK, INSIGHT_ERROR_FALLBACK
from moodjournal.shared.correlation import CorrelationContext
from moodjournal.shared.errors import ValidationError
from tests.conftest import INSIGHT_URL, InsightBackend, make_entries


def _draft(text="Long day but a good talk with my sister", mood=3, activities=("social",)) -> DraftCheckIn:
    draft = DraftCheckIn(prompt="Who or what supported you today?")
    if mood is not None:
        draft.set_mood(mood)
    for activity in activities:
        draft.toggle_activity(activity)
    draft.set_text(text)
    return draft


def _orchestrator(backend: InsightBackend) -> InsightOrchestrator:
    return InsightOrchestrator(client=backend.client(), url=INSIGHT_URL, timeout=5)


class TestBuildInsightRequest:
    def test_uses_labels_and_camel_case(self):
        body = build_insight_request(_draft(activities=("social", "sleep"))).model_dump(by_alias=True)

        assert body == {
            "mood": "Okay",
            "activities": "Socialized, Good Sleep",
            "journalText": "Long day but a good talk with my sister",
            "recentEntries": [],
        }

    def test_defaults_for_missing_mood_and_activities(self):
        request = build_insight_request(_draft(mood=None, activities=()))
        assert request.mood == "Not specified"
        assert request.activities == "None"

    def test_sends_three_most_recent_with_excerpts(self):
        entries = make_entries(
            [5, 4, 3, 2],
            activities=[["work"], [], ["relax", "creative"], ["sleep"]],
        )
        long_text = "x" * 250
        entries[0] = entries[0].model_copy(update={"journal_text": long_text})

        request = build_insight_request(_draft(), entries)

        assert len(request.recent_entries) == 3
        first, second, third = request.recent_entries
        assert first.mood == "Amazing"
        assert first.activities == "Productive"
        assert first.text == "x" * 100
        assert second.activities == ""
        assert third.activities == "Relaxed, Creative"
        assert third.text == "Day 2"

    def test_unknown_activity_ids_pass_through(self):
        entries = make_entries([3], activities=[["gardening"]])
        request = build_insight_request(_draft(), entries)
        assert request.recent_entries[0].activities == "gardening"


class TestRequestInsight:
    def test_returns_backend_insight(self, backend):
        orchestrator = _orchestrator(backend)

        text = asyncio.run(orchestrator.request_insight(_draft(), make_entries([4, 5])))

        assert text == "You showed up for yourself."
        assert orchestrator.last_result == text
        assert orchestrator.in_flight is False
        sent = json.loads(backend.requests[0].content)
        assert sent["mood"] == "Okay"
        assert len(sent["recentEntries"]) == 2
        assert str(backend.requests[0].url) == INSIGHT_URL

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_text_is_rejected_before_any_call(self, backend, text):
        orchestrator = _orchestrator(backend)

        with pytest.raises(ValidationError):
            asyncio.run(orchestrator.request_insight(_draft(text=text)))

        assert backend.call_count == 0
        assert orchestrator.in_flight is False

    def test_server_error_falls_back(self):
        backend = InsightBackend(lambda request: httpx.Response(500, json={"error": "boom"}))
        assert asyncio.run(_orchestrator(backend).request_insight(_draft())) == INSIGHT_ERROR_FALLBACK

    def test_timeout_falls_back(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        orchestrator = _orchestrator(InsightBackend(slow))

        assert asyncio.run(orchestrator.request_insight(_draft())) == INSIGHT_ERROR_FALLBACK
        assert orchestrator.in_flight is False

    def test_connection_error_falls_back(self):
        def down(request):
            raise httpx.ConnectError("refused", request=request)

        assert asyncio.run(_orchestrator(InsightBackend(down)).request_insight(_draft())) == INSIGHT_ERROR_FALLBACK

    def test_malformed_body_falls_back(self):
        backend = InsightBackend(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
        assert asyncio.run(_orchestrator(backend).request_insight(_draft())) == INSIGHT_ERROR_FALLBACK

    @pytest.mark.parametrize("payload", [{}, {"insight": ""}, {"insight": None}])
    def test_missing_insight_uses_empty_fallback(self, payload):
        backend = InsightBackend(lambda request: httpx.Response(200, json=payload))
        assert asyncio.run(_orchestrator(backend).request_insight(_draft())) == INSIGHT_EMPTY_FALLBACK

    def test_invalid_url_falls_back(self, backend):
        orchestrator = InsightOrchestrator(client=backend.client(), url="http://[::1", timeout=5)

        assert asyncio.run(orchestrator.request_insight(_draft())) == INSIGHT_ERROR_FALLBACK
        assert orchestrator.in_flight is False
        assert backend.call_count == 0

    def test_closed_client_falls_back(self, backend):
        client = backend.client()
        asyncio.run(client.aclose())
        orchestrator = InsightOrchestrator(client=client, url=INSIGHT_URL, timeout=5)

        assert asyncio.run(orchestrator.request_insight(_draft())) == INSIGHT_ERROR_FALLBACK
        assert backend.call_count == 0

    def test_in_flight_during_call(self):
        seen = []
        orchestrator = None

        def handler(request):
            seen.append(orchestrator.in_flight)
            return httpx.Response(200, json={"insight": "ok"})

        orchestrator = _orchestrator(InsightBackend(handler))
        asyncio.run(orchestrator.request_insight(_draft()))

        assert seen == [True]
        assert orchestrator.in_flight is False

    def test_forwards_correlation_id(self, backend):
        with CorrelationContext("abc12345"):
            asyncio.run(_orchestrator(backend).request_insight(_draft()))

        assert backend.requests[0].headers["X-Correlation-ID"] == "abc12345"

    def test_logs_event_without_journal_text(self, backend, caplog):
        with caplog.at_level(logging.INFO, logger="MoodJournal.Insights.Events"):
            asyncio.run(_orchestrator(backend).request_insight(_draft(), trigger="save"))

        lines = [r.getMessage() for r in caplog.records if r.name == "MoodJournal.Insights.Events"]
        assert len(lines) == 1
        event = json.loads(lines[0].split(" ", 1)[1])
        assert event["outcome"] == "insight"
        assert event["trigger"] == "save"
        assert event["status_code"] == 200
        assert "sister" not in lines[0]
