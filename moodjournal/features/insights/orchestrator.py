"""
Insight Orchestrator - short AI reflections for a check-in.

Calls the insight backend once per request and always comes back with
text: the generated insight, or a fixed supportive fallback when the backend
is slow, down, or answers with something unusable. The only error it
signals is a ValidationError for a draft without journal text, raised
before any network call.

One request is tracked at a time. Overlapping calls are not queued or
merged; the caller disables its trigger while `in_flight` is True.
"""

import logging
import time
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from moodjournal.core.config import settings
from moodjournal.core.logging_utils import log_insight_call
from moodjournal.core.tracing import get_tracer
from moodjournal.features.entries.models import DraftCheckIn, Entry
from moodjournal.features.insights.payload import InsightResponse, build_insight_request
from moodjournal.services.http_client import http_client_manager
from moodjournal.shared.constants import INSIGHT_EMPTY_FALLBACK, INSIGHT_ERROR_FALLBACK
from moodjournal.shared.correlation import propagate_correlation_headers
from moodjournal.shared.errors import ValidationError

logger = logging.getLogger("MoodJournal.Insights")
tracer = get_tracer(__name__)


class InsightOrchestrator:
    """Owns the single in-flight slot and the last resolved insight."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            client: httpx client to use; defaults to the shared pooled client
            url: Full insight endpoint URL; defaults to settings.insights_url
            timeout: Per-request timeout in seconds
        """
        self._client = client
        self._url = url or settings.insights_url
        self._timeout = timeout if timeout is not None else settings.INSIGHT_TIMEOUT_SECONDS
        self._in_flight = False
        self._last_result: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def last_result(self) -> Optional[str]:
        return self._last_result

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return await http_client_manager.get_client()

    async def request_insight(
        self,
        draft: DraftCheckIn,
        recent_entries: Sequence[Entry] = (),
        trigger: str = "explicit",
    ) -> str:
        """
        Get a reflection for the draft.

        Args:
            draft: Check-in being composed; must have journal text
            recent_entries: Newest-first entries for context (first 3 are sent)
            trigger: "explicit" or "save", for the event log only

        Returns:
            Generated insight, or fallback text on any backend failure
        """
        if not draft.has_text:
            raise ValidationError(
                "Please write a journal entry to get AI insights!",
                details={"field": "journal_text"},
            )

        if self._in_flight:
            logger.warning("Insight requested while another request is in flight")

        body = build_insight_request(draft, recent_entries).model_dump(by_alias=True)

        self._in_flight = True
        self._last_result = None
        started = time.monotonic()
        status_code: Optional[int] = None
        outcome = "error"
        try:
            with tracer.start_as_current_span("insights.request") as span:
                span.set_attribute("insights.trigger", trigger)
                span.set_attribute("insights.recent_entries", len(body["recentEntries"]))
                text, outcome, status_code = await self._call_backend(body)
                span.set_attribute("insights.outcome", outcome)
                if status_code is not None:
                    span.set_attribute("http.status_code", status_code)
        finally:
            self._in_flight = False
            log_insight_call(
                outcome=outcome,
                duration_ms=int((time.monotonic() - started) * 1000),
                status_code=status_code,
                recent_entries=len(body["recentEntries"]),
                text_length=len(draft.journal_text),
                trigger=trigger,
            )

        self._last_result = text
        return text

    async def _call_backend(self, body: dict) -> tuple[str, str, Optional[int]]:
        """Returns (text, outcome, status_code); never raises for backend faults."""
        try:
            client = await self._get_client()
            response = await client.post(
                self._url,
                json=body,
                headers=propagate_correlation_headers({"Content-Type": "application/json"}),
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            logger.error(f"Insight request timed out after {self._timeout}s")
            return INSIGHT_ERROR_FALLBACK, "error", None
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            logger.error(f"Insight request failed: {e}")
            return INSIGHT_ERROR_FALLBACK, "error", None
        except RuntimeError as e:
            # httpx raises RuntimeError for a client that has been closed
            logger.error(f"Insight client unusable: {e}")
            return INSIGHT_ERROR_FALLBACK, "error", None

        if not response.is_success:
            logger.error(f"Insight backend error: {response.status_code}")
            return INSIGHT_ERROR_FALLBACK, "error", response.status_code

        try:
            parsed = InsightResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Insight backend returned a malformed body: {e}")
            return INSIGHT_ERROR_FALLBACK, "error", response.status_code

        if not parsed.insight:
            logger.warning("Insight backend answered without an insight")
            return INSIGHT_EMPTY_FALLBACK, "empty", response.status_code

        logger.info("Insight generated")
        return parsed.insight, "insight", response.status_code
