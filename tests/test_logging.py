"""Tests for log redaction and the structured log formatter."""

import json
import logging

from moodjournal.core.logging_utils import mask_identity, redact_emails, sanitize_for_logging
from moodjournal.shared.correlation import CorrelationContext
from moodjournal.shared.logging_config import CorrelationIdFilter, JSONFormatter


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("MoodJournal.Test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRedaction:
    def test_journal_text_is_reduced_to_length(self):
        sanitized = sanitize_for_logging({"journal_text": "I cried at lunch", "mood": 2})
        assert sanitized == {"journal_text": "<redacted len=16>", "mood": 2}

    def test_nested_payloads(self):
        body = {"recentEntries": [{"mood": "Good", "text": "private"}]}
        assert sanitize_for_logging(body)["recentEntries"][0]["text"] == "<redacted len=7>"

    def test_long_strings_are_truncated(self):
        assert sanitize_for_logging("a" * 150, max_len=10) == "a" * 10 + "..."

    def test_emails(self):
        assert redact_emails("from alice@example.com") == "from [EMAIL_REDACTED]"

    def test_mask_identity(self):
        assert mask_identity("0f8fad5b-d9cb-469f-a165-70867728950e") == "0f8fad5b…"
        assert mask_identity(None) == "<none>"


class TestJSONFormatter:
    def test_includes_correlation_id_and_extras(self):
        record = _record("Entries loaded", count=12)
        with CorrelationContext("abcd1234"):
            CorrelationIdFilter().filter(record)

        line = json.loads(JSONFormatter(service_name="mood-journal").format(record))

        assert line["message"] == "Entries loaded"
        assert line["logger"] == "MoodJournal.Test"
        assert line["service"] == "mood-journal"
        assert line["correlation_id"] == "abcd1234"
        assert line["count"] == 12

    def test_omits_missing_correlation_id(self):
        record = _record("Background work")
        CorrelationIdFilter().filter(record)

        line = json.loads(JSONFormatter().format(record))

        assert "correlation_id" not in line
