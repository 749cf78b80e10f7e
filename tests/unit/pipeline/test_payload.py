"""
test_payload.py
---------------
Unit tests for timeless.pipeline.payload.

Tests the save/load endpoint bodies and the local-storage item mapping.

Target Coverage: 90%+
"""
import json

import pytest

from timeless.core.exceptions import PayloadError, ValidationError
from timeless.dataclasses.diary_event import DiaryEvent
from timeless.diary import format_calendar
from timeless.pipeline.payload import (
    build_load_response,
    build_missing_load_response,
    build_save_body,
    build_save_response,
    calendar_from_payload,
    decode_payload,
    from_storage_items,
    to_storage_items,
)


@pytest.fixture
def frozen_now(monkeypatch):
    """Pin the clock at 1_000_000 ms."""
    monkeypatch.setattr("timeless.utils.dates.time.time", lambda: 1000.0)
    return 1000000


class TestDecodePayload:
    """Test decode_payload."""

    @pytest.mark.parametrize("body", [None, "", "   ", b""])
    def test_empty_bodies(self, body):
        """Test empty bodies decode to an empty dict."""
        assert decode_payload(body) == {}

    def test_json_text_and_bytes(self):
        """Test text and bytes bodies."""
        assert decode_payload('{"a": 1}') == {"a": 1}
        assert decode_payload(b'{"a": 1}') == {"a": 1}

    def test_mapping_copied(self):
        """Test an already decoded mapping is copied."""
        body = {"a": 1}
        decoded = decode_payload(body)
        assert decoded == body and decoded is not body

    def test_invalid_json(self):
        """Test malformed JSON raises PayloadError."""
        with pytest.raises(PayloadError, match="Invalid JSON payload"):
            decode_payload("{not json")

    @pytest.mark.parametrize("body", ["[1, 2]", '"text"', "42", "null"])
    def test_not_an_object(self, body):
        """Test JSON that is not an object raises PayloadError."""
        with pytest.raises(PayloadError, match="Invalid payload"):
            decode_payload(body)

    def test_payload_error_is_validation_error(self):
        """Test the exception hierarchy."""
        with pytest.raises(ValidationError):
            decode_payload(b"\xff\xfe")


class TestCalendarFromPayload:
    """Test calendar_from_payload."""

    def test_split(self):
        """Test days and timestamp are separated."""
        calendar, timestamp = calendar_from_payload(
            {"2_14_2024": [{"text": "x"}], "lastSavedTimestamp": "1700000000000"}
        )
        assert calendar == {"2_14_2024": [{"text": "x"}]}
        assert timestamp == "1700000000000"

    def test_foreign_keys_dropped(self):
        """Test non-DateKey keys and non-list values are ignored."""
        calendar, _ = calendar_from_payload(
            {"settings": {"theme": "dark"}, "2_14_2024": "text", "0_1_2024": ["ok"]}
        )
        assert calendar == {"0_1_2024": ["ok"]}

    @pytest.mark.parametrize("raw", [None, True, [1], {"ms": 1}])
    def test_unusable_timestamp(self, raw):
        """Test unusable timestamps become None."""
        _, timestamp = calendar_from_payload({"lastSavedTimestamp": raw})
        assert timestamp is None

    def test_numeric_timestamp(self):
        """Test numbers pass through."""
        assert calendar_from_payload({"lastSavedTimestamp": 5})[1] == 5


class TestSaveDirection:
    """Test build_save_body and build_save_response."""

    def test_save_body(self):
        """Test a request body becomes a diary document."""
        body = json.dumps({
            "2_14_2024": [{"text": "Finish report", "completed": True, "tags": ["work"]}],
            "lastSavedTimestamp": "1700000000000",
        })
        markdown, timestamp = build_save_body(body)
        assert timestamp == 1700000000000
        assert markdown.startswith("<!-- lastSavedTimestamp: 1700000000000 -->\n")
        assert "  - Finish report [✓] #work\n" in markdown

    def test_save_body_without_timestamp(self, frozen_now):
        """Test a missing timestamp is stamped with now."""
        markdown, timestamp = build_save_body({"0_1_2024": ["x"]})
        assert timestamp == frozen_now
        assert f"<!-- lastSavedTimestamp: {frozen_now} -->" in markdown

    def test_save_body_empty(self, frozen_now):
        """Test an empty body writes an empty diary."""
        markdown, _ = build_save_body(None)
        assert markdown == f"<!-- lastSavedTimestamp: {frozen_now} -->\n"

    def test_save_body_invalid(self):
        """Test invalid JSON propagates PayloadError."""
        with pytest.raises(PayloadError):
            build_save_body("{")

    def test_save_response(self):
        """Test the success body."""
        assert build_save_response(42) == {"status": "ok", "savedTimestamp": "42"}


class TestLoadDirection:
    """Test build_load_response."""

    def test_load_response(self, sample_calendar):
        """Test a diary document becomes event dicts."""
        response = build_load_response(format_calendar(sample_calendar, 1700000000000))
        assert response["lastSavedTimestamp"] == "1700000000000"
        assert response["2_14_2024"][1] == {
            "text": "Finish report",
            "completed": True,
            "tags": ["work", "urgent"],
        }
        assert set(response) == {"11_24_2024", "2_14_2024", "11_31_2023", "lastSavedTimestamp"}

    def test_transport_timestamp_newer(self):
        """Test the later of document and transport timestamps is reported."""
        response = build_load_response("<!-- lastSavedTimestamp: 100 -->\n", 200)
        assert response["lastSavedTimestamp"] == "200"

    def test_document_timestamp_newer(self):
        """Test a newer document timestamp wins."""
        response = build_load_response("<!-- lastSavedTimestamp: 300 -->\n", 200)
        assert response["lastSavedTimestamp"] == "300"

    def test_no_timestamp_anywhere(self, frozen_now):
        """Test now is reported when nothing is known."""
        assert build_load_response("")["lastSavedTimestamp"] == str(frozen_now)

    def test_missing_response(self, frozen_now):
        """Test the body for a diary that does not exist yet."""
        assert build_missing_load_response() == {"lastSavedTimestamp": str(frozen_now)}


class TestStorageItems:
    """Test local-storage mapping."""

    def test_to_storage_items(self):
        """Test days are JSON arrays and empty days are left out."""
        items = to_storage_items({"0_1_2024": ["a"], "0_2_2024": [""], "theme": ["x"]}, 7)
        assert set(items) == {"0_1_2024", "lastSavedTimestamp"}
        assert json.loads(items["0_1_2024"]) == [{"text": "a", "completed": False, "tags": []}]
        assert items["lastSavedTimestamp"] == "7"

    def test_from_storage_items(self, caplog):
        """Test items are rebuilt and bad values skipped."""
        items = {
            "0_1_2024": json.dumps(["legacy", {"text": "obj", "completed": True}]),
            "0_2_2024": "{broken",
            "0_3_2024": json.dumps({"text": "not a list"}),
            "0_4_2024": json.dumps([]),
            "theme": "dark",
            "lastSavedTimestamp": "1700000000000",
        }
        calendar, timestamp = from_storage_items(items)

        assert calendar == {"0_1_2024": [DiaryEvent("legacy"), DiaryEvent("obj", True)]}
        assert timestamp == 1700000000000
        assert "0_2_2024" in caplog.text
        assert "0_3_2024" in caplog.text

    @pytest.mark.parametrize("raw, expected", [(None, 0), ("junk", 0), (12, 12), (True, 0)])
    def test_storage_timestamp(self, raw, expected):
        """Test the stored timestamp defaults to 0."""
        assert from_storage_items({"lastSavedTimestamp": raw})[1] == expected

    def test_storage_roundtrip(self, sample_calendar):
        """Test items written can be read back."""
        calendar, timestamp = from_storage_items(to_storage_items(sample_calendar, 99))
        assert timestamp == 99
        assert calendar["2_14_2024"][1] == DiaryEvent("Finish report", True, ["work", "urgent"])
