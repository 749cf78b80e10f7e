"""
test_diary_event.py
-------------------
Unit tests for timeless.dataclasses.diary_event.

Tests event shaping from raw input, normalization of day lists and the
copy helpers used by the calendar UI.

Target Coverage: 95%+
"""
import pytest

from timeless.dataclasses.diary_event import (
    DiaryEvent,
    calendar_to_dict,
    is_empty_day,
    normalize_events,
)


class TestDiaryEventFromRaw:
    """Test DiaryEvent.from_raw."""

    def test_legacy_string_trimmed(self):
        """Test strings become trimmed, uncompleted events."""
        assert DiaryEvent.from_raw("  Buy milk  ") == DiaryEvent("Buy milk", False, [])

    def test_mapping(self):
        """Test a full event object."""
        raw = {"text": "Finish report", "completed": True, "tags": ["work"]}
        assert DiaryEvent.from_raw(raw) == DiaryEvent("Finish report", True, ["work"])

    def test_mapping_text_not_trimmed(self):
        """Test object text is kept verbatim."""
        assert DiaryEvent.from_raw({"text": " padded "}).text == " padded "

    def test_mapping_missing_fields(self):
        """Test defaults for an object with only text."""
        assert DiaryEvent.from_raw({"text": "x"}) == DiaryEvent("x", False, [])

    @pytest.mark.parametrize("completed", [1, "true", "yes", None, [True]])
    def test_completed_strict(self, completed):
        """Test only the boolean True counts as completed."""
        assert DiaryEvent.from_raw({"text": "x", "completed": completed}).completed is False

    def test_non_string_text(self):
        """Test non-string text becomes empty."""
        assert DiaryEvent.from_raw({"text": 42}).is_empty

    def test_tags_filtered(self):
        """Test empty, missing and container tags are removed."""
        event = DiaryEvent.from_raw({"text": "x", "tags": ["a", "", None, ["n"], {"k": 1}, "b"]})
        assert event.tags == ["a", "b"]

    @pytest.mark.parametrize(
        "tag, expected",
        [
            (5, ["5"]),
            (5.0, ["5"]),
            (-2, ["-2"]),
            (1.5, ["1.5"]),
            (0, []),
            (0.0, []),
            (True, []),
            (False, []),
            (float("nan"), []),
        ],
    )
    def test_numeric_tags_written_as_text(self, tag, expected):
        """Test non-zero numbers survive as tag text, booleans do not."""
        assert DiaryEvent.from_raw({"text": "x", "tags": [tag]}).tags == expected

    def test_with_tags_keeps_numbers(self):
        """Test replacing tags applies the same cleaning."""
        assert DiaryEvent("x").with_tags(["a", 7, ""]).tags == ["a", "7"]

    def test_tags_not_a_list(self):
        """Test a tags value that is not a list is dropped."""
        assert DiaryEvent.from_raw({"text": "x", "tags": "work"}).tags == []

    @pytest.mark.parametrize("raw", [None, 42, 3.5, ["text"], True])
    def test_unsupported_values(self, raw):
        """Test other types yield an empty event."""
        assert DiaryEvent.from_raw(raw).is_empty

    def test_from_event_copies_tags(self):
        """Test shaping an event does not share its tag list."""
        original = DiaryEvent("x", True, ["a"])
        shaped = DiaryEvent.from_raw(original)
        assert shaped == original
        assert shaped.tags is not original.tags


class TestDiaryEventHelpers:
    """Test copy helpers and serialization."""

    def test_is_empty(self):
        """Test emptiness uses trimmed text."""
        assert DiaryEvent("   ").is_empty
        assert not DiaryEvent(" x ").is_empty

    def test_to_dict(self):
        """Test dict shape."""
        assert DiaryEvent("x", True, ["a"]).to_dict() == {
            "text": "x",
            "completed": True,
            "tags": ["a"],
        }

    def test_toggle_completed(self):
        """Test toggling returns a new event."""
        event = DiaryEvent("x")
        toggled = event.toggle_completed()
        assert toggled.completed is True
        assert event.completed is False
        assert toggled.toggle_completed() == event

    def test_with_tags(self):
        """Test replacing tags."""
        event = DiaryEvent("x", True, ["old"])
        assert event.with_tags(["new", ""]).tags == ["new"]
        assert event.with_tags(None).tags == []
        assert event.tags == ["old"]

    def test_with_text(self):
        """Test replacing text trims it."""
        event = DiaryEvent("x", True, ["t"])
        assert event.with_text("  y  ") == DiaryEvent("y", True, ["t"])


class TestNormalizeEvents:
    """Test normalize_events and is_empty_day."""

    def test_mixed_day(self):
        """Test a day mixing strings, objects and blanks."""
        raw = ["  Buy milk ", {"text": "Call", "completed": True}, "", {"text": "  "}, None]
        assert normalize_events(raw) == [
            DiaryEvent("Buy milk"),
            DiaryEvent("Call", True),
        ]

    @pytest.mark.parametrize("raw", [None, "text", {"text": "x"}, 5])
    def test_non_list_input(self, raw):
        """Test anything but a list normalizes to no events."""
        assert normalize_events(raw) == []

    def test_idempotent(self):
        """Test normalizing a normalized list is a no-op."""
        once = normalize_events(["a", {"text": "b", "tags": ["t", 1]}])
        assert normalize_events(once) == once

    def test_does_not_mutate(self):
        """Test the input list is left alone."""
        raw = [{"text": "x", "tags": ["a", 1]}]
        normalize_events(raw)
        assert raw == [{"text": "x", "tags": ["a", 1]}]

    def test_is_empty_day(self):
        """Test day pruning predicate."""
        assert is_empty_day([])
        assert is_empty_day(["", {"text": " "}])
        assert is_empty_day(None)
        assert not is_empty_day(["x"])


class TestCalendarToDict:
    """Test calendar_to_dict."""

    def test_plain_dicts(self):
        """Test events become JSON-ready dicts."""
        calendar = {"0_1_2024": [DiaryEvent("x", True, ["a"])]}
        assert calendar_to_dict(calendar) == {
            "0_1_2024": [{"text": "x", "completed": True, "tags": ["a"]}]
        }
