#!/usr/bin/env python3
"""
payload.py
----------
JSON shapes exchanged with the calendar's load/save endpoints and its
local-storage layer.

The transport (Dropbox download/upload, HTTP framing, browser storage)
lives elsewhere; these functions only build and consume the data:

Save request body:
    {"2_14_2024": [{"text": ..., "completed": ..., "tags": [...]}, ...],
     "lastSavedTimestamp": "1700000000000"}

Load response body:
    {"2_14_2024": [...], ..., "lastSavedTimestamp": "1700000000000"}

Local storage:
    one item per DateKey holding a JSON array, plus "lastSavedTimestamp"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

# --- Local imports ---
from timeless.core.exceptions import PayloadError
from timeless.dataclasses.diary_event import CalendarMap, normalize_events
from timeless.diary import format_calendar, parse_diary
from timeless.utils.dates import is_date_key, now_ms, parse_int_prefix, resolve_timestamp
from timeless.utils.md import TIMESTAMP_KEY

logger = logging.getLogger(__name__)


# ----- Save direction -----
def decode_payload(body: Union[None, str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Decode a save request body into a dict.

    Args:
        body: Already-decoded mapping, JSON text, raw bytes or None

    Returns:
        The payload as a dict ({} for an empty body)

    Raises:
        PayloadError: If the JSON is invalid or is not an object
    """
    if body is None:
        return {}

    if isinstance(body, Mapping):
        return dict(body)

    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadError("Invalid JSON payload") from e

    if isinstance(body, str):
        if not body.strip():
            return {}
        try:
            decoded = json.loads(body)
        except json.JSONDecodeError as e:
            raise PayloadError("Invalid JSON payload") from e
        if not isinstance(decoded, dict):
            raise PayloadError("Invalid payload")
        return decoded

    raise PayloadError("Invalid payload")


def calendar_from_payload(payload: Mapping[str, Any]) -> Tuple[Dict[str, List[Any]], Any]:
    """
    Split a save payload into raw calendar data and its timestamp.

    Keeps only DateKey-shaped keys whose value is a list. The timestamp
    is passed through when it is a string or a number; otherwise None,
    which the formatter replaces with the current time.

    Args:
        payload: Decoded save request body

    Returns:
        Tuple of (raw_calendar, timestamp)
    """
    raw_timestamp = payload.get(TIMESTAMP_KEY)
    is_number = isinstance(raw_timestamp, (int, float)) and not isinstance(raw_timestamp, bool)
    timestamp = raw_timestamp if isinstance(raw_timestamp, str) or is_number else None

    calendar: Dict[str, List[Any]] = {}
    for key, value in payload.items():
        if key == TIMESTAMP_KEY:
            continue
        if not is_date_key(key) or not isinstance(value, list):
            logger.debug(f"Ignoring payload key: {key!r}")
            continue
        calendar[key] = value

    return calendar, timestamp


def build_save_body(body: Union[None, str, bytes, Mapping[str, Any]]) -> Tuple[str, int]:
    """
    Turn a save request body into the diary document to upload.

    Returns:
        Tuple of (markdown_text, resolved_timestamp)

    Raises:
        PayloadError: If the body cannot be decoded
    """
    calendar, timestamp = calendar_from_payload(decode_payload(body))
    resolved = resolve_timestamp(timestamp)
    return format_calendar(calendar, resolved), resolved


def build_save_response(timestamp: int) -> Dict[str, str]:
    """Success body returned after the document was uploaded."""
    return {"status": "ok", "savedTimestamp": str(timestamp)}


# ----- Load direction -----
def build_load_response(
    markdown_text: str, transport_timestamp: Optional[int] = None
) -> Dict[str, Any]:
    """
    Turn a downloaded diary document into the load response body.

    The reported timestamp is the later of the document's own timestamp
    and the transport's modification time; when neither is known, the
    current time is reported.

    Args:
        markdown_text: Diary document text
        transport_timestamp: Remote modification time in ms, if any

    Returns:
        Days as lists of event dicts plus a string "lastSavedTimestamp"
    """
    parsed = parse_diary(markdown_text)
    latest = max(parsed.last_saved_timestamp, transport_timestamp or 0)

    response: Dict[str, Any] = {
        key: [event.to_dict() for event in events]
        for key, events in parsed.calendar_map.items()
    }
    response[TIMESTAMP_KEY] = str(latest or now_ms())
    return response


def build_missing_load_response() -> Dict[str, str]:
    """Load response for a diary that does not exist remotely yet."""
    return {TIMESTAMP_KEY: str(now_ms())}


# ----- Local storage -----
def to_storage_items(calendar: Mapping[str, Any], timestamp: Any = None) -> Dict[str, str]:
    """
    Flatten a calendar into local-storage items.

    Empty days are left out so the storage layer removes their keys.

    Returns:
        {DateKey: JSON array string, ..., "lastSavedTimestamp": str}
    """
    items: Dict[str, str] = {}
    for key, raw_events in calendar.items():
        if not is_date_key(key):
            continue
        events = normalize_events(raw_events)
        if events:
            items[key] = json.dumps([event.to_dict() for event in events], ensure_ascii=False)
    items[TIMESTAMP_KEY] = str(resolve_timestamp(timestamp))
    return items


def from_storage_items(items: Mapping[str, Any]) -> Tuple[CalendarMap, int]:
    """
    Rebuild a calendar from local-storage items.

    Values that are not JSON arrays are skipped with a warning. Legacy
    string events inside the arrays are upgraded by normalization.

    Returns:
        Tuple of (calendar, last_saved_timestamp); timestamp defaults to 0
    """
    calendar: CalendarMap = {}
    for key, value in items.items():
        if not is_date_key(key):
            continue
        try:
            decoded = json.loads(value) if isinstance(value, (str, bytes)) else value
        except json.JSONDecodeError:
            logger.warning(f"Skipping storage item with invalid JSON: {key}")
            continue
        if not isinstance(decoded, list):
            logger.warning(f"Skipping storage item that is not a list: {key}")
            continue
        events = normalize_events(decoded)
        if events:
            calendar[key] = events

    raw_timestamp = items.get(TIMESTAMP_KEY)
    timestamp = 0
    if isinstance(raw_timestamp, int) and not isinstance(raw_timestamp, bool):
        timestamp = raw_timestamp
    elif isinstance(raw_timestamp, str):
        timestamp = parse_int_prefix(raw_timestamp) or 0

    return calendar, timestamp
