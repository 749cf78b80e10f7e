"""
Utilities package for the Timeless diary.

- dates: DateKey decoding/encoding, date lines, timestamp resolution
- md: metadata comments, bullet tokens, document finalization

Import commonly-used utilities directly from this package:
    from timeless.utils import parse_date_key, format_bullet
"""

from .dates import (
    MONTH_NAMES,
    DATE_KEY_PATTERN,
    make_date_key,
    is_date_key,
    parse_date_key,
    rolls_over,
    format_date_line,
    now_ms,
    parse_int_prefix,
    resolve_timestamp,
)

from .md import (
    COMPLETED_MARKER,
    TIMESTAMP_KEY,
    is_comment_line,
    format_metadata_comment,
    parse_metadata_comment,
    split_trailing_tags,
    format_bullet,
    finalize_document,
)

__all__ = [
    # Dates
    "MONTH_NAMES",
    "DATE_KEY_PATTERN",
    "make_date_key",
    "is_date_key",
    "parse_date_key",
    "rolls_over",
    "format_date_line",
    "now_ms",
    "parse_int_prefix",
    "resolve_timestamp",
    # Markdown
    "COMPLETED_MARKER",
    "TIMESTAMP_KEY",
    "is_comment_line",
    "format_metadata_comment",
    "parse_metadata_comment",
    "split_trailing_tags",
    "format_bullet",
    "finalize_document",
]
