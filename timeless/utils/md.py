#!/usr/bin/env python3
"""
md.py
-------------------
Markdown token syntax shared by the diary formatter and parser.

Covers the pieces of the diary document that are not dates:
- metadata comments: <!-- key: value -->
- bullet lines:      "  - text [✓] #tag1 #tag2"
- newline normalization of the final document

Tag and key patterns use ASCII word characters so documents written by
the browser application tokenize identically here.
"""
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import List, Optional, Sequence, Tuple

COMPLETED_MARKER = "[✓]"
TIMESTAMP_KEY = "lastSavedTimestamp"

TAG_TOKEN = re.compile(r"^#([\w-]+)$", re.ASCII)
BULLET_LINE = re.compile(r"^\s*[-*]\s+(.*)$")
TIMESTAMP_COMMENT = re.compile(
    r"^<!--\s*lastSavedTimestamp\s*:\s*([0-9]+)\s*-->$", re.IGNORECASE
)
METADATA_COMMENT = re.compile(r"^<!--\s*([\w-]+)\s*:\s*(.*?)\s*-->$", re.ASCII)

_BLANK_LINE_RUNS = re.compile(r"\n{3,}")


# ----- Metadata comments -----
def is_comment_line(line: str) -> bool:
    """True for a trimmed line shaped like an HTML comment."""
    return line.startswith("<!--") and line.endswith("-->")


def format_metadata_comment(key: str, value: object) -> str:
    """
    Examples:
        >>> format_metadata_comment("lastSavedTimestamp", 1700000000000)
        '<!-- lastSavedTimestamp: 1700000000000 -->'
    """
    return f"<!-- {key}: {value} -->"


def parse_metadata_comment(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a metadata comment into (key, value).

    Returns None for comments that carry no key/value pair, or whose
    value is empty.

    Examples:
        >>> parse_metadata_comment("<!-- device: laptop -->")
        ('device', 'laptop')
        >>> parse_metadata_comment("<!-- just a note -->") is None
        True
    """
    match = METADATA_COMMENT.match(line)
    if not match:
        return None
    key, value = match.group(1), match.group(2)
    if not key or not value:
        return None
    return key, value


# ----- Bullets -----
def split_trailing_tags(tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Peel "#tag" tokens off the end of a token list.

    Stops at the first trailing token that is not a tag. Tags come back
    in their left-to-right order.

    Examples:
        >>> split_trailing_tags(["Submit", "taxes", "[✓]", "#finance", "#Q1"])
        (['Submit', 'taxes', '[✓]'], ['finance', 'Q1'])
        >>> split_trailing_tags(["#not", "trailing", "#tag"])
        (['#not', 'trailing'], ['tag'])
    """
    remaining = list(tokens)
    tags: List[str] = []
    while remaining:
        match = TAG_TOKEN.match(remaining[-1])
        if not match:
            break
        remaining.pop()
        tags.append(match.group(1))
    tags.reverse()
    return remaining, tags


def format_bullet(text: str, completed: bool, tags: Sequence[str]) -> str:
    """
    Render one event as a diary bullet.

    Examples:
        >>> format_bullet("Finish report", True, ["work", "urgent"])
        '  - Finish report [✓] #work #urgent'
    """
    line = f"  - {text}"
    if completed:
        line += f" {COMPLETED_MARKER}"
    if tags:
        line += " #" + " #".join(tags)
    return line


# ----- Document -----
def finalize_document(lines: Sequence[str]) -> str:
    """
    Join lines into the final document text.

    Collapses runs of blank lines to one, trims trailing whitespace and
    ends the text with exactly one newline.
    """
    text = _BLANK_LINE_RUNS.sub("\n\n", "\n".join(lines)).rstrip()
    return f"{text}\n"
