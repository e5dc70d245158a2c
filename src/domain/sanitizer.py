"""
Free-text sanitizer - Denylist cleanup of user-supplied text.

Applied to todo titles and descriptions after validation and before the
value is handed to storage. Never applied to emails or passwords.

This is a denylist filter, not an escaping scheme: matched content is
deleted in place. It does not cover attribute, CSS or encoded payloads,
so output encoding at render time remains the renderer's responsibility.
"""

import re

_ANGLE_BRACKETS = re.compile(r"[<>]")
_SCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE | re.ASCII)


def _strip_once(text: str) -> str:
    text = _ANGLE_BRACKETS.sub("", text)
    text = _SCRIPT_SCHEME.sub("", text)
    return _EVENT_HANDLER.sub("", text)


def sanitize(text: str) -> str:
    """
    Remove angle brackets, javascript: schemes and inline event handlers.

    The removal passes repeat until nothing changes, so fragments such as
    "javajavascript:script:" cannot reassemble into a payload. Leading and
    trailing whitespace is trimmed last.

    Args:
        text: Raw or normalized free text

    Returns:
        Cleaned text, possibly empty
    """
    while True:
        cleaned = _strip_once(text)
        if cleaned == text:
            return cleaned.strip()
        text = cleaned
