"""Sanitization of top-level string values for safe HTML output."""

import html
from typing import Any, Dict, Mapping

# Characters stripped by every "trimmed" comparison in the library.
TRIM_CHARS = " \t\n\r\0\x0b"


def trim(value: str) -> str:
    """Strip leading and trailing whitespace (space, tab, newlines, NUL, VT)."""
    return value.strip(TRIM_CHARS)


def sanitize(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a shallow copy of data with top-level strings trimmed and escaped.

    Escaping covers &, <, > and both quote characters (' as &#039;). Nested mappings and
    non-string values are passed through unchanged.
    """
    return {
        key: escape(trim(value)) if isinstance(value, str) else value
        for key, value in data.items()
    }


def escape(value: str) -> str:
    """HTML-escape with the single quote written as &#039;."""
    return html.escape(value, quote=True).replace("&#x27;", "&#039;")
