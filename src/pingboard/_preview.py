"""Helpers for safe debug logging.

Feed payloads are arbitrary text from the network. This module bounds what
ends up in log records so a malformed or oversized frame cannot flood them.
"""

from __future__ import annotations


def preview_for_log(value: str | bytes | bytearray, *, max_string: int = 200) -> str:
    """Return *value* as text, truncated to *max_string* characters."""
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8", errors="replace")
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value
