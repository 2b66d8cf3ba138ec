"""Decode raw feed frames into tagged messages.

The feed carries two untagged shapes on one endpoint: a JSON array is a
full snapshot, a JSON object is a single delta. Shape detection happens
here once, so downstream code only ever sees :class:`Snapshot` or
:class:`Delta`.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from pingboard._preview import preview_for_log
from pingboard.exceptions import DecodeError
from pingboard.models.status import ApplicationStatus
from pingboard.state.events import Delta, Snapshot, StatusMessage


def _as_text(raw: str | bytes | bytearray) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return bytes(raw).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError("Frame is not valid UTF-8", payload=preview_for_log(raw)) from exc


def parse_message(parsed: Any) -> StatusMessage:
    """Build a tagged message from already-parsed JSON."""
    try:
        if isinstance(parsed, list):
            return Snapshot.model_validate({"statuses": parsed})
        if isinstance(parsed, dict):
            return Delta(status=ApplicationStatus.model_validate(parsed))
    except ValidationError as exc:
        raise DecodeError(
            f"Message does not match the status shape: {exc.error_count()} error(s)",
            payload=preview_for_log(json.dumps(parsed, default=str)),
        ) from exc

    raise DecodeError(
        f"Expected a JSON array or object, got {type(parsed).__name__}",
        payload=preview_for_log(json.dumps(parsed, default=str)),
    )


def decode_message(raw: str | bytes | bytearray) -> StatusMessage:
    """Decode one frame; raises :class:`DecodeError` on anything unrecognised."""
    text = _as_text(raw)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Frame is not valid JSON: {exc.msg}", payload=preview_for_log(text)) from exc
    return parse_message(parsed)
