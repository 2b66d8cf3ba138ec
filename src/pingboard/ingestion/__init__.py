"""Ingestion layer.

This package turns raw frames received from the status feed into decoded
messages for the state store.
"""

from pingboard.ingestion.decode import decode_message, parse_message

__all__ = [
    "decode_message",
    "parse_message",
]
