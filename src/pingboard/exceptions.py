"""Custom exception hierarchy for pingboard."""

from __future__ import annotations


class PingboardError(Exception):
    """Base exception for all pingboard errors."""


class PingboardConfigError(PingboardError):
    """Invalid or missing configuration."""


class DecodeError(PingboardError):
    """Inbound payload is not JSON or not a snapshot/delta shape.

    The receive loop logs and drops the message; state and view are left
    untouched.
    """

    def __init__(self, message: str, *, payload: str = "") -> None:
        self.payload = payload
        super().__init__(message)


class TransportError(PingboardError):
    """Connection failed to open or dropped with an error."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class CleanupError(PingboardError):
    """Closing the connection failed during shutdown."""
