"""pingboard - Live dashboard client for a pinger status feed."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pingboard")
except PackageNotFoundError:
    __version__ = "0+local"
from pingboard.client import StreamClient
from pingboard.config import DashboardConfig
from pingboard.exceptions import (
    CleanupError,
    DecodeError,
    PingboardConfigError,
    PingboardError,
    TransportError,
)
from pingboard.models import ApplicationStatus
from pingboard.state import LOADING, Delta, Snapshot, StateStore
from pingboard.view import ConsoleMount, RecordingMount, StatusRow, View

__all__ = [
    "__version__",
    "ApplicationStatus",
    "CleanupError",
    "ConsoleMount",
    "DashboardConfig",
    "DecodeError",
    "Delta",
    "LOADING",
    "PingboardConfigError",
    "PingboardError",
    "RecordingMount",
    "Snapshot",
    "StateStore",
    "StatusRow",
    "StreamClient",
    "TransportError",
    "View",
]
