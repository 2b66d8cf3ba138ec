"""State/store layer.

This package is the single source of truth for how decoded feed messages
are merged into the collection of application statuses.
"""

from pingboard.state.events import Delta, Snapshot, StatusMessage
from pingboard.state.store import LOADING, ClientState, StateStore, StatusCollection

__all__ = [
    "LOADING",
    "ClientState",
    "Delta",
    "Snapshot",
    "StateStore",
    "StatusCollection",
    "StatusMessage",
]
