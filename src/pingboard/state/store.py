"""In-memory status store.

This is the only component allowed to merge decoded feed messages.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Final, TypeAlias

from pingboard.models.status import ApplicationStatus
from pingboard.state.events import Delta, Snapshot, StatusMessage

_logger = logging.getLogger(__name__)


class _Loading:
    """Sentinel for "no collection received yet"."""

    _instance: _Loading | None = None

    def __new__(cls) -> _Loading:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "LOADING"

    def __bool__(self) -> bool:
        return False


LOADING: Final = _Loading()

StatusCollection: TypeAlias = tuple[ApplicationStatus, ...]
ClientState: TypeAlias = StatusCollection | _Loading
Listener: TypeAlias = Callable[[ClientState], None]


def _upsert(collection: StatusCollection, status: ApplicationStatus) -> StatusCollection:
    """Replace the entry with the same ``app`` in place, or append."""
    for index, existing in enumerate(collection):
        if existing.app == status.app:
            return (*collection[:index], status, *collection[index + 1 :])
    return (*collection, status)


class StateStore:
    """Owns the client state and reconciles decoded messages into it.

    Subscribers are notified synchronously once per applied message. The
    relative order in which subscribers are called is not part of the
    contract.
    """

    def __init__(self) -> None:
        self._state: ClientState = LOADING
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def is_ready(self) -> bool:
        """Whether at least one message has been applied."""
        return self._state is not LOADING

    def get(self, app: str) -> ApplicationStatus | None:
        """Current status for *app*, if known."""
        if self._state is LOADING:
            return None
        for status in self._state:
            if status.app == app:
                return status
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that removes it again."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def apply_message(self, message: StatusMessage) -> ClientState:
        """Reconcile *message* into the collection and notify subscribers.

        A snapshot replaces the collection verbatim. A delta upserts its
        status: existing keys keep their position, new keys are appended.
        A delta before any snapshot starts from an empty collection.
        """
        current: StatusCollection = () if self._state is LOADING else self._state

        if isinstance(message, Snapshot):
            updated: StatusCollection = tuple(message.statuses)
            _logger.debug("Applied snapshot with %d statuses", len(updated))
        elif isinstance(message, Delta):
            updated = _upsert(current, message.status)
            _logger.debug("Applied delta app=%s is_ok=%s", message.status.app, message.status.is_ok)
        else:
            raise TypeError(f"Unsupported message type: {type(message).__name__}")

        # Publish only once the new collection is complete.
        self._state = updated
        self._notify()
        return updated

    def _notify(self) -> None:
        state = self._state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.warning("State listener %r failed", listener, exc_info=True)
