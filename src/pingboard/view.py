"""Rendering of the status collection.

:class:`View` is a pure function of the client state. Every render replaces
the whole content of its mount; nothing is patched incrementally.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final, Protocol, TypeAlias

from pydantic import BaseModel, ConfigDict
from rich.console import Console, RenderableType
from rich.live import Live
from rich.table import Table
from rich.text import Text

from pingboard.models.status import ApplicationStatus
from pingboard.state.store import LOADING, ClientState, StateStore

_logger = logging.getLogger(__name__)

LOADING_TEXT: Final = "Loading..."

_CSS_CLASSES: Final = {True: "green", False: "red"}
_GLYPHS: Final = {True: "🚀", False: "❌"}


class StatusRow(BaseModel):
    """Displayed data for one application."""

    model_config = ConfigDict(frozen=True)

    app: str
    label: str
    css_class: str
    glyph: str

    @classmethod
    def from_status(cls, status: ApplicationStatus) -> StatusRow:
        return cls(
            app=status.app,
            label=status.label,
            css_class=_CSS_CLASSES[status.is_ok],
            glyph=_GLYPHS[status.is_ok],
        )


class LoadingIndicator(BaseModel):
    """Shown until the first collection arrives."""

    model_config = ConfigDict(frozen=True)

    text: str = LOADING_TEXT


Rendered: TypeAlias = LoadingIndicator | tuple[StatusRow, ...]


class Mount(Protocol):
    """Render target fully owned by one view."""

    def replace(self, content: Rendered) -> None:
        ...


class RecordingMount:
    """Mount that keeps the most recent content in memory."""

    def __init__(self) -> None:
        self.content: Rendered | None = None
        self.renders = 0

    def replace(self, content: Rendered) -> None:
        self.content = content
        self.renders += 1


def to_renderable(content: Rendered) -> RenderableType:
    """Build the rich renderable for *content*."""
    if isinstance(content, LoadingIndicator):
        return Text(content.text, style="bold")

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("app")
    table.add_column("status")
    table.add_column("icon")
    for row in content:
        table.add_row(row.app, Text(f"({row.label})", style=row.css_class), row.glyph)
    return table


class ConsoleMount:
    """Terminal mount backed by :class:`rich.live.Live`.

    Use as a context manager around the lifetime of the dashboard.
    """

    def __init__(self, console: Console | None = None, *, refresh_per_second: float = 4) -> None:
        self._console = console or Console()
        self._live = Live(
            Text(LOADING_TEXT, style="bold"),
            console=self._console,
            refresh_per_second=refresh_per_second,
            auto_refresh=False,
        )

    def __enter__(self) -> ConsoleMount:
        self._live.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._live.stop()

    def replace(self, content: Rendered) -> None:
        self._live.update(to_renderable(content), refresh=True)


def build(state: ClientState) -> Rendered:
    """Compute the displayed content for *state*."""
    if state is LOADING:
        return LoadingIndicator()
    return tuple(StatusRow.from_status(status) for status in state)


class View:
    """Rebuilds the mount content from the client state on every render."""

    def __init__(self, mount: Mount) -> None:
        self._mount = mount

    def render(self, state: ClientState) -> Rendered:
        content = build(state)
        self._mount.replace(content)
        if isinstance(content, LoadingIndicator):
            _logger.debug("Rendered loading indicator")
        else:
            _logger.debug("Rendered %d rows", len(content))
        return content

    def attach(self, store: StateStore) -> Callable[[], None]:
        """Subscribe to *store* and render its current state right away."""
        unsubscribe = store.subscribe(self.render)
        self.render(store.state)
        return unsubscribe
