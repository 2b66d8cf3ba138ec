"""Websocket transport for the status feed."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Protocol

import aiohttp

from pingboard.exceptions import CleanupError, TransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the stream client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`WebSocketTransport`) concrete.
    """

    async def open(self, url: str) -> None:
        ...

    def messages(self) -> AsyncIterator[str | bytes]:
        ...

    async def close(self) -> None:
        ...


class WebSocketTransport:
    """aiohttp websocket connection yielding inbound text/binary frames."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        heartbeat: float | None = None,
    ) -> None:
        self._http = http_session
        self._heartbeat = heartbeat
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._url = ""

    @property
    def is_open(self) -> bool:
        return self._ws is not None and not self._ws.closed

    async def open(self, url: str) -> None:
        _logger.debug("Opening websocket %s", url)
        self._url = url
        try:
            self._ws = await self._http.ws_connect(url, heartbeat=self._heartbeat)
        except (aiohttp.ClientError, OSError) as exc:
            raise TransportError(f"Connection to {url} failed: {exc}", endpoint=url) from exc
        _logger.debug("Websocket connected %s", url)

    async def messages(self) -> AsyncIterator[str | bytes]:
        ws = self._ws
        if ws is None:
            raise TransportError("Websocket is not open", endpoint=self._url)
        async for msg in ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                yield msg.data
            elif msg.type == aiohttp.WSMsgType.BINARY:
                yield msg.data
            elif msg.type == aiohttp.WSMsgType.ERROR:
                raise TransportError(f"Websocket error: {ws.exception()}", endpoint=self._url)
        _logger.debug("Websocket closed by peer code=%s", ws.close_code)

    async def close(self) -> None:
        ws = self._ws
        self._ws = None
        if ws is None or ws.closed:
            return
        try:
            await ws.close()
        except (aiohttp.ClientError, OSError) as exc:
            raise CleanupError(f"Closing {self._url} failed: {exc}") from exc
