"""Async client for the live status feed."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from pingboard._transport import Transport, WebSocketTransport
from pingboard.config import DashboardConfig
from pingboard.exceptions import DecodeError, PingboardError
from pingboard.ingestion.decode import decode_message
from pingboard.state.events import StatusMessage
from pingboard.state.store import ClientState, StateStore

_logger = logging.getLogger(__name__)


class StreamClient:
    """Owns one feed connection and forwards every frame to a store.

    Usage::

        store = StateStore()
        View(ConsoleMount()).attach(store)
        async with StreamClient(DashboardConfig(), store) as client:
            await client.listen()
    """

    def __init__(
        self,
        config: DashboardConfig,
        store: StateStore,
        *,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._transport = transport
        self._external_session = session is not None
        self._http_session = session
        self._connected = False
        self._ready = asyncio.Event()
        self._stream_ended = asyncio.Event()
        store.subscribe(self._on_state)

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def is_connected(self) -> bool:
        return self._connected

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> StreamClient:
        try:
            await self.connect()
        except BaseException:
            await self._close_http_session()
            raise
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.shutdown()
        await self._close_http_session()

    async def _close_http_session(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = WebSocketTransport(self._http_session, heartbeat=self._config.heartbeat)
        return self._transport

    async def connect(self) -> None:
        """Open the feed connection at the endpoint derived from the config."""
        if self._connected:
            raise PingboardError("Stream client is already connected")
        url = self._config.endpoint_url()
        transport = self._require_transport()
        await transport.open(url)
        self._stream_ended.clear()
        self._connected = True
        _logger.info("Connected to status feed at %s", url)

    async def shutdown(self) -> None:
        """Close the connection; errors while closing are swallowed."""
        if not self._connected:
            return
        self._connected = False
        transport = self._transport
        if transport is None:
            return
        try:
            await transport.close()
        except Exception:
            _logger.debug("Feed connection close failed", exc_info=True)
        _logger.debug("Feed connection closed")

    # ------------------------------------------------------------------
    # Receiving
    # ------------------------------------------------------------------

    def on_message(self, raw: str | bytes) -> StatusMessage:
        """Decode one frame and apply it to the store.

        Raises :class:`DecodeError` when the frame is not a snapshot or
        delta; the store is left untouched in that case.
        """
        message = decode_message(raw)
        self._store.apply_message(message)
        return message

    async def listen(self) -> None:
        """Process inbound frames until the server closes the stream.

        Malformed frames are logged and dropped.
        """
        if not self._connected:
            raise PingboardError("Stream client is not connected. Use 'async with StreamClient(...) as client:'")
        transport = self._require_transport()
        try:
            async for raw in transport.messages():
                try:
                    self.on_message(raw)
                except DecodeError as exc:
                    _logger.warning("Dropping malformed feed message: %s payload=%r", exc, exc.payload)
        finally:
            self._stream_ended.set()

    async def wait_ready(self, timeout: float | None = None) -> ClientState:
        """Wait until the first message has been applied and return the state.

        Returns early with ``LOADING`` when :meth:`listen` ends before any
        message was applied. Raises :class:`TimeoutError` when neither
        happens within *timeout*.
        """
        if self._store.is_ready:
            return self._store.state
        ready = asyncio.ensure_future(self._ready.wait())
        ended = asyncio.ensure_future(self._stream_ended.wait())
        try:
            done, _ = await asyncio.wait({ready, ended}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            ready.cancel()
            ended.cancel()
        if not done:
            raise TimeoutError(f"No status data within {timeout}s")
        return self._store.state

    def _on_state(self, _state: ClientState) -> None:
        self._ready.set()
