"""Command-line entry point for the live dashboard.

Usage::

    pingboard --origin http://localhost:9111          # live dashboard
    pingboard --origin https://status.example --status  # print once and exit
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys

from rich.console import Console

from pingboard._transport import Transport
from pingboard.client import StreamClient
from pingboard.config import DashboardConfig
from pingboard.exceptions import PingboardError
from pingboard.state.store import LOADING, StateStore
from pingboard.view import ConsoleMount, View, build, to_renderable

LOG = logging.getLogger("pingboard")

EXIT_ALL_RUNNING = 0
EXIT_SOME_DOWN = 1
EXIT_NO_DATA = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pingboard", description="Live dashboard for a pinger status feed.")
    parser.add_argument(
        "--origin",
        default=None,
        help="URL the dashboard is served from (default: $PINGBOARD_ORIGIN or http://localhost:9111)",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Print the first received statuses and exit (non-zero when any app is down).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Seconds to wait for data in --status mode (default: 10)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


async def watch(config: DashboardConfig) -> None:
    """Render the feed until the server closes it or the task is cancelled."""
    store = StateStore()
    with ConsoleMount() as mount:
        View(mount).attach(store)
        async with StreamClient(config, store) as client:
            await client.listen()
    LOG.info("Status feed closed by server")


async def status_once(
    config: DashboardConfig,
    *,
    timeout: float,
    console: Console | None = None,
    transport: Transport | None = None,
) -> int:
    """Print the first state received from the feed and return an exit code."""
    console = console or Console()
    store = StateStore()
    async with StreamClient(config, store, transport=transport) as client:
        listener = asyncio.create_task(client.listen())
        try:
            state = await client.wait_ready(timeout)
        except TimeoutError:
            LOG.warning("No status data received within %.1fs", timeout)
            return EXIT_NO_DATA
        finally:
            listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await listener

    if state is LOADING:
        LOG.warning("Status feed closed before any data arrived")
        return EXIT_NO_DATA
    console.print(to_renderable(build(state)))
    return EXIT_ALL_RUNNING if all(status.is_ok for status in state) else EXIT_SOME_DOWN


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {"origin": args.origin} if args.origin else {}
    try:
        config = DashboardConfig.from_env(**overrides)
        if args.status:
            return asyncio.run(status_once(config, timeout=args.timeout))
        asyncio.run(watch(config))
    except PingboardError as exc:
        LOG.error("%s", exc)
        return EXIT_NO_DATA
    except KeyboardInterrupt:
        pass
    return EXIT_ALL_RUNNING


if __name__ == "__main__":
    sys.exit(main())
