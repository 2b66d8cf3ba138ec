"""Client configuration for pingboard."""

from __future__ import annotations

import dataclasses
import os
from typing import Any
from urllib.parse import urlsplit

from pingboard.exceptions import PingboardConfigError

_SECURE_SCHEMES = frozenset({"https", "wss"})


@dataclasses.dataclass(frozen=True)
class DashboardConfig:
    """Client configuration.

    Parameters
    ----------
    origin : str
        URL of the page the dashboard is served from. Its scheme picks the
        websocket scheme (``https`` → ``wss``) and its host (with port)
        becomes the feed host.
    path : str
        Fixed path of the status feed on that host.
    heartbeat : float or None
        Seconds between websocket ping frames. ``None`` disables pings.
    """

    origin: str = "http://localhost:9111"
    path: str = "/ws"
    heartbeat: float | None = None

    @property
    def is_secure(self) -> bool:
        """Whether the origin was loaded over a secure scheme."""
        return urlsplit(self.origin).scheme.lower() in _SECURE_SCHEMES

    def endpoint_url(self) -> str:
        """Derive the websocket endpoint from the origin and fixed path."""
        parts = urlsplit(self.origin)
        if not parts.scheme or not parts.netloc:
            raise PingboardConfigError(f"Origin must include a scheme and host: {self.origin!r}")
        scheme = "wss" if self.is_secure else "ws"
        path = self.path if self.path.startswith("/") else f"/{self.path}"
        return f"{scheme}://{parts.netloc}{path}"

    @classmethod
    def from_env(cls, **overrides: Any) -> DashboardConfig:
        """Create configuration from ``PINGBOARD_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "PINGBOARD_ORIGIN": "origin",
            "PINGBOARD_PATH": "path",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        heartbeat_env = env.get("PINGBOARD_HEARTBEAT")
        if heartbeat_env is not None and "heartbeat" not in overrides:
            try:
                heartbeat = float(heartbeat_env)
            except ValueError as exc:
                raise PingboardConfigError(f"PINGBOARD_HEARTBEAT is not a number: {heartbeat_env!r}") from exc
            config_kwargs["heartbeat"] = heartbeat if heartbeat > 0 else None

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
