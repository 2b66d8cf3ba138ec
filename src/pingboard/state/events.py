"""Decoded feed messages.

The receive path turns every inbound frame into one of these variants. Only
the state store is allowed to merge them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from pingboard.models.status import ApplicationStatus


class Snapshot(BaseModel):
    """Complete replacement set of statuses."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["snapshot"] = "snapshot"
    statuses: tuple[ApplicationStatus, ...] = ()

    @field_validator("statuses")
    @classmethod
    def _unique_apps(cls, value: tuple[ApplicationStatus, ...]) -> tuple[ApplicationStatus, ...]:
        seen: set[str] = set()
        for status in value:
            if status.app in seen:
                raise ValueError(f"duplicate app in snapshot: {status.app!r}")
            seen.add(status.app)
        return value


class Delta(BaseModel):
    """Single-application status update."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["delta"] = "delta"
    status: ApplicationStatus


StatusMessage = Snapshot | Delta
