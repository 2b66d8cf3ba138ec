"""Application status model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


class ApplicationStatus(BaseModel):
    """Latest known status of one monitored application.

    Validation only accepts the wire keys (``app``, ``isOk``). Every other
    key is kept as an extra field, whatever its name, and never interpreted.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
    )

    app: StrictStr
    """Application identifier, unique within a collection."""

    is_ok: StrictBool = Field(alias="isOk")
    """``True`` when the application is running."""

    @classmethod
    def from_fields(cls, app: str, is_ok: bool, **extra: Any) -> ApplicationStatus:
        """Build a status from Python values; *extra* holds wire-named extras."""
        return cls.model_validate({**extra, "app": app, "isOk": is_ok})

    @property
    def label(self) -> str:
        return "RUNNING" if self.is_ok else "DOWN"

    @field_validator("app")
    @classmethod
    def _require_app(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("app must be non-empty")
        return value

    def to_wire(self) -> dict[str, Any]:
        """Return the status in its wire shape, extra fields included."""
        return self.model_dump(by_alias=True)
