"""Pydantic models for the status feed."""

from pingboard.models.status import ApplicationStatus

__all__ = [
    "ApplicationStatus",
]
