"""Tests for the application status model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pingboard.models.status import ApplicationStatus


class TestApplicationStatus:
    def test_wire_keys_map_to_fields(self) -> None:
        status = ApplicationStatus.model_validate({"app": "svc-a", "isOk": True})

        assert status.app == "svc-a"
        assert status.is_ok is True
        assert status.label == "RUNNING"

    def test_down_label(self) -> None:
        assert ApplicationStatus.model_validate({"app": "svc-a", "isOk": False}).label == "DOWN"

    def test_from_fields(self) -> None:
        status = ApplicationStatus.from_fields("svc-a", False, region="eu")

        assert status.is_ok is False
        assert status.to_wire() == {"app": "svc-a", "isOk": False, "region": "eu"}

    def test_python_field_name_is_not_a_wire_key(self) -> None:
        with pytest.raises(ValidationError):
            ApplicationStatus.model_validate({"app": "svc-a", "is_ok": False})

    def test_to_wire_keeps_original_payload(self) -> None:
        payload = {"app": "svc-a", "isOk": True, "statusURL": "http://svc-a/health", "raw": "opaque"}

        status = ApplicationStatus.model_validate(payload)

        assert status.to_wire() == payload

    def test_frozen(self) -> None:
        status = ApplicationStatus.model_validate({"app": "svc-a", "isOk": True})

        with pytest.raises(ValidationError):
            status.is_ok = False  # type: ignore[misc]

    def test_value_equality(self) -> None:
        a = ApplicationStatus.model_validate({"app": "svc-a", "isOk": True})
        b = ApplicationStatus.model_validate({"app": "svc-a", "isOk": True})

        assert a == b

    @pytest.mark.parametrize(
        "payload",
        [
            {"app": "svc-a"},
            {"isOk": True},
            {"app": "  ", "isOk": True},
            {"app": "svc-a", "isOk": "true"},
            {"app": None, "isOk": True},
        ],
    )
    def test_invalid_payloads_rejected(self, payload: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            ApplicationStatus.model_validate(payload)
