"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from archctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="fork", data={"id": "arr-0001"})
        assert result.ok is True
        assert result.op == "fork"
        assert result.data == {"id": "arr-0001"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="Arrangement 'x' not found")
        result = ServiceResult(ok=False, op="get_arrangement", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="activate",
            data={"id": "arr-cloud"},
            warnings=["something"],
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["id"] == "arr-cloud"
        assert parsed["warnings"] == ["something"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
