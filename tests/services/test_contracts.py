"""Tests for service payload contracts."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from archctl.services.contracts import (
    ForkData,
    LineageTreeData,
    ToggleServiceData,
    dump_validated,
    service_item,
)
from tests.conftest import make_service


class TestDumpValidated:
    def test_normalizes_payload(self) -> None:
        data = dump_validated(
            ForkData, {"changed": False, "source_id": "arr-legacy", "active_id": "arr-legacy"}
        )
        assert data["id"] is None
        assert data["changed"] is False

    def test_rejects_missing_key(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(ForkData, {"changed": True})

    def test_rejects_unknown_action(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(
                ToggleServiceData,
                {"changed": True, "arrangement_id": "a", "service_id": "s", "action": "moved"},
            )

    def test_recursive_lineage(self) -> None:
        data = dump_validated(
            LineageTreeData,
            {
                "count": 2,
                "roots": ["a"],
                "tree": [
                    {
                        "id": "a",
                        "name": "A",
                        "version_label": "v1",
                        "children": [{"id": "b", "name": "B", "version_label": "v1.1"}],
                    }
                ],
            },
        )
        assert data["tree"][0]["children"][0]["children"] == []


class TestItems:
    def test_service_item_extra(self) -> None:
        item = service_item(make_service("s1", "Cost"), in_arrangement=True)
        assert item["type"] == "API"
        assert item["evaluation_status"] == "VALIDATED"
        assert item["in_arrangement"] is True
