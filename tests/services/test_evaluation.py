"""Tests for EvaluationService."""

from __future__ import annotations

from archctl.infrastructure.workspace import Workspace
from archctl.services.evaluation import EvaluationService
from archctl.services.telemetry import enable_telemetry
from archctl.services.version import VersionService


class TestRules:
    def test_active_arrangement(self, workspace: Workspace) -> None:
        result = EvaluationService(workspace).rules()
        assert result.ok
        assert result.op == "evaluate_rules"
        assert result.data["arrangement_id"] == "arr-legacy"
        assert result.data["count"] == 4
        statuses = {i["id"]: i["status"] for i in result.data["items"]}
        assert statuses == {
            "r_cost": "NOT_EVALUABLE",
            "r_dr": "SATISFIED",
            "r_comp": "SATISFIED",
            "r_valid": "VIOLATED",
        }
        assert result.data["summary"] == {"SATISFIED": 2, "VIOLATED": 1, "NOT_EVALUABLE": 1}

    def test_reflects_status_change(self, workspace: Workspace) -> None:
        svc = EvaluationService(workspace)
        before = {i["id"]: i["status"] for i in svc.rules("arr-cloud").data["items"]}
        assert before["r_dr"] == "SATISFIED"
        VersionService(workspace).cycle_status("cloud_backup_DR", "arr-cloud")
        after = {i["id"]: i["status"] for i in svc.rules("arr-cloud").data["items"]}
        assert after["r_dr"] == "VIOLATED"

    def test_not_found(self, workspace: Workspace) -> None:
        result = EvaluationService(workspace).rules("nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_telemetry_annotations(self, workspace: Workspace) -> None:
        enable_telemetry()
        result = EvaluationService(workspace).rules("arr-cloud")
        assert result.meta is not None
        span = result.meta["telemetry"]["children"][0]
        assert span["name"] == "evaluate"
        assert span["annotations"] == {"rules": 5, "services": 4}


class TestCompare:
    def test_two_sides(self, workspace: Workspace) -> None:
        result = EvaluationService(workspace).compare("arr-legacy", "arr-cloud")
        assert result.ok
        d = result.data
        assert d["a"]["id"] == "arr-legacy"
        assert d["b"]["id"] == "arr-cloud"
        assert len(d["unique_to_a"]) == 3
        assert len(d["unique_to_b"]) == 4
        assert d["common"] == []
        assert len(d["rules_a"]) == 4
        assert len(d["rules_b"]) == 5
        assert [c["id"] for c in d["candidates"]] == ["arr-cloud"]

    def test_defaults_a_to_active(self, workspace: Workspace) -> None:
        result = EvaluationService(workspace).compare(b_id="arr-cloud")
        assert result.data["a"]["id"] == "arr-legacy"

    def test_without_target(self, workspace: Workspace) -> None:
        result = EvaluationService(workspace).compare("arr-cloud")
        assert result.ok
        d = result.data
        assert d["b"] is None
        assert d["unique_to_a"] == d["unique_to_b"] == d["common"] == []
        assert d["rules_a"] == d["rules_b"] == []
        assert [c["id"] for c in d["candidates"]] == ["arr-legacy"]
        assert result.warnings == []

    def test_unknown_target_warns(self, workspace: Workspace) -> None:
        result = EvaluationService(workspace).compare("arr-cloud", "ghost")
        assert result.ok
        assert result.data["b"] is None
        assert "ghost" in result.warnings[0]

    def test_unknown_a(self, workspace: Workspace) -> None:
        result = EvaluationService(workspace).compare("ghost", "arr-cloud")
        assert not result.ok
        assert result.error is not None
        assert result.error.detail == {"arrangement": "ghost"}

    def test_divergence_after_fork(self, workspace: Workspace) -> None:
        versions = VersionService(workspace)
        new_id = versions.fork("arr-cloud").data["id"]
        versions.cycle_status("human_consistency_review", new_id)
        d = EvaluationService(workspace).compare("arr-cloud", new_id).data
        assert len(d["common"]) == 4
        assert d["status_divergence"] == [
            {
                "service_id": "human_consistency_review",
                "name": "Clinical Consistency Review",
                "status_a": "CONFLICT",
                "status_b": "UNCERTAIN",
            }
        ]
