"""Tests for VersionService."""

from __future__ import annotations

from archctl.infrastructure.workspace import Workspace
from archctl.services.version import VersionService


class TestFork:
    def test_fork_active(self, workspace: Workspace) -> None:
        result = VersionService(workspace).fork()
        assert result.ok
        assert result.op == "fork"
        d = result.data
        assert d["changed"] is True
        assert d["source_id"] == "arr-legacy"
        assert d["id"] == "arr-0001"
        assert d["name"] == "Legacy On-Premise (Fork)"
        assert d["version_label"] == "v1.0-Legacy-Baseline.1"
        assert d["active_id"] == "arr-0001"
        assert workspace.state.active_id == "arr-0001"
        assert workspace.dirty

    def test_fork_named_source(self, workspace: Workspace) -> None:
        result = VersionService(workspace).fork("arr-cloud")
        assert result.data["source_id"] == "arr-cloud"
        forked = workspace.state.get(result.data["id"])
        assert forked is not None and forked.parent_id == "arr-cloud"

    def test_unknown_source(self, workspace: Workspace) -> None:
        before = workspace.state
        result = VersionService(workspace).fork("ghost")
        assert result.ok
        assert result.data["changed"] is False
        assert result.data["id"] is None
        assert "ghost" in result.warnings[0]
        assert workspace.state is before
        assert not workspace.dirty


class TestToggleService:
    def test_remove(self, workspace: Workspace) -> None:
        result = VersionService(workspace).toggle_service("svc-onprem-backup")
        assert result.ok
        assert result.data["changed"] is True
        assert result.data["action"] == "removed"
        assert result.data["arrangement_id"] == "arr-legacy"
        assert result.data["service_count"] == 2

    def test_add(self, workspace: Workspace) -> None:
        result = VersionService(workspace).toggle_service("cloud_backup_DR", "arr-legacy")
        assert result.data["action"] == "added"
        assert result.data["service_count"] == 4

    def test_not_in_catalog(self, workspace: Workspace) -> None:
        result = VersionService(workspace).toggle_service("svc-ghost")
        assert result.ok
        assert result.data["changed"] is False
        assert "not in the catalog" in result.warnings[0]

    def test_unknown_arrangement(self, workspace: Workspace) -> None:
        result = VersionService(workspace).toggle_service("cloud_backup_DR", "ghost")
        assert result.data["changed"] is False
        assert "Arrangement 'ghost' not found" in result.warnings[0]


class TestUpdateHypothesis:
    def test_update(self, workspace: Workspace) -> None:
        result = VersionService(workspace).update_hypothesis("Hybrid wins.", "arr-cloud")
        assert result.ok
        assert result.data == {
            "changed": True,
            "arrangement_id": "arr-cloud",
            "hypothesis": "Hybrid wins.",
        }
        arr = workspace.state.get("arr-cloud")
        assert arr is not None and arr.container.hypothesis == "Hybrid wins."

    def test_unknown_arrangement(self, workspace: Workspace) -> None:
        result = VersionService(workspace).update_hypothesis("x", "ghost")
        assert result.data["changed"] is False
        assert result.warnings

    def test_same_text_unchanged(self, workspace: Workspace) -> None:
        service = VersionService(workspace)
        service.update_hypothesis("Hybrid wins.", "arr-cloud")
        before = workspace.state
        result = service.update_hypothesis("Hybrid wins.", "arr-cloud")
        assert result.ok
        assert result.data == {"changed": False, "arrangement_id": "arr-cloud"}
        assert result.warnings == []
        assert workspace.state is before


class TestCycleStatus:
    def test_cycle(self, workspace: Workspace) -> None:
        result = VersionService(workspace).cycle_status("human_consistency_review", "arr-cloud")
        assert result.ok
        assert result.data["previous"] == "CONFLICT"
        assert result.data["status"] == "UNCERTAIN"

    def test_service_not_in_arrangement(self, workspace: Workspace) -> None:
        result = VersionService(workspace).cycle_status("cloud_backup_DR")
        assert result.data["changed"] is False
        assert "not in arrangement 'arr-legacy'" in result.warnings[0]

    def test_fork_isolation(self, workspace: Workspace) -> None:
        versions = VersionService(workspace)
        new_id = versions.fork("arr-cloud").data["id"]
        versions.cycle_status("cloud_backup_DR", new_id)
        source = workspace.state.get("arr-cloud")
        assert source is not None
        svc = source.find_service("cloud_backup_DR")
        assert svc is not None and svc.evaluation_status == "VALIDATED"


class TestActivate:
    def test_activate(self, workspace: Workspace) -> None:
        result = VersionService(workspace).activate("arr-cloud")
        assert result.ok
        assert result.data == {"changed": True, "id": "arr-cloud", "previous": "arr-legacy"}
        assert result.warnings == []

    def test_already_active(self, workspace: Workspace) -> None:
        result = VersionService(workspace).activate("arr-legacy")
        assert result.data["changed"] is False
        assert result.warnings == []

    def test_unknown(self, workspace: Workspace) -> None:
        result = VersionService(workspace).activate("ghost")
        assert result.ok
        assert result.data["changed"] is False
        assert result.data["id"] == "arr-legacy"
        assert "ghost" in result.warnings[0]
