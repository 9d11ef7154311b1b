"""Tests for LineageService."""

from __future__ import annotations

from archctl.infrastructure.workspace import Workspace
from archctl.services.lineage import LineageService
from archctl.services.version import VersionService


def _fork_chain(workspace: Workspace) -> str:
    versions = VersionService(workspace)
    first = versions.fork("arr-cloud").data["id"]
    return versions.fork(first).data["id"]


class TestTree:
    def test_scenario(self, workspace: Workspace) -> None:
        result = LineageService(workspace).tree()
        assert result.ok
        assert result.op == "lineage_tree"
        assert result.data["roots"] == ["arr-legacy"]
        root = result.data["tree"][0]
        assert root["children"][0]["id"] == "arr-cloud"
        assert root["children"][0]["children"] == []

    def test_after_forks(self, workspace: Workspace) -> None:
        leaf = _fork_chain(workspace)
        result = LineageService(workspace).tree()
        assert result.data["count"] == 4
        cloud = result.data["tree"][0]["children"][0]
        assert cloud["children"][0]["children"][0]["id"] == leaf


class TestAncestors:
    def test_chain(self, workspace: Workspace) -> None:
        leaf = _fork_chain(workspace)
        result = LineageService(workspace).ancestors(leaf)
        assert result.ok
        assert [i["id"] for i in result.data["items"]] == ["arr-0001", "arr-cloud", "arr-legacy"]
        assert [i["depth"] for i in result.data["items"]] == [2, 1, 0]

    def test_defaults_to_active(self, workspace: Workspace) -> None:
        result = LineageService(workspace).ancestors()
        assert result.data["id"] == "arr-legacy"
        assert result.data["count"] == 0

    def test_not_found(self, workspace: Workspace) -> None:
        result = LineageService(workspace).ancestors("ghost")
        assert not result.ok
        assert result.op == "ancestors"


class TestDescendants:
    def test_descendants(self, workspace: Workspace) -> None:
        leaf = _fork_chain(workspace)
        result = LineageService(workspace).descendants("arr-legacy")
        assert [i["id"] for i in result.data["items"]] == ["arr-cloud", "arr-0001", leaf]

    def test_not_found(self, workspace: Workspace) -> None:
        result = LineageService(workspace).descendants("ghost")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
