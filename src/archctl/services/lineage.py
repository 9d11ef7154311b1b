"""LineageService — fork ancestry over the arrangement forest.

Read-only. Uses ``self._workspace.lineage`` (a NetworkX graph rebuilt
from the current state on each access).
"""

from __future__ import annotations

from archctl.services.base import BaseService
from archctl.services.contracts import (
    LineageListData,
    LineageTreeData,
    arrangement_item,
    dump_validated,
)
from archctl.services.result import ServiceResult
from archctl.services.telemetry import traced


class LineageService(BaseService):
    """Parent/child queries over forks."""

    @traced
    def tree(self) -> ServiceResult:
        """Every root with its forks nested beneath it."""
        lineage = self._workspace.lineage
        roots = lineage.roots()
        data = dump_validated(
            LineageTreeData,
            {
                "count": len(self._workspace.state.arrangements),
                "roots": roots,
                "tree": lineage.tree(),
            },
        )
        return ServiceResult(ok=True, op="lineage_tree", data=data)

    @traced
    def ancestors(self, arrangement_id: str | None = None) -> ServiceResult:
        """Parent chain of an arrangement, nearest first."""
        return self._related("ancestors", arrangement_id)

    @traced
    def descendants(self, arrangement_id: str | None = None) -> ServiceResult:
        """All forks derived from an arrangement, breadth-first."""
        return self._related("descendants", arrangement_id)

    def _related(self, op: str, arrangement_id: str | None) -> ServiceResult:
        target = self._target_id(arrangement_id)
        lineage = self._workspace.lineage
        if target not in lineage:
            return self._not_found(op, "arrangement", target)

        ids = lineage.ancestors(target) if op == "ancestors" else lineage.descendants(target)
        state = self._workspace.state
        items = []
        for node_id in ids:
            arr = state.get(node_id)
            assert arr is not None
            items.append(
                arrangement_item(arr, active_id=state.active_id, depth=lineage.depth(node_id))
            )
        data = dump_validated(LineageListData, {"id": target, "count": len(items), "items": items})
        return ServiceResult(ok=True, op=op, data=data)
