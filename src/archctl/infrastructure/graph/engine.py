"""LineageGraph — NetworkX view of fork relationships.

Built from an ArrangementState on demand, never cached across state
changes: a new state means a new graph. Edges point parent -> child.
At workspace scale (tens of arrangements) a rebuild is negligible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import networkx as nx

if TYPE_CHECKING:
    from archctl.domain.models import ArrangementState

type _Graph = nx.DiGraph


class LineageGraph:
    """Read-only lineage queries over one state snapshot."""

    def __init__(self, state: ArrangementState) -> None:
        self._order = state.ids()
        self._graph: _Graph = self._build(state)

    @staticmethod
    def _build(state: ArrangementState) -> _Graph:
        g: _Graph = nx.DiGraph()
        for arr in state.arrangements:
            g.add_node(
                arr.id,
                name=arr.name,
                version_label=arr.container.version_label,
                created_at=arr.created_at.isoformat(),
            )
        for arr in state.arrangements:
            if arr.parent_id is not None:
                g.add_edge(arr.parent_id, arr.id)
        return g

    def _sorted(self, ids: set[str] | list[str]) -> list[str]:
        """Order ids by their position in the arrangement collection."""
        rank = {node_id: i for i, node_id in enumerate(self._order)}
        return sorted(ids, key=lambda node_id: rank.get(node_id, len(rank)))

    def __contains__(self, arrangement_id: str) -> bool:
        return arrangement_id in self._graph

    def is_forest(self) -> bool:
        """True when every arrangement has at most one parent and there are no cycles."""
        if self._graph.number_of_nodes() == 0:
            return True
        return nx.is_directed_acyclic_graph(self._graph) and all(
            d <= 1 for _, d in self._graph.in_degree()
        )

    def find_cycle(self) -> list[str]:
        """Return the ids on one lineage cycle, or an empty list."""
        try:
            edges = nx.find_cycle(self._graph)
        except nx.NetworkXNoCycle:
            return []
        return [source for source, _target in edges]

    def roots(self) -> list[str]:
        return self._sorted([n for n, d in self._graph.in_degree() if d == 0])

    def children(self, arrangement_id: str) -> list[str]:
        return self._sorted(list(self._graph.successors(arrangement_id)))

    def parent(self, arrangement_id: str) -> str | None:
        preds = list(self._graph.predecessors(arrangement_id))
        return preds[0] if preds else None

    def ancestors(self, arrangement_id: str) -> list[str]:
        """Parent chain from nearest parent up to the root."""
        chain: list[str] = []
        current = self.parent(arrangement_id)
        while current is not None and current not in chain:
            chain.append(current)
            current = self.parent(current)
        return chain

    def descendants(self, arrangement_id: str) -> list[str]:
        """All forks derived from *arrangement_id*, breadth-first."""
        return [child for _parent, child in nx.bfs_edges(self._graph, arrangement_id)]

    def depth(self, arrangement_id: str) -> int:
        return len(self.ancestors(arrangement_id))

    def tree(self) -> list[dict[str, Any]]:
        """Nested ``{id, name, version_label, children}`` dicts, one per root."""

        def node(node_id: str) -> dict[str, Any]:
            attrs = self._graph.nodes[node_id]
            return {
                "id": node_id,
                "name": attrs.get("name", ""),
                "version_label": attrs.get("version_label", ""),
                "children": [node(child) for child in self.children(node_id)],
            }

        return [node(root) for root in self.roots()]
