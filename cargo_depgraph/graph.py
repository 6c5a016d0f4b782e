"""The dependency graph and the passes that analyse and prune it."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace
from typing import Iterable

from .dep_info import DepInfo
from .package import Package


@dataclass
class _Edge:
    source: int
    target: int
    info: DepInfo


class DepGraph:
    """A directed multigraph whose indices stay valid when other items are removed."""

    def __init__(self) -> None:
        self._nodes: dict[int, Package] = {}
        self._edges: dict[int, _Edge] = {}
        self._out: dict[int, list[int]] = {}
        self._in: dict[int, list[int]] = {}
        self._next_node = 0
        self._next_edge = 0

    def add_node(self, package: Package) -> int:
        idx = self._next_node
        self._next_node += 1
        self._nodes[idx] = package
        self._out[idx] = []
        self._in[idx] = []
        return idx

    def add_edge(self, source: int, target: int, info: DepInfo) -> int:
        if source not in self._nodes or target not in self._nodes:
            raise KeyError("edge endpoint is not in the graph")
        idx = self._next_edge
        self._next_edge += 1
        self._edges[idx] = _Edge(source, target, info)
        self._out[source].append(idx)
        self._in[target].append(idx)
        return idx

    def remove_node(self, idx: int) -> Package:
        """Remove a node together with all edges touching it."""
        package = self._nodes[idx]
        for edge_idx in set(self._in[idx]) | set(self._out[idx]):
            self.remove_edge(edge_idx)
        del self._nodes[idx], self._in[idx], self._out[idx]
        return package

    def remove_edge(self, idx: int) -> DepInfo:
        edge = self._edges.pop(idx)
        self._out[edge.source].remove(idx)
        self._in[edge.target].remove(idx)
        return edge.info

    def contains_node(self, idx: int) -> bool:
        return idx in self._nodes

    def node(self, idx: int) -> Package:
        return self._nodes[idx]

    def edge(self, idx: int) -> DepInfo:
        return self._edges[idx].info

    def node_indices(self) -> list[int]:
        return list(self._nodes)

    def edge_indices(self) -> list[int]:
        return list(self._edges)

    def edge_endpoints(self, idx: int) -> tuple[int, int]:
        edge = self._edges[idx]
        return edge.source, edge.target

    def incoming(self, idx: int) -> list[tuple[int, int]]:
        """(edge, source node) pairs of incoming edges, most recently added first."""
        return [(e, self._edges[e].source) for e in reversed(self._in[idx])]

    def outgoing(self, idx: int) -> list[tuple[int, int]]:
        """(edge, target node) pairs of outgoing edges, most recently added first."""
        return [(e, self._edges[e].target) for e in reversed(self._out[idx])]

    def has_indirect_path(self, source: int, target: int) -> bool:
        """Whether a simple path with at least one intermediate node leads from source to target."""
        seen = {source, target}
        stack: list[int] = []
        for _, nxt in self.outgoing(source):
            if nxt not in seen:
                seen.add(nxt)
                stack.append(nxt)
        while stack:
            current = stack.pop()
            for _, nxt in self.outgoing(current):
                if nxt == target:
                    return True
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        return False


def update_dep_info(graph: DepGraph) -> None:
    """Propagate dependency kinds, target and optional flags through the graph."""
    for idx in graph.node_indices():
        _update_node(graph, idx)


def _update_node(graph: DepGraph, idx: int) -> None:
    package = graph.node(idx)
    node_info: DepInfo | None = None

    for edge_idx, source in graph.incoming(idx):
        # Don't backtrack on reverse dev-dependencies of workspace members
        ws_reverse_dev_dep = package.is_ws_member and graph.edge(edge_idx).kind.is_dev_only()
        if not ws_reverse_dev_dep and not graph.edge(edge_idx).visited:
            _update_node(graph, source)

        edge_info = graph.edge(edge_idx)
        if node_info is None:
            node_info = replace(edge_info)
        else:
            node_info.is_target_dep = node_info.is_target_dep and edge_info.is_target_dep
            node_info.is_optional = node_info.is_optional and edge_info.is_optional
            node_info.kind = node_info.kind.combine_incoming(edge_info.kind)

    if package.is_ws_member:
        node_info = package.dep_info
    else:
        if node_info is None:
            raise ValueError(
                f"non-workspace member {package.name!r} has no incoming edge"
            )
        package.dep_info = node_info

    for edge_idx, _ in graph.outgoing(idx):
        edge_info = graph.edge(edge_idx)
        if edge_info.visited:
            continue
        edge_info.visited = True
        edge_info.is_target_dep = edge_info.is_target_dep or node_info.is_target_dep
        edge_info.is_optional = edge_info.is_optional or node_info.is_optional
        edge_info.kind = edge_info.kind.update_outgoing(node_info.kind)


def remove_irrelevant_deps(graph: DepGraph, focus: Iterable[str]) -> None:
    """Drop leaf packages that are not focused, repeatedly, until only relevant ones remain."""
    focus = set(focus)
    queue = deque(idx for idx in graph.node_indices() if not graph.outgoing(idx))
    while queue:
        idx = queue.popleft()
        if not graph.contains_node(idx):
            continue
        if graph.node(idx).name in focus or graph.outgoing(idx):
            continue
        queue.extend(source for _, source in graph.incoming(idx))
        graph.remove_node(idx)


def remove_deps(graph: DepGraph, hide: Iterable[str]) -> None:
    """Remove hidden packages and whatever becomes unreachable through them."""
    hide = set(hide)
    queue = deque(graph.node_indices())
    while queue:
        idx = queue.popleft()
        if not graph.contains_node(idx):
            continue
        package = graph.node(idx)
        if package.name not in hide and (graph.incoming(idx) or package.is_ws_member):
            continue
        queue.extend(target for _, target in graph.outgoing(idx))
        graph.remove_node(idx)


def dedup_transitive_deps(graph: DepGraph) -> None:
    """Remove direct edges whose target is also reachable through another package."""
    for idx in graph.node_indices():
        if not graph.contains_node(idx):
            continue
        for edge_idx, target in graph.outgoing(idx):
            if graph.has_indirect_path(idx, target):
                graph.remove_edge(edge_idx)