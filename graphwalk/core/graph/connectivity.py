"""Cut vertices, bridges and biconnected components.

Both analyses share one iterative discovery-time/low-link DFS
(``_LowLinkSearch``) and hook into it at tree edges, back edges and child
completion. The adjacency is read as an undirected relation.

Parallel edges: only the first adjacency entry leading back to a node's DFS
parent is treated as the tree edge. Any further entry to the parent is a
genuine back edge, so a doubled edge is never reported as a bridge.

Self-loops never lower a low-link and never reach the biconnected edge
stack; a node whose only edges are self-loops belongs to no biconnected
component.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from graphwalk.core.graph.models import ArticulationResult, BiconnectedResult
from graphwalk.core.logging import get_logger

if TYPE_CHECKING:
    from graphwalk.core.graph.base import Graph

logger = get_logger(__name__)


@dataclass
class _Frame:
    """One entry of the explicit DFS stack."""

    node: int
    parent: int | None
    index: int = 0
    parent_skipped: bool = False
    children: int = 0


class _LowLinkSearch:
    """Tarjan-style DFS over every component, using a heap-allocated stack."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.disc: dict[int, int] = {}
        self.low: dict[int, int] = {}
        self._time = 0

    def run(self) -> None:
        for root in sorted(self.graph.nodes()):
            if root not in self.disc:
                self._search(root)
                self.root_finished(root)

    def tree_edge(self, u: int, v: int) -> None:
        """Called when v is discovered from u."""

    def back_edge(self, u: int, v: int) -> None:
        """Called for an edge from u to an already discovered node v."""

    def child_finished(self, u: int, v: int, is_cut: bool) -> None:
        """Called when DFS child v of u is exhausted.

        ``is_cut`` is the articulation condition for u over v.
        """

    def root_finished(self, root: int) -> None:
        """Called when the DFS tree rooted at root is complete."""

    def _discover(self, node: int) -> None:
        self.disc[node] = self.low[node] = self._time
        self._time += 1

    def _search(self, root: int) -> None:
        disc, low = self.disc, self.low
        self._discover(root)
        stack = [_Frame(root, None)]

        while stack:
            frame = stack[-1]
            u = frame.node
            neighbors = self.graph.neighbors(u)

            if frame.index < len(neighbors):
                v = neighbors[frame.index]
                frame.index += 1
                if v not in disc:
                    self._discover(v)
                    self.tree_edge(u, v)
                    stack.append(_Frame(v, u))
                elif v == frame.parent and not frame.parent_skipped:
                    frame.parent_skipped = True
                else:
                    low[u] = min(low[u], disc[v])
                    self.back_edge(u, v)
                continue

            stack.pop()
            if not stack:
                continue
            parent = stack[-1]
            parent.children += 1
            p = parent.node
            low[p] = min(low[p], low[u])
            if parent.parent is None:
                is_cut = parent.children > 1
            else:
                is_cut = low[u] >= disc[p]
            self.child_finished(p, u, is_cut)


class _ArticulationSearch(_LowLinkSearch):
    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self.points: set[int] = set()
        self.bridges: list[tuple[int, int]] = []

    def child_finished(self, u: int, v: int, is_cut: bool) -> None:
        if is_cut:
            self.points.add(u)
        if self.low[v] > self.disc[u]:
            self.bridges.append((u, v))


class _BiconnectedSearch(_LowLinkSearch):
    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self.edge_stack: list[tuple[int, int]] = []
        self.components: list[tuple[int, ...]] = []

    def tree_edge(self, u: int, v: int) -> None:
        self.edge_stack.append((u, v))

    def back_edge(self, u: int, v: int) -> None:
        if self.disc[v] < self.disc[u]:
            self.edge_stack.append((u, v))

    def child_finished(self, u: int, v: int, is_cut: bool) -> None:
        if not is_cut:
            return
        members: set[int] = set()
        while self.edge_stack:
            edge = self.edge_stack.pop()
            members.update(edge)
            if edge == (u, v):
                break
        self.components.append(tuple(sorted(members)))

    def root_finished(self, root: int) -> None:
        if not self.edge_stack:
            return
        members: set[int] = set()
        for edge in self.edge_stack:
            members.update(edge)
        self.edge_stack.clear()
        self.components.append(tuple(sorted(members)))


def articulation_points(graph: Graph) -> ArticulationResult:
    """Find cut vertices and bridges. O(V log V + E).

    Points are returned ascending, bridges as ``(parent, child)`` pairs in the
    order the DFS closed them.
    """
    search = _ArticulationSearch(graph)
    search.run()
    logger.debug(
        "articulation_points",
        points=len(search.points),
        bridges=len(search.bridges),
    )
    return ArticulationResult(
        points=tuple(sorted(search.points)),
        bridges=tuple(search.bridges),
    )


def biconnected_components(graph: Graph) -> BiconnectedResult:
    """Partition edges into biconnected components. O(V log V + E).

    Each component is the sorted set of nodes its edges touch. Cut vertices
    appear in every component they join; isolated nodes appear in none.
    """
    search = _BiconnectedSearch(graph)
    search.run()
    logger.debug("biconnected_components", components=len(search.components))
    return BiconnectedResult(tuple(search.components))
