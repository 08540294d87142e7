"""Core Graph class with adjacency list representation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from graphwalk.core.models import FlowEdge


class Graph:
    """Finite directed or undirected graph over integer node ids.

    Uses adjacency lists for O(1) neighbor lookup. The adjacency mapping is
    copied at construction and never mutated afterwards, so a Graph can be
    shared by any number of analysis calls.

    ``edges`` is only read by max flow. Self-loops, parallel edges and
    neighbors that are not keys are all accepted as-is.
    """

    __slots__ = ("_adjacency", "_edges", "_directed")

    def __init__(
        self,
        adjacency: Mapping[int, Sequence[int]] | None = None,
        edges: Iterable[FlowEdge] | None = None,
        directed: bool = False,
    ) -> None:
        self._adjacency: dict[int, tuple[int, ...]] = {
            node: tuple(neighbors) for node, neighbors in (adjacency or {}).items()
        }
        self._edges: tuple[FlowEdge, ...] = tuple(edges or ())
        self._directed = directed

    @classmethod
    def from_edges(cls, edges: Iterable[FlowEdge], directed: bool = False) -> Graph:
        """Build adjacency from an edge list.

        Undirected graphs get each edge in both directions.
        """
        edge_list = list(edges)
        adjacency: dict[int, list[int]] = {}
        for edge in edge_list:
            adjacency.setdefault(edge.from_node, []).append(edge.to_node)
            target = adjacency.setdefault(edge.to_node, [])
            if not directed and edge.from_node != edge.to_node:
                target.append(edge.from_node)
        return cls(adjacency, edge_list, directed=directed)

    def neighbors(self, node: int) -> tuple[int, ...]:
        """Get neighbors in adjacency order, empty if node is absent. O(1)."""
        return self._adjacency.get(node, ())

    def nodes(self) -> list[int]:
        """All node ids in insertion order. O(V)."""
        return list(self._adjacency)

    def capacities(self) -> dict[tuple[int, int], int]:
        """Capacity per ordered pair; the last duplicate edge wins. O(E)."""
        return {edge.pair: edge.capacity for edge in self._edges}

    def transpose(self) -> Graph:
        """Graph with every adjacency entry reversed. O(V + E)."""
        reversed_adj: dict[int, list[int]] = {node: [] for node in self._adjacency}
        for node, neighbors in self._adjacency.items():
            for neighbor in neighbors:
                reversed_adj.setdefault(neighbor, []).append(node)
        edges = [FlowEdge(e.to_node, e.from_node, e.capacity) for e in self._edges]
        return Graph(reversed_adj, edges, directed=self._directed)

    def without_nodes(self, removed: Iterable[int]) -> Graph:
        """Graph with the given nodes and every entry touching them dropped."""
        gone = set(removed)
        adjacency = {
            node: [n for n in neighbors if n not in gone]
            for node, neighbors in self._adjacency.items()
            if node not in gone
        }
        edges = [e for e in self._edges if e.from_node not in gone and e.to_node not in gone]
        return Graph(adjacency, edges, directed=self._directed)

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __iter__(self) -> Iterator[int]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def adjacency(self) -> Mapping[int, tuple[int, ...]]:
        return MappingProxyType(self._adjacency)

    @property
    def edges(self) -> tuple[FlowEdge, ...]:
        return self._edges

    @property
    def num_nodes(self) -> int:
        return len(self._adjacency)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph({kind}, nodes={self.num_nodes}, edges={self.num_edges})"
