"""Maximum flow using Edmonds-Karp over a residual capacity mapping."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from graphwalk.core.exceptions import InvalidRequestError, NodeNotFoundError, NotApplicableError
from graphwalk.core.graph.models import MaxFlowResult
from graphwalk.core.logging import get_logger

if TYPE_CHECKING:
    from graphwalk.core.graph.base import Graph

logger = get_logger(__name__)

Residual = dict[tuple[int, int], int]


def max_flow(graph: Graph, source: int, sink: int) -> MaxFlowResult:
    """Compute the maximum source-to-sink flow. O(V * E^2).

    Capacities come from ``graph.edges`` (last duplicate wins). A sink that
    cannot be reached yields a flow of 0, which is not an error.

    Raises:
        NotApplicableError: The graph is undirected.
        NodeNotFoundError: source or sink is not a node of the graph.
        InvalidRequestError: source and sink are the same node.
    """
    if not graph.directed:
        raise NotApplicableError("Max flow requires a directed graph")
    if source not in graph:
        raise NodeNotFoundError(source, "source")
    if sink not in graph:
        raise NodeNotFoundError(sink, "sink")
    if source == sink:
        raise InvalidRequestError("Source and sink must be different nodes")

    residual, outgoing = _build_residual(graph)
    total = 0
    augmentations = 0

    while True:
        path = _augmenting_path(residual, outgoing, source, sink)
        if path is None:
            break

        bottleneck = min(residual[edge] for edge in path)
        for u, v in path:
            residual[(u, v)] -= bottleneck
            residual[(v, u)] += bottleneck
        total += bottleneck
        augmentations += 1
        logger.debug("max_flow_augmented", bottleneck=bottleneck, length=len(path), flow=total)

    logger.debug("max_flow", source=source, sink=sink, value=total, augmentations=augmentations)
    return MaxFlowResult(value=total, source=source, sink=sink)


def _build_residual(graph: Graph) -> tuple[Residual, dict[int, list[int]]]:
    """Residual capacities plus the neighbor lists the BFS walks.

    Every forward pair gets a reverse pair; an existing real reverse edge
    keeps its capacity.
    """
    residual: Residual = graph.capacities()
    for u, v in list(residual):
        residual.setdefault((v, u), 0)

    outgoing: dict[int, list[int]] = {}
    for u, v in residual:
        outgoing.setdefault(u, []).append(v)
    return residual, outgoing


def _augmenting_path(
    residual: Residual, outgoing: dict[int, list[int]], source: int, sink: int
) -> list[tuple[int, int]] | None:
    """Shortest path of positive residual edges, as a list of pairs."""
    parent: dict[int, int] = {}
    visited: set[int] = {source}
    queue: deque[int] = deque([source])

    while queue:
        u = queue.popleft()
        for v in outgoing.get(u, []):
            if v not in visited and residual[(u, v)] > 0:
                visited.add(v)
                parent[v] = u
                if v == sink:
                    return _reconstruct(parent, source, sink)
                queue.append(v)

    return None


def _reconstruct(parent: dict[int, int], source: int, sink: int) -> list[tuple[int, int]]:
    """Rebuild the path from the BFS parent map."""
    path: list[tuple[int, int]] = []
    current = sink
    while current != source:
        prev = parent[current]
        path.append((prev, current))
        current = prev
    path.reverse()
    return path
