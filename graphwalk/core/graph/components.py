"""Connected and strongly connected components."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from graphwalk.core.exceptions import NotApplicableError
from graphwalk.core.graph.models import ComponentList, SCCResult
from graphwalk.core.logging import get_logger

if TYPE_CHECKING:
    from graphwalk.core.graph.base import Graph

logger = get_logger(__name__)


def connected_components(graph: Graph) -> ComponentList:
    """Partition nodes by reachability. O(V log V + E).

    Seeds are taken in ascending id order, so components come out ordered by
    their smallest member. Directed graphs are walked along stored edges
    only, which is not strong connectivity; see strongly_connected_components.
    """
    visited: set[int] = set()
    components: list[tuple[int, ...]] = []

    for seed in sorted(graph.nodes()):
        if seed in visited:
            continue
        visited.add(seed)
        members = [seed]
        queue: deque[int] = deque([seed])
        while queue:
            node = queue.popleft()
            for neighbor in graph.neighbors(node):
                if neighbor not in visited:
                    visited.add(neighbor)
                    members.append(neighbor)
                    queue.append(neighbor)
        components.append(tuple(sorted(members)))

    logger.debug("connected_components", nodes=len(visited), components=len(components))
    return ComponentList(tuple(components))


def strongly_connected_components(graph: Graph) -> SCCResult:
    """Kosaraju's two-pass algorithm. O(V log V + E).

    Raises:
        NotApplicableError: The graph is undirected.
    """
    if not graph.directed:
        raise NotApplicableError("Strongly connected components require a directed graph")

    finished = _finishing_order(graph)
    transposed = graph.transpose()

    visited: set[int] = set()
    components: list[tuple[int, ...]] = []
    while finished:
        root = finished.pop()
        if root in visited:
            continue
        visited.add(root)
        members = [root]
        stack = [root]
        while stack:
            node = stack.pop()
            for neighbor in transposed.neighbors(node):
                if neighbor not in visited:
                    visited.add(neighbor)
                    members.append(neighbor)
                    stack.append(neighbor)
        components.append(tuple(sorted(members)))

    logger.debug("strongly_connected_components", components=len(components))
    return SCCResult(tuple(components))


def _finishing_order(graph: Graph) -> list[int]:
    """Nodes in DFS post-order, roots tried in ascending id order."""
    visited: set[int] = set()
    finished: list[int] = []

    for root in sorted(graph.nodes()):
        if root in visited:
            continue
        visited.add(root)
        stack: list[tuple[int, int]] = [(root, 0)]
        while stack:
            node, index = stack[-1]
            neighbors = graph.neighbors(node)
            while index < len(neighbors) and neighbors[index] in visited:
                index += 1
            if index == len(neighbors):
                stack.pop()
                finished.append(node)
                continue
            child = neighbors[index]
            stack[-1] = (node, index + 1)
            visited.add(child)
            stack.append((child, 0))

    return finished
