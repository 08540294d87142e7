"""Breadth-first and depth-first traversal producing replayable step sequences."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from graphwalk.core.exceptions import NodeNotFoundError
from graphwalk.core.graph.models import TraversalOrder, TraversalStep
from graphwalk.core.logging import get_logger

if TYPE_CHECKING:
    from graphwalk.core.graph.base import Graph

logger = get_logger(__name__)


def breadth_first(graph: Graph, start: int) -> list[TraversalStep]:
    """BFS from start. O(V + E) plus one snapshot per step.

    A step is emitted when its node is marked, so every snapshot is exactly
    one node larger than the previous one.
    """
    if start not in graph:
        raise NodeNotFoundError(start, "start node")
    return _bfs(graph, start, set())


def depth_first(graph: Graph, start: int) -> list[TraversalStep]:
    """Pre-order DFS from start, neighbors in adjacency order. O(V + E)."""
    if start not in graph:
        raise NodeNotFoundError(start, "start node")
    return _dfs(graph, start, set())


def traverse(graph: Graph, start: int, order: TraversalOrder = TraversalOrder.BFS) -> list[TraversalStep]:
    """Dispatch to breadth_first or depth_first."""
    if order is TraversalOrder.DFS:
        return depth_first(graph, start)
    return breadth_first(graph, start)


def traverse_all(graph: Graph, order: TraversalOrder = TraversalOrder.BFS) -> list[TraversalStep]:
    """Traverse every node, restarting from the smallest unvisited id.

    One visited set is shared across restarts, so snapshots are cumulative
    over the whole graph.
    """
    walk = _dfs if order is TraversalOrder.DFS else _bfs
    visited: set[int] = set()
    steps: list[TraversalStep] = []
    for node in sorted(graph.nodes()):
        if node not in visited:
            steps.extend(walk(graph, node, visited))
    logger.debug("traverse_all", order=order.value, steps=len(steps))
    return steps


def _bfs(graph: Graph, start: int, visited: set[int]) -> list[TraversalStep]:
    visited.add(start)
    steps = [TraversalStep(start, frozenset(visited))]
    queue: deque[int] = deque([start])

    while queue:
        node = queue.popleft()
        for neighbor in graph.neighbors(node):
            if neighbor not in visited:
                visited.add(neighbor)
                steps.append(TraversalStep(neighbor, frozenset(visited)))
                queue.append(neighbor)

    return steps


def _dfs(graph: Graph, start: int, visited: set[int]) -> list[TraversalStep]:
    visited.add(start)
    steps = [TraversalStep(start, frozenset(visited))]
    # (node, index of the next neighbor to look at)
    stack: list[tuple[int, int]] = [(start, 0)]

    while stack:
        node, index = stack[-1]
        neighbors = graph.neighbors(node)
        while index < len(neighbors) and neighbors[index] in visited:
            index += 1
        if index == len(neighbors):
            stack.pop()
            continue

        child = neighbors[index]
        stack[-1] = (node, index + 1)
        visited.add(child)
        steps.append(TraversalStep(child, frozenset(visited)))
        stack.append((child, 0))

    return steps
