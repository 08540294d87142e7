"""Data models for graph operations.

Every result is a frozen value with no reference back to the Graph it was
computed from. ``to_dict()`` returns plain lists, ints and strings that can be
handed to ``json.dumps`` unchanged.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class TraversalOrder(Enum):
    """Supported traversal strategies."""

    BFS = "bfs"
    DFS = "dfs"


@dataclass(frozen=True)
class TraversalStep:
    """One visited node plus the cumulative visited set when it was marked."""

    node: int
    visited: frozenset[int]

    def to_dict(self) -> dict[str, Any]:
        return {"node": self.node, "visited": sorted(self.visited)}


@dataclass(frozen=True)
class _NodeGroups:
    """Ordered sequence of node groups, each sorted ascending."""

    kind: ClassVar[str] = "groups"

    components: tuple[tuple[int, ...], ...]

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        return iter(self.components)

    def __getitem__(self, index: int) -> tuple[int, ...]:
        return self.components[index]

    def as_lists(self) -> list[list[int]]:
        return [list(c) for c in self.components]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "components": self.as_lists()}


@dataclass(frozen=True)
class ComponentList(_NodeGroups):
    """Connected components in seed order."""

    kind: ClassVar[str] = "connected_components"


@dataclass(frozen=True)
class BiconnectedResult(_NodeGroups):
    """Biconnected components in the order they were closed."""

    kind: ClassVar[str] = "biconnected_components"


@dataclass(frozen=True)
class SCCResult(_NodeGroups):
    """Strongly connected components in transpose-pass discovery order."""

    kind: ClassVar[str] = "strongly_connected_components"


@dataclass(frozen=True)
class ArticulationResult:
    """Cut vertices (ascending) and bridges (DFS discovery order)."""

    kind: ClassVar[str] = "articulation_points"

    points: tuple[int, ...]
    bridges: tuple[tuple[int, int], ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "points": list(self.points),
            "bridges": [list(b) for b in self.bridges],
        }


@dataclass(frozen=True)
class MaxFlowResult:
    """Maximum flow value between source and sink."""

    kind: ClassVar[str] = "max_flow"

    value: int
    source: int
    sink: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value, "source": self.source, "sink": self.sink}
