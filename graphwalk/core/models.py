"""Data models for Graphwalk."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FlowEdge:
    """A directed edge with a capacity, as consumed by max flow."""

    from_node: int
    to_node: int
    capacity: int = 1

    @property
    def pair(self) -> tuple[int, int]:
        return (self.from_node, self.to_node)
