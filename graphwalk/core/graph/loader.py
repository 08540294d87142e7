"""Build a Graph from its textual description.

Adjacency text, one node per line::

    0: 1 3
    1: 0 2 4
    4:

Direction text (required for directed graphs), one edge per line with an optional
capacity that defaults to 1. Each pair must also appear in the adjacency::

    0 1 10
    1 2

Blank lines and ``#`` comments are ignored everywhere.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from graphwalk.core.exceptions import ParseError
from graphwalk.core.graph.base import Graph
from graphwalk.core.logging import get_logger
from graphwalk.core.models import FlowEdge

logger = get_logger(__name__)


def parse_adjacency(text: str, directed: bool = False, directions: str | None = None) -> Graph:
    """Parse adjacency text into a Graph.

    A node's own line fixes the order of its neighbors. Undirected graphs
    mirror every listed neighbor and get a unit edge in each direction; an
    edge listed from both of its ends is recorded once, and neighbors a node
    never lists itself follow its own entries. Directed graphs need
    ``directions`` and take their flow edges only from it; every direction
    pair must appear in the adjacency.

    Raises:
        ParseError: Malformed line, non-integer id, an empty graph, or
            directed input with missing or unknown directions.
    """
    adjacency: dict[int, list[int]] = {}
    mirrored: dict[int, list[int]] = {}
    edges: list[FlowEdge] = []
    # Mirrored entries not yet matched by the other endpoint's own line
    unmatched: Counter[tuple[int, int]] = Counter()

    for lineno, line in _lines(text):
        head, sep, tail = line.partition(":")
        if not sep or ":" in tail:
            raise ParseError(f"Line {lineno}: expected 'node: neighbor1 neighbor2 ...', got {line!r}")
        node = _parse_int(head, lineno, "node")
        neighbors = [_parse_int(tok, lineno, "neighbor") for tok in tail.split()]

        row = adjacency.setdefault(node, [])
        for neighbor in neighbors:
            row.append(neighbor)
            adjacency.setdefault(neighbor, [])
            if directed:
                continue
            if unmatched[(node, neighbor)]:
                unmatched[(node, neighbor)] -= 1
                mirrored[node].remove(neighbor)
                continue
            edges.append(FlowEdge(node, neighbor))
            if neighbor != node:
                mirrored.setdefault(neighbor, []).append(node)
                edges.append(FlowEdge(neighbor, node))
                unmatched[(neighbor, node)] += 1

    if not adjacency:
        raise ParseError("Graph must contain at least one node")

    for node, extra in mirrored.items():
        adjacency[node].extend(extra)

    if directed:
        edges = _directed_edges(adjacency, directions or "")

    graph = Graph(adjacency, edges, directed=directed)
    logger.debug("graph_parsed", nodes=graph.num_nodes, edges=graph.num_edges, directed=directed)
    return graph


def parse_directions(text: str) -> list[FlowEdge]:
    """Parse ``from to [capacity]`` lines into flow edges.

    Raises:
        ParseError: Wrong field count, non-integer values or a capacity < 1.
    """
    return [edge for _, edge in _numbered_directions(text)]


def load_graph(path: Path, directed: bool = False, edges_path: Path | None = None) -> Graph:
    """Read adjacency (and optional direction) files into a Graph."""
    try:
        text = path.read_text(encoding="utf-8")
        directions = edges_path.read_text(encoding="utf-8") if edges_path else None
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read graph input: {e}") from e
    return parse_adjacency(text, directed=directed, directions=directions)


def _directed_edges(adjacency: dict[int, list[int]], directions: str) -> list[FlowEdge]:
    """Flow edges of a directed graph, each checked against the adjacency."""
    numbered = _numbered_directions(directions)
    if not numbered:
        raise ParseError("Directed graphs need edge directions ('from to [capacity]' lines)")
    for lineno, edge in numbered:
        if edge.to_node not in adjacency.get(edge.from_node, ()):
            raise ParseError(
                f"Line {lineno}: edge {edge.from_node} -> {edge.to_node} is not in the adjacency list"
            )
    return [edge for _, edge in numbered]


def _numbered_directions(text: str) -> list[tuple[int, FlowEdge]]:
    result = []
    for lineno, line in _lines(text):
        fields = line.split()
        if len(fields) not in (2, 3):
            raise ParseError(f"Line {lineno}: expected 'from to [capacity]', got {line!r}")
        from_node = _parse_int(fields[0], lineno, "node")
        to_node = _parse_int(fields[1], lineno, "node")
        capacity = _parse_int(fields[2], lineno, "capacity") if len(fields) == 3 else 1
        if capacity < 1:
            raise ParseError(f"Line {lineno}: capacity must be a positive integer, got {capacity}")
        result.append((lineno, FlowEdge(from_node, to_node, capacity)))
    return result


def _lines(text: str) -> list[tuple[int, str]]:
    """Numbered, comment-stripped, non-blank lines."""
    result = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if line:
            result.append((lineno, line))
    return result


def _parse_int(token: str, lineno: int, what: str) -> int:
    try:
        return int(token.strip())
    except ValueError:
        raise ParseError(f"Line {lineno}: invalid {what} {token.strip()!r}") from None
