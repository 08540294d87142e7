"""MCP server implementation for Graphwalk."""

from __future__ import annotations

import json
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from graphwalk.core.exceptions import GraphwalkError
from graphwalk.core.graph import (
    Graph,
    TraversalOrder,
    articulation_points,
    biconnected_components,
    connected_components,
    max_flow,
    parse_adjacency,
    strongly_connected_components,
    traverse,
    traverse_all,
)
from graphwalk.core.logging import get_logger

server = Server("graphwalk")
logger = get_logger(__name__)

_GRAPH_PROPERTIES: dict[str, Any] = {
    "adjacency": {
        "type": "string",
        "description": "Adjacency list, one 'node: neighbor1 neighbor2 ...' line per node",
    },
    "directed": {
        "type": "boolean",
        "description": "Treat the graph as directed (default: false)",
        "default": False,
    },
    "edges": {
        "type": "string",
        "description": (
            "Directed edges with optional capacity, one 'from to [capacity]' per line; "
            "required when directed, and each pair must appear in the adjacency"
        ),
    },
}


def _schema(extra: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    """Input schema: the shared graph fields plus tool-specific ones."""
    return {
        "type": "object",
        "properties": {**_GRAPH_PROPERTIES, **(extra or {})},
        "required": ["adjacency", *(required or [])],
    }


def _graph_from_arguments(arguments: dict[str, Any]) -> Graph:
    """Parse the graph fields of a tool call."""
    return parse_adjacency(
        arguments["adjacency"],
        directed=bool(arguments.get("directed", False)),
        directions=arguments.get("edges"),
    )


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="graphwalk_traverse",
            description=(
                "Run BFS or DFS and return every visiting step with the set of nodes "
                "visited so far. Without a start node the whole graph is covered, "
                "restarting from the smallest unvisited node."
            ),
            inputSchema=_schema(
                {
                    "order": {"type": "string", "enum": ["bfs", "dfs"], "default": "bfs"},
                    "start": {"type": "integer", "description": "Start node (optional)"},
                }
            ),
        ),
        Tool(
            name="graphwalk_components",
            description="Find connected components, each sorted ascending.",
            inputSchema=_schema(),
        ),
        Tool(
            name="graphwalk_articulation",
            description="Find articulation points (cut vertices) and bridges of an undirected graph.",
            inputSchema=_schema(),
        ),
        Tool(
            name="graphwalk_biconnected",
            description="Find biconnected components of an undirected graph.",
            inputSchema=_schema(),
        ),
        Tool(
            name="graphwalk_scc",
            description="Find strongly connected components of a directed graph (Kosaraju).",
            inputSchema=_schema(),
        ),
        Tool(
            name="graphwalk_maxflow",
            description=(
                "Compute the maximum flow between two nodes of a directed graph (Edmonds-Karp). "
                "Capacities come from the 'edges' field."
            ),
            inputSchema=_schema(
                {
                    "source": {"type": "integer", "description": "Source node"},
                    "sink": {"type": "integer", "description": "Sink node"},
                },
                required=["source", "sink"],
            ),
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    return [TextContent(type="text", text=json.dumps(handle_tool(name, arguments), indent=2))]


def handle_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Dispatch a tool call; engine errors become an ``error`` payload."""
    handler = _HANDLERS.get(name)
    if handler is None:
        return {"error": f"Unknown tool: {name}"}
    try:
        return handler(arguments)
    except GraphwalkError as e:
        logger.info("tool_failed", tool=name, error=str(e))
        return {"error": str(e), "error_type": type(e).__name__}
    except KeyError as e:
        return {"error": f"Missing argument: {e.args[0]}"}
    except ValueError as e:
        return {"error": str(e)}


def _handle_traverse(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graphwalk_traverse tool."""
    graph = _graph_from_arguments(arguments)
    order = TraversalOrder(arguments.get("order", "bfs"))
    start = arguments.get("start")
    steps = traverse(graph, int(start), order) if start is not None else traverse_all(graph, order)
    return {"order": order.value, "steps": [s.to_dict() for s in steps]}


def _handle_components(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graphwalk_components tool."""
    return connected_components(_graph_from_arguments(arguments)).to_dict()


def _handle_articulation(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graphwalk_articulation tool."""
    return articulation_points(_graph_from_arguments(arguments)).to_dict()


def _handle_biconnected(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graphwalk_biconnected tool."""
    return biconnected_components(_graph_from_arguments(arguments)).to_dict()


def _handle_scc(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graphwalk_scc tool."""
    return strongly_connected_components(_graph_from_arguments(arguments)).to_dict()


def _handle_maxflow(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graphwalk_maxflow tool."""
    graph = _graph_from_arguments(arguments)
    return max_flow(graph, int(arguments["source"]), int(arguments["sink"])).to_dict()


_HANDLERS = {
    "graphwalk_traverse": _handle_traverse,
    "graphwalk_components": _handle_components,
    "graphwalk_articulation": _handle_articulation,
    "graphwalk_biconnected": _handle_biconnected,
    "graphwalk_scc": _handle_scc,
    "graphwalk_maxflow": _handle_maxflow,
}


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
