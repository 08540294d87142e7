"""
MCP server for Graphwalk.

Exposes the graph algorithms to LLMs via the Model Context Protocol. Every
tool takes the graph as adjacency text ('node: n1 n2 ...'), an optional
'directed' flag and optional 'from to [capacity]' edge lines.

Tools:
    - graphwalk_traverse: BFS/DFS visiting steps
    - graphwalk_components: Connected components
    - graphwalk_articulation: Cut vertices and bridges
    - graphwalk_biconnected: Biconnected components
    - graphwalk_scc: Strongly connected components
    - graphwalk_maxflow: Maximum flow between two nodes

Usage:
    Run: mcp-server-graphwalk
"""

import asyncio

from graphwalk.core.logging import setup_logging
from graphwalk.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    setup_logging()
    asyncio.run(_serve())


__all__ = ["serve"]
