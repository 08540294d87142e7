"""
Graphwalk: Graph traversal and connectivity analysis.

Graphwalk runs classic graph algorithms over small, explicit graphs:
- Replayable BFS/DFS step sequences
- Connected, biconnected and strongly connected components
- Articulation points, bridges and maximum flow

Usage:
    from graphwalk.core.graph import articulation_points, parse_adjacency

    graph = parse_adjacency("0: 1 3\\n1: 0 2 4\\n2: 1 3\\n3: 2 0\\n")
    result = articulation_points(graph)
    print(result.points, result.bridges)
"""

__version__ = "0.1.0"
