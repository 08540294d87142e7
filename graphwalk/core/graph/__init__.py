"""
Graph data structures and algorithms.

Data Structures:
    - Graph: Immutable adjacency list plus the capacity edge list
    - TraversalStep: One visited node with a snapshot of the visited set
    - ComponentList / BiconnectedResult / SCCResult: ordered node groups
    - ArticulationResult / MaxFlowResult

Algorithms:
    - traversal: breadth_first, depth_first, traverse_all
    - components: connected_components, strongly_connected_components (Kosaraju)
    - connectivity: articulation_points, biconnected_components (low-link DFS)
    - flow: max_flow (Edmonds-Karp)

Loading:
    - parse_adjacency(): Build a Graph from adjacency text
    - load_graph(): Same, from files
"""

from graphwalk.core.graph.base import Graph
from graphwalk.core.graph.components import connected_components, strongly_connected_components
from graphwalk.core.graph.connectivity import articulation_points, biconnected_components
from graphwalk.core.graph.flow import max_flow
from graphwalk.core.graph.loader import load_graph, parse_adjacency, parse_directions
from graphwalk.core.graph.models import (
    ArticulationResult,
    BiconnectedResult,
    ComponentList,
    MaxFlowResult,
    SCCResult,
    TraversalOrder,
    TraversalStep,
)
from graphwalk.core.graph.traversal import breadth_first, depth_first, traverse, traverse_all

__all__ = [
    "Graph",
    # Results
    "TraversalOrder",
    "TraversalStep",
    "ComponentList",
    "ArticulationResult",
    "BiconnectedResult",
    "SCCResult",
    "MaxFlowResult",
    # Algorithms
    "breadth_first",
    "depth_first",
    "traverse",
    "traverse_all",
    "connected_components",
    "strongly_connected_components",
    "articulation_points",
    "biconnected_components",
    "max_flow",
    # Loading
    "parse_adjacency",
    "parse_directions",
    "load_graph",
]
