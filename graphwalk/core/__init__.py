"""
Core module: data models, exceptions, configuration and logging.

Models (models.py):
    - FlowEdge: A directed edge with a capacity

Exceptions (exceptions.py):
    - GraphwalkError: Base exception for all graphwalk errors
    - NodeNotFoundError: Start, source or sink is not in the graph
    - InvalidRequestError: Request cannot be answered (e.g. source == sink)
    - NotApplicableError: Operation needs a directed graph
    - ParseError: Graph text could not be parsed

Graph engine (graph/):
    - Graph plus traversal, components, connectivity and flow algorithms
"""

from graphwalk.core.exceptions import (
    GraphwalkError,
    InvalidRequestError,
    NodeNotFoundError,
    NotApplicableError,
    ParseError,
)
from graphwalk.core.models import FlowEdge

__all__ = [
    # Models
    "FlowEdge",
    # Exceptions
    "GraphwalkError",
    "NodeNotFoundError",
    "InvalidRequestError",
    "NotApplicableError",
    "ParseError",
]
