"""Graphwalk custom exceptions."""


class GraphwalkError(Exception):
    """Base exception for Graphwalk errors."""


class NodeNotFoundError(GraphwalkError):
    """A referenced start, source or sink node is not in the graph."""

    def __init__(self, node: int, role: str = "node") -> None:
        super().__init__(f"{role.capitalize()} {node} not found in graph")
        self.node = node
        self.role = role


class InvalidRequestError(GraphwalkError):
    """The request is well-formed but cannot be answered (e.g. source == sink)."""


class NotApplicableError(GraphwalkError):
    """The operation requires directedness the graph does not have."""


class ParseError(GraphwalkError):
    """Error parsing a textual graph description."""
