"""
Error types raised by the GraphMap core.

Every error here is an expected user-input mistake. The UI layer catches
GraphMapError and reports it with a notification; the graph is never left
half-mutated.
"""


class GraphMapError(Exception):
    """Base class for all GraphMap errors."""


class SelfConnectionError(GraphMapError):
    """Raised when a node would be connected to itself."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__("A node cannot connect to itself!")


class UnknownNodeError(GraphMapError):
    """Raised when an edge endpoint does not reference an existing node."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node {node_id} does not exist")


class FormatError(GraphMapError):
    """Raised when a graph file cannot be parsed."""


class GraphIntegrityError(GraphMapError):
    """Raised when a replacement graph breaks id uniqueness or contains self-loops."""


class SelectionError(GraphMapError):
    """Raised when the begin/resolve contract of a pending selection is violated."""
