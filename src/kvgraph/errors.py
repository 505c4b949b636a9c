"""Graph error taxonomy.

Every public graph operation either returns normally or raises one of the
exceptions below. Backend failures are wrapped in BackendUnavailableError
with the original exception chained as ``__cause__``.
"""


class GraphError(Exception):
    """Base class for graph-related errors."""

    pass


class NodeNotFoundError(GraphError):
    """Raised when retrieving a node whose value key does not exist."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id!r}")


class DecodeError(GraphError):
    """Raised when a stored payload does not fit the requested shape."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to decode value at {key!r}: {reason}")


class EncodeError(GraphError):
    """Raised when a node payload cannot be serialised."""

    pass


class BackendUnavailableError(GraphError):
    """Raised for any failure reported by the key-value backend."""

    pass


class UnimplementedOperationError(GraphError):
    """Raised by a graph variant that does not support an operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operation not supported by this graph backend: {operation}")
