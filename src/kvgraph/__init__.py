"""kvgraph: a directed property graph stored in Redis hashes and sets."""

from .backend import KeyValueBackend, RedisBackend
from .errors import (
    BackendUnavailableError,
    DecodeError,
    EncodeError,
    GraphError,
    NodeNotFoundError,
    UnimplementedOperationError,
)
from .graph import Graph, GraphClient, IndexInconsistency, create_graph
from .models import Node, Relation

__version__ = "0.1.0"

__all__ = [
    "BackendUnavailableError",
    "DecodeError",
    "EncodeError",
    "Graph",
    "GraphClient",
    "GraphError",
    "IndexInconsistency",
    "KeyValueBackend",
    "Node",
    "NodeNotFoundError",
    "Relation",
    "RedisBackend",
    "UnimplementedOperationError",
    "create_graph",
]
