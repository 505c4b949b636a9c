"""
Graph layer for kvgraph.

Nodes and directed, metadata-bearing relations persisted in a key-value
store that only offers scalars, hashes and sets:
- Node payloads as JSON scalars (node:<id>)
- Outgoing edges and their metadata in a per-host hash (childrenOf:<id>)
- Incoming edges as a per-target set of hosts (parentOf:<id>)
"""

from .base import Graph, GraphResearcher, GraphStore
from .client import GraphClient
from .factory import create_graph
from .merge import merge_streams
from .relations import IndexInconsistency

__all__ = [
    "Graph",
    "GraphClient",
    "GraphResearcher",
    "GraphStore",
    "IndexInconsistency",
    "create_graph",
    "merge_streams",
]
