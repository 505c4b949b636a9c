"""
Abstract graph contract.

GraphStore covers writes and point reads, GraphResearcher covers
neighborhood queries. Graph combines both. Implementations that cannot
support an operation must raise UnimplementedOperationError rather than
silently return nothing.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from ..errors import UnimplementedOperationError
from ..models.graph import Node, Relation


class GraphStore(ABC):
    """Write side of the graph plus node retrieval."""

    @abstractmethod
    async def store_node(self, node: Node) -> tuple[str, bool]:
        """Upsert a node. Returns (node key, existed before)."""
        pass

    @abstractmethod
    async def store_relation(self, relation: Relation) -> tuple[str, bool]:
        """Upsert an edge. Returns (forward key, host adjacency existed before)."""
        pass

    @abstractmethod
    async def retrieve_node(self, node_id: str, shape: Any = Any) -> Node:
        """Fetch a node, decoding its payload into ``shape``."""
        pass

    @abstractmethod
    async def delete_node(self, node_id: str) -> None:
        """Delete a node and every relation referencing it."""
        pass

    @abstractmethod
    async def delete_relation(self, host: str, target: str) -> None:
        """Delete one edge. Missing edges are a no-op."""
        pass


class GraphResearcher(ABC):
    """Neighborhood queries."""

    @abstractmethod
    def related_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        pass

    @abstractmethod
    def child_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        pass

    @abstractmethod
    def parent_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        pass

    def nodes_matching_metadata(self, node_id: str, key: str, value: str) -> AsyncIterator[Relation]:
        """Neighborhood relations whose metadata maps ``key`` to ``value``."""
        raise UnimplementedOperationError("nodes_matching_metadata")


class Graph(GraphStore, GraphResearcher):
    pass
