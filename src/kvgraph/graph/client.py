"""
Key-value graph client.

Single canonical graph implementation expressed against the abstract
KeyValueBackend capability. Composes:
- NodeStore            node payloads at node:<id>
- RelationIndex        forward hash childrenOf:<id> / backward set parentOf:<id>
- TraversalEngine      children, parents, merged neighborhood, metadata filter
- DeletionCoordinator  cascading node removal

No locks are taken and no multi-key operation is transactional. Concurrent
writers touching the same edge can leave forward and backward adjacency
out of step; check_consistency() reports such gaps.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from ..backend.base import KeyValueBackend
from ..models.graph import Node, Relation
from .base import Graph
from .deletion import DeletionCoordinator
from .nodes import NodeStore
from .relations import IndexInconsistency, RelationIndex
from .traversal import TraversalEngine

logger = logging.getLogger(__name__)


class GraphClient(Graph):
    """
    Async graph over a key-value backend.

    Usage::

        backend = RedisBackend(url="redis://localhost:6379")
        async with GraphClient(backend) as graph:
            a, b = Node.new({"name": "a"}), Node.new({"name": "b"})
            await graph.store_node(a)
            await graph.store_node(b)
            await graph.store_relation(Relation.new(a.id, b.id, {"env": "dev"}))
            async for relation in graph.related_nodes(a.id):
                ...
    """

    def __init__(self, backend: KeyValueBackend):
        self._backend = backend
        self._nodes = NodeStore(backend)
        self._index = RelationIndex(backend)
        self._traversal = TraversalEngine(self._index)
        self._deletion = DeletionCoordinator(self._nodes, self._index, self._traversal)

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    # ── Lifecycle ───────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Initialize the backend if it has a lifecycle."""
        initialize = getattr(self._backend, "initialize", None)
        if initialize is not None:
            await initialize()
        logger.info("GraphClient initialized")

    async def close(self) -> None:
        close = getattr(self._backend, "close", None)
        if close is not None:
            await close()
        logger.info("GraphClient closed")

    async def __aenter__(self) -> "GraphClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ── Store ───────────────────────────────────────────────────────────

    async def store_node(self, node: Node) -> tuple[str, bool]:
        return await self._nodes.store_node(node)

    async def store_relation(self, relation: Relation) -> tuple[str, bool]:
        return await self._index.store_relation(relation)

    async def retrieve_node(self, node_id: str, shape: Any = Any) -> Node:
        return await self._nodes.retrieve_node(node_id, shape)

    async def delete_node(self, node_id: str) -> None:
        """Delete a node and every relation that references it (cascading)."""
        await self._deletion.delete_node(node_id)

    async def delete_node_value(self, node_id: str) -> None:
        """Delete only the node payload, leaving its relations in place."""
        await self._nodes.delete_node(node_id)

    async def delete_relation(self, host: str, target: str) -> None:
        await self._index.delete_relation(host, target)

    async def node_exists(self, node_id: str) -> bool:
        return await self._nodes.node_exists(node_id)

    async def has_relation(self, host: str, target: str) -> bool:
        """Per-edge existence check for host -> target."""
        return await self._index.has_relation(host, target)

    # ── Researcher ──────────────────────────────────────────────────────

    def related_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        return self._traversal.related_nodes(node_id)

    def child_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        return self._traversal.child_nodes(node_id)

    def parent_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        return self._traversal.parent_nodes(node_id)

    def nodes_matching_metadata(self, node_id: str, key: str, value: str) -> AsyncIterator[Relation]:
        return self._traversal.nodes_matching_metadata(node_id, key, value)

    # ── Diagnostics ─────────────────────────────────────────────────────

    async def check_consistency(self, node_id: str) -> list[IndexInconsistency]:
        """Report forward/backward adjacency mismatches around ``node_id``."""
        return await self._index.check_consistency(node_id)
