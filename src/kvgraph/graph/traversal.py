"""
Read-side reconstruction of edges from the relation index.

Every operation returns a lazy, finite async iterator of Relation and reads
the current backend state when iteration starts; nothing is cached between
calls. Backend errors propagate to the consumer.
"""

import logging
from collections.abc import AsyncIterator

from ..keys import decode_node_key
from ..models.graph import Relation
from .merge import merge_streams
from .relations import RelationIndex

logger = logging.getLogger(__name__)


class TraversalEngine:
    """Children, parents and neighborhood queries over a RelationIndex."""

    def __init__(self, index: RelationIndex):
        self._index = index

    async def child_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        """Yield one relation per outgoing edge of ``node_id``."""
        node_id = decode_node_key(node_id)
        entries = await self._index.forward_entries(node_id)
        for target, metadata in entries.items():
            yield Relation.new(node_id, target, metadata)

    async def parent_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        """
        Yield one relation per incoming edge of ``node_id``.

        Hosts listed in the backward set whose forward hash has no data for
        ``node_id`` are still yielded, with empty metadata.
        """
        node_id = decode_node_key(node_id)
        hosts = await self._index.backward_members(node_id)
        for host in hosts:
            entries = await self._index.forward_entries(host)
            metadata = entries.get(node_id)
            if metadata is None:
                logger.debug(f"dangling backward reference {host} -> {node_id}")
                metadata = {}
            yield Relation.new(host, node_id, metadata)

    async def related_nodes(self, node_id: str) -> AsyncIterator[Relation]:
        """
        Yield children and parents of ``node_id``, scanned concurrently.

        Each edge is yielded once, so a self-loop found by both scans is not
        repeated. Emission order between the two scans is unspecified. Close
        the iterator (``aclose()``) to stop early; the scans are cancelled.
        """
        merged = merge_streams(self.child_nodes(node_id), self.parent_nodes(node_id))
        seen: set[tuple[str, str]] = set()
        try:
            async for relation in merged:
                if relation.edge in seen:
                    continue
                seen.add(relation.edge)
                yield relation
        finally:
            await merged.aclose()

    async def nodes_matching_metadata(self, node_id: str, key: str, value: str) -> AsyncIterator[Relation]:
        """Yield neighborhood relations whose metadata maps ``key`` exactly to ``value``."""
        related = self.related_nodes(node_id)
        try:
            async for relation in related:
                if relation.metadata.get(key) == value:
                    yield relation
        finally:
            await related.aclose()
