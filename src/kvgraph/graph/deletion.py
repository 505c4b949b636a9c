"""
Cascading node deletion.

Removes every edge that references a node, then the node value itself.
Edge removals run one at a time: concurrent HDEL/SREM on the same
adjacency structures could interleave with each other's reads.

Failure mode: the first error aborts the cascade. Edges already removed
stay removed and the node value is left in place, so the call can simply
be retried.
"""

import logging

from ..keys import decode_node_key
from .nodes import NodeStore
from .relations import RelationIndex
from .traversal import TraversalEngine

logger = logging.getLogger(__name__)


class DeletionCoordinator:
    def __init__(self, nodes: NodeStore, index: RelationIndex, traversal: TraversalEngine):
        self._nodes = nodes
        self._index = index
        self._traversal = traversal

    async def delete_node(self, node_id: str) -> int:
        """
        Delete ``node_id`` together with all of its relations.

        Returns:
            Number of relation deletions applied.

        Raises:
            BackendUnavailableError: On the first backend failure. Earlier
                relation deletions are not rolled back.
        """
        node_id = decode_node_key(node_id)
        relations = [relation async for relation in self._traversal.related_nodes(node_id)]

        applied = 0
        for relation in relations:
            # The node is either the host or the target of every neighborhood edge.
            if relation.host == node_id:
                host, target = node_id, relation.target
            else:
                host, target = relation.host, node_id
            try:
                await self._index.delete_relation(host, target)
            except Exception:
                logger.warning(
                    f"Cascading delete of {node_id} aborted after {applied}/{len(relations)} relation deletions"
                )
                raise
            applied += 1

        await self._nodes.delete_node(node_id)
        logger.debug(f"cascading delete of {node_id} removed {applied} relations")
        return applied
