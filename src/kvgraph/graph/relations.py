"""
Relation index: forward and backward adjacency for directed edges.

Every edge host -> target is recorded twice:
    childrenOf:<host>  (hash)  target:<target> plus meta:<target>:<k> per metadata entry
    parentOf:<target>  (set)   contains <host>

The two writes are separate backend calls. If the second one fails after
the first succeeded the indices disagree; nothing here repairs that, but
check_consistency() reports it.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from ..backend.base import KeyValueBackend
from ..keys import (
    TARGET_FIELD_PREFIX,
    decode_forward_fields,
    decode_node_key,
    encode_backward_key,
    encode_forward_key,
    fields_owned_by,
    meta_field,
    target_field,
)
from ..models.graph import Relation

logger = logging.getLogger(__name__)

InconsistencyKind = Literal["missing_backward", "missing_forward"]


@dataclass(frozen=True)
class IndexInconsistency:
    """A forward/backward adjacency mismatch for one edge."""

    kind: InconsistencyKind
    host: str
    target: str


class RelationIndex:
    """Store, delete and decode edges in the adjacency structures."""

    def __init__(self, backend: KeyValueBackend):
        self._backend = backend

    # ── Writes ──────────────────────────────────────────────────────────

    async def store_relation(self, relation: Relation) -> tuple[str, bool]:
        """
        Create or update an edge.

        Metadata is merged field by field into the existing entry; keys not
        present in ``relation.metadata`` keep their previous values.

        Returns:
            Tuple of (forward-adjacency key, whether the host's forward
            adjacency existed before this call). The flag is per host, not
            per edge; use has_relation() for per-edge existence.

        Raises:
            BackendUnavailableError: On any backend failure. If the backward
                write fails, the forward entry has already been written.
        """
        forward_key = encode_forward_key(relation.host)
        backward_key = encode_backward_key(relation.target)

        existed = await self._backend.exists(forward_key)

        fields = {target_field(relation.target): relation.target}
        for key, value in relation.metadata.items():
            fields[meta_field(relation.target, key)] = value

        await self._backend.hset(forward_key, fields)

        if existed:
            logger.debug(f"updating relation {forward_key} -> {relation.target}")
        else:
            logger.debug(f"created relation {forward_key} -> {relation.target}")

        await self._backend.sadd(backward_key, relation.host)
        return forward_key, existed

    async def delete_relation(self, host: str, target: str) -> None:
        """
        Remove the edge host -> target and all of its metadata.

        Only fields owned by exactly ``target`` are removed; other edges of
        ``host`` are untouched. Deleting a missing edge is a no-op.
        """
        host, target = decode_node_key(host), decode_node_key(target)
        forward_key = encode_forward_key(host)

        fields = await self._backend.hgetall(forward_key)
        owned = fields_owned_by(fields, target)
        if owned:
            await self._backend.hdel(forward_key, *owned)

        await self._backend.srem(encode_backward_key(target), host)
        logger.debug(f"deleted relation {forward_key} -> {target} ({len(owned)} fields)")

    # ── Reads ───────────────────────────────────────────────────────────

    async def forward_entries(self, host: str) -> dict[str, dict[str, str]]:
        """Return ``{target: metadata}`` for every outgoing edge of ``host``."""
        fields = await self._backend.hgetall(encode_forward_key(decode_node_key(host)))
        return decode_forward_fields(fields)

    async def backward_members(self, target: str) -> set[str]:
        """Return the hosts recorded as having an edge into ``target``."""
        return await self._backend.smembers(encode_backward_key(decode_node_key(target)))

    async def has_relation(self, host: str, target: str) -> bool:
        fields = await self._backend.hgetall(encode_forward_key(decode_node_key(host)))
        return target_field(decode_node_key(target)) in fields

    # ── Consistency ─────────────────────────────────────────────────────

    async def check_consistency(self, node_id: str) -> list[IndexInconsistency]:
        """
        Compare forward and backward adjacency around ``node_id``.

        Reports outgoing edges whose target set lacks ``node_id`` and
        incoming memberships whose host hash lacks the edge. Read-only.
        """
        node_id = decode_node_key(node_id)
        issues: list[IndexInconsistency] = []

        fields = await self._backend.hgetall(encode_forward_key(node_id))
        for name in fields:
            if not name.startswith(TARGET_FIELD_PREFIX):
                continue
            target = name[len(TARGET_FIELD_PREFIX) :]
            if node_id not in await self.backward_members(target):
                issues.append(IndexInconsistency("missing_backward", node_id, target))

        for host in await self.backward_members(node_id):
            if not await self.has_relation(host, node_id):
                issues.append(IndexInconsistency("missing_forward", host, node_id))

        for issue in issues:
            logger.warning(f"Index inconsistency ({issue.kind}): {issue.host} -> {issue.target}")

        return issues
