"""
Node value storage.

Each node is persisted as a single JSON document at ``node:<id>``:

    {"id": "<canonical id>", "data": <payload>}

Writes are unconditional upserts (full payload overwrite). Reads decode the
payload into a caller-supplied shape through a pydantic TypeAdapter, so the
caller states the expected type explicitly instead of relying on runtime
type inspection.
"""

import json
import logging
from typing import Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ..backend.base import KeyValueBackend
from ..errors import DecodeError, EncodeError, NodeNotFoundError
from ..keys import decode_node_key, encode_node_key
from ..models.graph import Node

logger = logging.getLogger(__name__)


class NodeStore:
    """Upsert, fetch and delete node payloads."""

    def __init__(self, backend: KeyValueBackend):
        self._backend = backend

    async def store_node(self, node: Node) -> tuple[str, bool]:
        """
        Create or overwrite a node.

        Returns:
            Tuple of (node value key, whether a value existed before this call)

        Raises:
            EncodeError: If the payload is not JSON-serialisable.
            BackendUnavailableError: On any backend failure.
        """
        key = encode_node_key(node.id)
        existed = await self._backend.exists(key)

        try:
            document = node.model_dump_json()
        except PydanticSerializationError as e:
            raise EncodeError(f"Node {node.id!r} payload is not serialisable: {e}") from e

        if existed:
            logger.debug(f"updating node {key}")
        else:
            logger.debug(f"creating node {key}")

        await self._backend.set(key, document)
        return key, existed

    async def retrieve_node(self, node_id: str, shape: Any = Any) -> Node:
        """
        Fetch a node and decode its payload into ``shape``.

        Args:
            node_id: Canonical or ``node:``-decorated id
            shape: Any type pydantic can validate against (model class,
                ``dict[str, str]``, ``list[int]``, ...). Defaults to ``Any``,
                which returns the JSON payload unchanged.

        Raises:
            NodeNotFoundError: If no value is stored for the id.
            DecodeError: If the stored value is corrupt, does not strictly fit
                ``shape``, or ``shape`` is not a type pydantic can validate.
        """
        key = encode_node_key(node_id)
        if not await self._backend.exists(key):
            raise NodeNotFoundError(decode_node_key(node_id))

        raw = await self._backend.get(key)
        if raw is None:
            # Deleted between the existence check and the read.
            raise NodeNotFoundError(decode_node_key(node_id))

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DecodeError(key, f"invalid JSON: {e}") from e

        if not isinstance(document, dict) or "data" not in document:
            raise DecodeError(key, "stored value is not a node document")

        try:
            adapter = TypeAdapter(shape)
        except PydanticSchemaGenerationError as e:
            raise DecodeError(key, f"unsupported shape {shape!r}: {e}") from e

        # Strict JSON mode: "5" is not an int, but ISO strings still decode to datetimes.
        try:
            data = adapter.validate_json(json.dumps(document["data"]), strict=True)
        except ValidationError as e:
            raise DecodeError(key, str(e)) from e

        return Node(id=decode_node_key(node_id), data=data)

    async def node_exists(self, node_id: str) -> bool:
        return await self._backend.exists(encode_node_key(node_id))

    async def delete_node(self, node_id: str) -> None:
        """
        Remove only the node value.

        Relations referencing the node are left in place; deleting a node
        that does not exist is a no-op, so retries are always safe.
        """
        key = encode_node_key(node_id)
        await self._backend.delete(key)
        logger.debug(f"deleted node {key}")
