"""Graph data models.

Pydantic v2 models for nodes and relations. Identifiers are stored in
canonical form; any ``node:`` decoration supplied by callers is stripped
during validation.
"""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .validators import Metadata, NodeId


def new_node_id() -> str:
    """Generate a globally unique node identifier."""
    return str(uuid.uuid4())


class Node(BaseModel):
    """An identified entity with an opaque payload."""

    model_config = ConfigDict(frozen=True)

    id: NodeId = Field(default_factory=new_node_id)
    data: Any = None

    @classmethod
    def new(cls, data: Any) -> "Node":
        """Create a node with a freshly generated id."""
        return cls(data=data)


class Relation(BaseModel):
    """A directed, metadata-bearing link from ``host`` to ``target``."""

    model_config = ConfigDict(frozen=True)

    host: NodeId
    target: NodeId
    metadata: Metadata = Field(default_factory=dict)

    @classmethod
    def new(cls, host: str, target: str, metadata: dict[str, str] | None = None) -> "Relation":
        return cls(host=host, target=target, metadata=metadata)

    @property
    def edge(self) -> tuple[str, str]:
        """The (host, target) pair identifying this edge."""
        return self.host, self.target

    def involves(self, node_id: str) -> bool:
        return node_id in (self.host, self.target)
