"""Graph data models."""

from .graph import Node, Relation, new_node_id

__all__ = ["Node", "Relation", "new_node_id"]
