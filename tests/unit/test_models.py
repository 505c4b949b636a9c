"""Tests for Node and Relation models."""

import uuid

import pytest
from pydantic import ValidationError

from kvgraph.models.graph import Node, Relation


class TestNode:
    def test_new_generates_uuid(self):
        node = Node.new({"name": "a"})

        uuid.UUID(node.id)
        assert node.data == {"name": "a"}

    def test_ids_are_unique(self):
        assert Node.new(None).id != Node.new(None).id

    def test_decorated_id_is_canonicalised(self):
        assert Node(id="node:abc", data=1).id == "abc"

    def test_id_is_immutable(self):
        node = Node(id="abc", data=1)

        with pytest.raises(ValidationError):
            node.id = "other"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Node(id="", data=1)

    def test_id_with_separator_rejected(self):
        with pytest.raises(ValidationError):
            Node(id="a:b", data=1)


class TestRelation:
    def test_new_defaults_to_empty_metadata(self):
        relation = Relation.new("a", "b")

        assert relation.metadata == {}
        assert relation.edge == ("a", "b")

    def test_endpoints_are_canonicalised(self):
        relation = Relation.new("node:a", "node:b", {"env": "dev"})

        assert relation.host == "a"
        assert relation.target == "b"
        assert relation.metadata == {"env": "dev"}

    def test_equality_includes_metadata(self):
        assert Relation.new("a", "b", {"k": "v"}) == Relation.new("a", "b", {"k": "v"})
        assert Relation.new("a", "b", {"k": "v"}) != Relation.new("a", "b", {"k": "w"})

    def test_metadata_values_must_be_strings(self):
        with pytest.raises(ValidationError):
            Relation.new("a", "b", {"k": 1})

    def test_involves(self):
        relation = Relation.new("a", "b")

        assert relation.involves("a")
        assert relation.involves("b")
        assert not relation.involves("c")

    def test_metadata_key_with_separator_rejected(self):
        with pytest.raises(ValidationError, match="metadata keys"):
            Relation.new("H", "a", {"b:c": "1"})

    @pytest.mark.parametrize("host,target", [("H", "a:b"), ("h:x", "a"), ("node:a:b", "c")])
    def test_endpoint_with_separator_rejected(self, host, target):
        with pytest.raises(ValidationError, match="node id"):
            Relation.new(host, target)
