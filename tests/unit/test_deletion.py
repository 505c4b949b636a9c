"""
Unit tests for DeletionCoordinator.

Validates host/target orientation of cascaded deletions, sequential
application, and the documented partial-effect failure mode.
"""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def components(backend):
    from kvgraph.graph.deletion import DeletionCoordinator
    from kvgraph.graph.nodes import NodeStore
    from kvgraph.graph.relations import RelationIndex
    from kvgraph.graph.traversal import TraversalEngine

    nodes = NodeStore(backend)
    index = RelationIndex(backend)
    traversal = TraversalEngine(index)
    return nodes, index, DeletionCoordinator(nodes, index, traversal)


class TestCascadingDelete:
    @pytest.mark.asyncio
    async def test_deletes_with_correct_orientation(self, components):
        from kvgraph.models.graph import Node, Relation

        nodes, index, coordinator = components
        await nodes.store_node(Node(id="X", data=1))
        await index.store_relation(Relation.new("X", "child"))
        await index.store_relation(Relation.new("parent", "X"))

        calls = []
        original = index.delete_relation

        async def spy(host, target):
            calls.append((host, target))
            await original(host, target)

        index.delete_relation = spy

        applied = await coordinator.delete_node("X")

        assert applied == 2
        assert sorted(calls) == [("X", "child"), ("parent", "X")]
        assert await nodes.node_exists("X") is False

    @pytest.mark.asyncio
    async def test_deletions_are_sequential(self, components):
        import asyncio

        from kvgraph.models.graph import Relation

        nodes, index, coordinator = components
        for target in ("a", "b", "c"):
            await index.store_relation(Relation.new("X", target))

        in_flight = 0
        peak = 0
        original = index.delete_relation

        async def tracking(host, target):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0)
            await original(host, target)
            in_flight -= 1

        index.delete_relation = tracking

        await coordinator.delete_node("X")

        assert peak == 1

    @pytest.mark.asyncio
    async def test_self_loop(self, components):
        from kvgraph.models.graph import Node, Relation

        nodes, index, coordinator = components
        await nodes.store_node(Node(id="X", data=1))
        await index.store_relation(Relation.new("X", "X", {"loop": "yes"}))

        applied = await coordinator.delete_node("X")

        assert applied == 1
        assert await index.forward_entries("X") == {}
        assert await index.backward_members("X") == set()

    @pytest.mark.asyncio
    async def test_failure_aborts_without_rollback(self, components):
        from kvgraph.errors import BackendUnavailableError
        from kvgraph.models.graph import Node, Relation

        nodes, index, coordinator = components
        await nodes.store_node(Node(id="X", data=1))
        for target in ("a", "b", "c"):
            await index.store_relation(Relation.new("X", target))

        original = index.delete_relation
        calls = 0

        async def flaky(host, target):
            nonlocal calls
            calls += 1
            if calls == 2:
                raise BackendUnavailableError("down")
            await original(host, target)

        index.delete_relation = flaky

        with pytest.raises(BackendUnavailableError):
            await coordinator.delete_node("X")

        # First deletion applied and kept, remaining edges and node value untouched
        assert len(await index.forward_entries("X")) == 2
        assert await nodes.node_exists("X") is True

        # Retrying after recovery completes the cascade
        index.delete_relation = original
        await coordinator.delete_node("X")
        assert await index.forward_entries("X") == {}
        assert await nodes.node_exists("X") is False

    @pytest.mark.asyncio
    async def test_node_value_failure_after_relations_removed(self, components):
        from kvgraph.errors import BackendUnavailableError
        from kvgraph.models.graph import Relation

        nodes, index, coordinator = components
        await index.store_relation(Relation.new("X", "a"))
        nodes.delete_node = AsyncMock(side_effect=BackendUnavailableError("down"))

        with pytest.raises(BackendUnavailableError):
            await coordinator.delete_node("X")

        assert await index.forward_entries("X") == {}
