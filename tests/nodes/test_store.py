"""
Tests for the node data store and node staleness across generations.

Focus Areas:
1. Nodes reading their data through the store
2. Single-item updates between generations
3. Detecting nodes from an older generation
"""

import pytest

from layouttree.exceptions import StaleNodeError
from layouttree.layout.models import ComponentDefinition
from layouttree.nodes import (
    LayoutPages,
    NodeData,
    NodesDataStore,
    generate_entire_hierarchy,
    nodes_in_layout,
)


@pytest.fixture
def store():
    return NodesDataStore()


class TestNodesDataStore:
    """Test the store on its own."""

    def test_empty_store(self, store):
        assert store.generation == 0
        assert store.version == 0
        assert store.pick(("page", "a")) is None
        assert store.page_keys() == []

    def test_commit_replaces_contents(self, store):
        item = ComponentDefinition(id="a", type="Input")
        store.commit(1, {"page": {"a": NodeData(item=item, generation=1)}})
        assert store.pick(("page", "a")).item is item
        store.commit(2, {"other": {}})
        assert store.pick(("page", "a")) is None
        assert store.page_keys() == ["other"]
        assert store.generation == 2
        assert store.version == 2

    def test_commit_requires_newer_generation(self, store):
        store.commit(3, {})
        with pytest.raises(ValueError):
            store.commit(3, {})
        with pytest.raises(ValueError):
            store.commit(2, {})

    def test_set_item(self, store):
        item = ComponentDefinition(id="a", type="Input")
        store.commit(1, {"page": {"a": NodeData(item=item, generation=1)}})
        updated = item.model_copy(update={"hidden": True})
        store.set_item(("page", "a"), updated)
        assert store.pick(("page", "a")).item.hidden is True
        assert store.pick(("page", "a")).generation == 1
        assert store.version == 2

    def test_set_item_on_missing_path(self, store):
        with pytest.raises(KeyError):
            store.set_item(("page", "a"), ComponentDefinition(id="a", type="Input"))

    def test_remove(self, store):
        item = ComponentDefinition(id="a", type="Input")
        store.commit(1, {"page": {"a": NodeData(item=item, generation=1)}})
        store.remove(("page", "a"))
        store.remove(("page", "a"))
        assert store.node_ids("page") == []
        assert store.version == 2


class TestNodeStaleness:
    """Test nodes held across tree regenerations."""

    def test_nodes_read_through_store(self, layout, repeating_groups, store):
        page = nodes_in_layout(layout, repeating_groups, store=store)
        node = page.find_by_id("group2_input-1")
        updated = node.item.model_copy(update={"readOnly": True})
        store.set_item(node.path, updated)
        assert node.item.readOnly is True

    def test_removed_node_raises_stale_error(self, layout, repeating_groups, store):
        page = nodes_in_layout(layout, repeating_groups, store=store)
        old_node = page.find_by_id("group2_input-1")
        assert not old_node.is_stale()

        nodes_in_layout(layout, {"group2": {"index": 0}}, store=store)

        assert old_node.is_stale()
        with pytest.raises(StaleNodeError) as exc_info:
            old_node.item
        assert exc_info.value.path == ("page", "group2_input-1")
        assert str(exc_info.value) == "Node not found in path: /page/group2_input-1"

    def test_surviving_node_is_stale_but_readable(self, layout, repeating_groups, store):
        page = nodes_in_layout(layout, repeating_groups, store=store)
        old_top = page.find_by_id("top1")
        nodes_in_layout(layout, repeating_groups, store=store)
        assert old_top.is_stale()
        assert old_top.item.id == "top1"

    def test_resolve_refreshes_node(self, layout, repeating_groups, store):
        old = nodes_in_layout(layout, repeating_groups, store=store)
        old_node = old.find_by_id("group2_input-0")
        pages = generate_entire_hierarchy({"page": layout}, "page", repeating_groups, store)
        assert isinstance(pages, LayoutPages)
        fresh = pages.resolve(old_node)
        assert fresh is not old_node
        assert fresh.get_id() == "group2_input-0"
        assert not fresh.is_stale()

    def test_resolve_gone_node(self, layout, repeating_groups, store):
        old_node = nodes_in_layout(layout, repeating_groups, store=store).find_by_id(
            "group2_input-1"
        )
        pages = generate_entire_hierarchy({"page": layout}, "page", {}, store)
        assert pages.resolve(old_node) is None

    def test_generations_count_up(self, layout, store):
        first = nodes_in_layout(layout, store=store)
        second = nodes_in_layout(layout, store=store)
        assert (first.generation, second.generation) == (1, 2)
        assert store.generation == 2
