"""
Runtime node trees.

This package turns expanded layout hierarchies into navigable trees of
LayoutNode objects, grouped per page, backed by a versioned data store.
"""

from layouttree.nodes.context import GeneratorContext
from layouttree.nodes.generator import (
    NodesGenerator,
    generate_entire_hierarchy,
    nodes_in_layout,
)
from layouttree.nodes.node import (
    BaseRow,
    ChildLookupRestriction,
    LayoutNode,
    NodeRow,
)
from layouttree.nodes.page import LayoutPage, LayoutPages
from layouttree.nodes.selectors import get_node_form_data, nodes_for_deep_validation
from layouttree.nodes.store import NodeData, NodesDataStore

__all__ = [
    "BaseRow",
    "ChildLookupRestriction",
    "GeneratorContext",
    "LayoutNode",
    "LayoutPage",
    "LayoutPages",
    "NodeData",
    "NodeRow",
    "NodesDataStore",
    "NodesGenerator",
    "generate_entire_hierarchy",
    "get_node_form_data",
    "nodes_for_deep_validation",
    "nodes_in_layout",
]
