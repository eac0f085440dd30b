"""
LayoutTree - Row-expanded component trees for data-driven form layouts

LayoutTree turns a flat form layout plus repeating group state into a
navigable tree of component instances, with data model bindings transposed
into the repeating group rows each instance lives in.
"""

from importlib.metadata import version

from layouttree.config import DEFAULT_SETTINGS, HierarchySettings
from layouttree.layout import (
    ComponentDefinition,
    ComponentRegistry,
    layout_as_hierarchy,
    layout_as_hierarchy_with_rows,
)
from layouttree.nodes import (
    LayoutNode,
    LayoutPage,
    LayoutPages,
    NodesDataStore,
    generate_entire_hierarchy,
    nodes_in_layout,
)

__version__ = version("layouttree")

__all__ = [
    "__version__",
    "ComponentDefinition",
    "ComponentRegistry",
    "DEFAULT_SETTINGS",
    "HierarchySettings",
    "LayoutNode",
    "LayoutPage",
    "LayoutPages",
    "NodesDataStore",
    "generate_entire_hierarchy",
    "layout_as_hierarchy",
    "layout_as_hierarchy_with_rows",
    "nodes_in_layout",
]
