"""
Flat layout models, component definitions and hierarchy expansion.
"""

from layouttree.layout.hierarchy import (
    HierarchyBuilder,
    get_repeating_group_start_stop_index,
    layout_as_hierarchy,
    layout_as_hierarchy_with_rows,
)
from layouttree.layout.models import (
    ComponentDefinition,
    EditFilter,
    GroupEdit,
    HierarchyRow,
    RepeatingGroupEntry,
    RepeatingGroups,
    parse_child_reference,
    parse_layout,
    parse_repeating_groups,
)
from layouttree.layout.registry import (
    ComponentCategory,
    ComponentDef,
    ComponentRegistry,
    ContainerDef,
    FormComponentDef,
    GroupDef,
    RepeatingGroupDef,
    default_registry,
)

__all__ = [
    "ComponentCategory",
    "ComponentDef",
    "ComponentDefinition",
    "ComponentRegistry",
    "ContainerDef",
    "EditFilter",
    "FormComponentDef",
    "GroupDef",
    "GroupEdit",
    "HierarchyBuilder",
    "HierarchyRow",
    "RepeatingGroupDef",
    "RepeatingGroupEntry",
    "RepeatingGroups",
    "default_registry",
    "get_repeating_group_start_stop_index",
    "layout_as_hierarchy",
    "layout_as_hierarchy_with_rows",
    "parse_child_reference",
    "parse_layout",
    "parse_repeating_groups",
]
