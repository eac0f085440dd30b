"""
Settings for hierarchy construction.

Settings are immutable; pass a modified copy (``attrs.evolve``) to the
generator functions instead of changing the module default.
"""

import uuid
from typing import TYPE_CHECKING

from attrs import frozen

if TYPE_CHECKING:
    from layouttree.layout.registry import ComponentDef, ComponentRegistry

ROW_UUID_NAMESPACE = uuid.UUID("7d1f5c1e-3b8a-4c1e-9f57-3a0c2b6d9e41")

_default_registry: "ComponentRegistry | None" = None


def _builtin_registry() -> "ComponentRegistry":
    global _default_registry
    if _default_registry is None:
        # Import here to avoid circular imports
        from layouttree.layout.registry import default_registry

        _default_registry = default_registry()
    return _default_registry


@frozen
class HierarchySettings:
    """
    Options controlling how layouts are expanded into node trees.

    Params:
        strict_component_types: Reject components whose type has no definition.
            When False (the default), such components get the generic definition
            and a warning is logged.
        validate_bindings: Log a warning for each data model binding problem found
            while generating nodes.
        row_uuid_namespace: Namespace for row uuids derived from group id and row index
            when the repeating group state does not provide them.
        registry: Component registry, or None for the built-in types.
    """

    strict_component_types: bool = False
    validate_bindings: bool = False
    row_uuid_namespace: uuid.UUID = ROW_UUID_NAMESPACE
    registry: "ComponentRegistry | None" = None

    def get_registry(self) -> "ComponentRegistry":
        return self.registry if self.registry is not None else _builtin_registry()

    def row_uuid(self, group_instance_id: str, row_index: int) -> str:
        return str(uuid.uuid5(self.row_uuid_namespace, f"{group_instance_id}:{row_index}"))

    def definition_for(self, component_type: str) -> "ComponentDef | None":
        return self.get_registry().get(component_type)


DEFAULT_SETTINGS = HierarchySettings()
