"""
Pydantic models for flat layouts and repeating group state.

Layout JSON uses camelCase keys; the models expose snake_case attributes and
accept either spelling on input. Component types carry arbitrary extra
fields (``size``, ``readOnly``, ``textResourceBindings`` ...), which are kept
as-is so a component survives a round trip through the hierarchy builder.
"""

import re
from typing import Any

from inflection import camelize
from pydantic import BaseModel, ConfigDict

from layouttree.core.types import RawLayout, RawRepeatingGroups

_MULTI_PAGE_CHILD = re.compile(r"^(\d+):(.+)$")


def _to_layout_key(name: str) -> str:
    return camelize(name, uppercase_first_letter=False)


class LayoutModel(BaseModel):
    """Base class for layout models using camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=_to_layout_key,
        populate_by_name=True,
    )


class EditFilter(LayoutModel):
    key: str
    value: str | int


class GroupEdit(LayoutModel):
    """Edit options of a group. Only the fields the hierarchy needs are typed."""

    model_config = ConfigDict(extra="allow")

    multi_page: bool | None = None
    filter: list[EditFilter] | None = None

    def filter_value(self, key: str) -> str | None:
        for entry in self.filter or []:
            if entry.key == key:
                return str(entry.value)
        return None


class ComponentDefinition(LayoutModel):
    """
    One component in a flat layout, or one instance of it in a hierarchy.

    The fields below the blank line are never present in a flat layout. They
    are filled in by the hierarchy builder:

    - ``base_component_id``: id before row suffixes were added
    - ``base_data_model_bindings``: binding templates before row transposition
    - ``multi_page_index``: page prefix of a ``"N:childId"`` reference
    - ``child_components``: instantiated children of a non-repeating group
    - ``rows``: instantiated rows of a repeating group
    """

    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    data_model_bindings: dict[str, str] | None = None
    children: list[str] | None = None
    max_count: int | None = None
    edit: GroupEdit | None = None
    hidden: Any = None

    base_component_id: str | None = None
    base_data_model_bindings: dict[str, str] | None = None
    multi_page_index: int | None = None
    child_components: list["ComponentDefinition"] | None = None
    rows: list["HierarchyRow"] | None = None

    def first_data_model_binding(self) -> str | None:
        """Return the first declared binding, used as the node's location in the data model."""
        if not self.data_model_bindings:
            return None
        return next(iter(self.data_model_bindings.values()), None)

    def to_layout_dict(self) -> dict[str, Any]:
        """Dump the component using layout JSON keys, leaving out unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class HierarchyRow(LayoutModel):
    """One row of a repeating group in an expanded hierarchy."""

    index: int
    uuid: str
    items: list[ComponentDefinition]


ComponentDefinition.model_rebuild()


class RepeatingGroupEntry(LayoutModel):
    """
    Row state for one repeating group instance.

    ``index`` is the highest existing row index, so the row count is
    ``index + 1``; ``-1`` (the default) means no rows.
    """

    index: int = -1
    base_group_id: str | None = None
    row_uuids: list[str] | None = None

    @property
    def row_count(self) -> int:
        return max(self.index + 1, 0)


RepeatingGroups = dict[str, RepeatingGroupEntry]


def parse_child_reference(reference: str) -> tuple[int | None, str]:
    """
    Split a group child reference into its page index and child id.

    Params:
        reference: Child reference from a group's ``children`` list

    Returns:
        Tuple of (multi page index or None, child id)

    Examples:
        "1:name" -> (1, "name")
        "name" -> (None, "name")
    """
    match = _MULTI_PAGE_CHILD.match(reference)
    if match:
        return int(match.group(1)), match.group(2)
    return None, reference


def parse_layout(
    layout: RawLayout | list[ComponentDefinition],
) -> list[ComponentDefinition]:
    """
    Validate a flat layout.

    Params:
        layout: Component dicts as loaded from layout JSON, or already parsed components

    Returns:
        List of ComponentDefinition in declaration order

    Raises:
        pydantic.ValidationError: If a component lacks ``id`` or ``type``
    """
    return [
        component
        if isinstance(component, ComponentDefinition)
        else ComponentDefinition.model_validate(component)
        for component in layout
    ]


def parse_repeating_groups(
    repeating_groups: RawRepeatingGroups | RepeatingGroups | None,
) -> RepeatingGroups:
    """
    Validate repeating group state.

    Params:
        repeating_groups: Mapping from row-scoped group id to ``{index, baseGroupId}``

    Returns:
        Mapping from row-scoped group id to RepeatingGroupEntry
    """
    if not repeating_groups:
        return {}
    return {
        key: entry
        if isinstance(entry, RepeatingGroupEntry)
        else RepeatingGroupEntry.model_validate(entry)
        for key, entry in repeating_groups.items()
    }
