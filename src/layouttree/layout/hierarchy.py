"""
Expansion of flat layouts into nested component hierarchies.

A flat layout lists every component once, with groups pointing at their
children by id. This module turns it into a nested structure: groups get
their children inline, and (when repeating group state is supplied)
repeating groups get one row per existing row index, each row holding its
own copy of the group's children with row-suffixed ids and data model
bindings transposed into that row.
"""

import logging

from attrs import evolve, frozen

from layouttree.config import DEFAULT_SETTINGS, HierarchySettings
from layouttree.core.data_binding import DataBinding, transpose_data_binding
from layouttree.core.types import RawLayout, RawRepeatingGroups
from layouttree.exceptions import (
    CyclicChildReferenceError,
    DataBindingSyntaxError,
    DuplicateChildClaimError,
    DuplicateComponentIdError,
    ErrorContext,
    MissingChildComponentError,
    UnknownComponentTypeError,
)
from layouttree.layout.models import (
    ComponentDefinition,
    GroupEdit,
    HierarchyRow,
    RepeatingGroupEntry,
    RepeatingGroups,
    parse_layout,
    parse_repeating_groups,
)
from layouttree.layout.registry import GENERIC_DEFINITION, ComponentDef

logger = logging.getLogger(__name__)

_VISITING = 1
_DONE = 2


@frozen
class InstanceContext:
    """
    Row scope threaded through recursive instantiation.

    Params:
        suffix: Row indices of every enclosing repeating group, outermost first
        location: Binding of the innermost enclosing row, with its row index applied
        chain: Ids of the components being instantiated above this one
    """

    suffix: tuple[int, ...] = ()
    location: str | None = None
    chain: tuple[str, ...] = ()

    def instance_id(self, base_id: str) -> str:
        if not self.suffix:
            return base_id
        return "-".join([base_id, *(str(index) for index in self.suffix)])


def _filter_bound(edit: GroupEdit | None, key: str, group_id: str | None) -> int | None:
    value = edit.filter_value(key) if edit else None
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "Group '%s' has non-integer filter %s '%s', ignoring it", group_id, key, value
        )
        return None


def get_repeating_group_start_stop_index(
    index: int, edit: GroupEdit | None, group_id: str | None = None
) -> tuple[int, int]:
    """
    Find the first and last row to instantiate for a repeating group.

    The ``start`` and ``stop`` entries of ``edit.filter`` narrow the rows to
    ``start .. stop - 1``. The result never goes past the existing rows.
    Entries whose value is not an integer are ignored.

    Params:
        index: Highest existing row index (-1 for no rows)
        edit: Edit options of the group
        group_id: Group id used in log messages

    Returns:
        Tuple of (start index, stop index), both inclusive. Empty when start > stop.
    """
    start = _filter_bound(edit, "start", group_id)
    stop = _filter_bound(edit, "stop", group_id)
    start = start if start is not None else 0
    stop = stop - 1 if stop is not None else index
    return max(start, 0), min(stop, index)


class HierarchyBuilder:
    """
    Builds the nested hierarchy for one flat layout.

    Construction validates the layout up front: ids must be unique, every
    child reference must resolve, no component may be claimed by two groups
    and child references may not form a cycle. Any violation is raised
    before anything is built.
    """

    def __init__(
        self,
        layout: RawLayout | list[ComponentDefinition],
        repeating_groups: RawRepeatingGroups | RepeatingGroups | None = None,
        settings: HierarchySettings = DEFAULT_SETTINGS,
        page_key: str | None = None,
    ):
        self.settings = settings
        self.page_key = page_key
        self.components = parse_layout(layout)
        self.repeating_groups = parse_repeating_groups(repeating_groups)
        self._used_entries: set[str] = set()

        self.by_id: dict[str, ComponentDefinition] = {}
        for component in self.components:
            if component.id in self.by_id:
                raise DuplicateComponentIdError(component.id, page_key)
            self.by_id[component.id] = component

        self.claimed_by: dict[str, str] = {}
        for component in self.components:
            definition = self.definition(component)
            for _, child_id in definition.claim_children(component):
                if child_id not in self.by_id:
                    raise MissingChildComponentError(
                        component.id,
                        child_id,
                        ErrorContext(
                            page_key=page_key,
                            component_id=child_id,
                            parent_id=component.id,
                        ),
                    )
                if child_id in self.claimed_by:
                    raise DuplicateChildClaimError(
                        child_id, self.claimed_by[child_id], component.id
                    )
                self.claimed_by[child_id] = component.id

        self._assert_acyclic()

    def definition(self, component: ComponentDefinition) -> ComponentDef:
        """
        Look up the definition for a component's type.

        Raises:
            UnknownComponentTypeError: If the type is unregistered and settings are strict
        """
        definition = self.settings.definition_for(component.type)
        if definition is not None:
            return definition
        if self.settings.strict_component_types:
            raise UnknownComponentTypeError(component.id, component.type)
        logger.warning(
            "Component '%s' has unknown type '%s', using generic definition",
            component.id,
            component.type,
        )
        return GENERIC_DEFINITION

    def top_level(self) -> list[ComponentDefinition]:
        """Return components not claimed by any group, in declaration order."""
        return [c for c in self.components if c.id not in self.claimed_by]

    def _assert_acyclic(self) -> None:
        state: dict[str, int] = {}

        def visit(component_id: str, path: list[str]) -> None:
            state[component_id] = _VISITING
            component = self.by_id[component_id]
            for _, child_id in self.definition(component).claim_children(component):
                if state.get(child_id) == _VISITING:
                    cycle = path[path.index(child_id):] + [child_id]
                    raise CyclicChildReferenceError(
                        cycle,
                        ErrorContext(page_key=self.page_key, reference_chain=cycle),
                    )
                if child_id not in state:
                    visit(child_id, path + [child_id])
            state[component_id] = _DONE

        for component in self.components:
            if component.id not in state:
                visit(component.id, [component.id])

    def build(self, with_rows: bool = True) -> list[ComponentDefinition]:
        """
        Instantiate every top-level component recursively.

        Params:
            with_rows: Expand repeating groups into rows. When False, every
                group (repeating or not) gets its template children once.

        Returns:
            List of instantiated top-level components
        """
        self._used_entries.clear()
        result = [
            self._instantiate(component, None, InstanceContext(), with_rows)
            for component in self.top_level()
        ]
        if with_rows:
            unused = sorted(set(self.repeating_groups) - self._used_entries)
            if unused:
                logger.debug(
                    "Repeating group state without a matching group instance: %s",
                    ", ".join(unused),
                )
        return result

    def _instantiate(
        self,
        component: ComponentDefinition,
        multi_page_index: int | None,
        context: InstanceContext,
        with_rows: bool,
    ) -> ComponentDefinition:
        if component.id in context.chain:
            chain = [*context.chain, component.id]
            raise CyclicChildReferenceError(
                chain, ErrorContext(page_key=self.page_key, reference_chain=chain)
            )

        definition = self.definition(component)
        updates = {}
        if context.suffix:
            updates["id"] = context.instance_id(component.id)
            updates["base_component_id"] = component.id
            if component.data_model_bindings:
                updates["base_data_model_bindings"] = dict(component.data_model_bindings)
                updates["data_model_bindings"] = {
                    key: self._transpose(path, context)
                    for key, path in component.data_model_bindings.items()
                }
        if multi_page_index is not None:
            updates["multi_page_index"] = multi_page_index
        item = component.model_copy(update=updates, deep=True)

        references = definition.claim_children(component)
        if not definition.is_container():
            return item

        child_context = evolve(context, chain=(*context.chain, component.id))
        if with_rows and definition.is_repeating(component):
            item.rows = self._build_rows(item, references, child_context)
        else:
            item.child_components = [
                self._instantiate(self.by_id[child_id], index, child_context, with_rows)
                for index, child_id in references
            ]
        return item

    def _build_rows(
        self,
        item: ComponentDefinition,
        references: list[tuple[int | None, str]],
        context: InstanceContext,
    ) -> list[HierarchyRow]:
        entry = self.repeating_groups.get(item.id)
        if entry is None:
            logger.debug("No repeating group state for '%s', no rows", item.id)
            return []

        self._used_entries.add(item.id)
        base_id = item.base_component_id or item.id
        if entry.base_group_id is not None and entry.base_group_id != base_id:
            logger.warning(
                "Repeating group state '%s' belongs to '%s', not '%s'",
                item.id,
                entry.base_group_id,
                base_id,
            )

        group_binding = item.first_data_model_binding()
        start, stop = get_repeating_group_start_stop_index(entry.index, item.edit, item.id)
        rows = []
        for index in range(start, stop + 1):
            row_context = evolve(
                context,
                suffix=(*context.suffix, index),
                location=self._row_location(group_binding, index, context),
            )
            rows.append(
                HierarchyRow(
                    index=index,
                    uuid=self._row_uuid(item.id, entry, index),
                    items=[
                        self._instantiate(self.by_id[child_id], page_index, row_context, True)
                        for page_index, child_id in references
                    ],
                )
            )
        return rows

    def _row_location(
        self, group_binding: str | None, index: int, context: InstanceContext
    ) -> str | None:
        if group_binding is None:
            return context.location
        try:
            binding = DataBinding.parse(group_binding)
        except DataBindingSyntaxError as e:
            logger.warning("%s, rows keep the enclosing location", e)
            return context.location
        if not binding.parts:
            return context.location
        binding.set_index(len(binding.parts) - 1, index)
        return str(binding)

    def _row_uuid(self, group_id: str, entry: RepeatingGroupEntry, index: int) -> str:
        if entry.row_uuids and index < len(entry.row_uuids):
            return entry.row_uuids[index]
        return self.settings.row_uuid(group_id, index)

    @staticmethod
    def _transpose(path: str, context: InstanceContext) -> str:
        if context.location is None:
            return path
        try:
            return transpose_data_binding(
                path, context.location, overwrite_existing_indices=False
            )
        except DataBindingSyntaxError as e:
            logger.warning("%s, left untransposed", e)
            return path


def layout_as_hierarchy(
    layout: RawLayout | list[ComponentDefinition],
    settings: HierarchySettings = DEFAULT_SETTINGS,
) -> list[ComponentDefinition]:
    """
    Nest a flat layout without expanding repeating group rows.

    Every group, repeating or not, gets its declared children once in
    ``child_components``.

    Params:
        layout: Flat layout
        settings: Hierarchy settings

    Returns:
        Top-level components with their children nested

    Raises:
        LayoutConfigurationError: If the layout is invalid
    """
    return HierarchyBuilder(layout, None, settings).build(with_rows=False)


def layout_as_hierarchy_with_rows(
    layout: RawLayout | list[ComponentDefinition],
    repeating_groups: RawRepeatingGroups | RepeatingGroups | None,
    settings: HierarchySettings = DEFAULT_SETTINGS,
    page_key: str | None = None,
) -> list[ComponentDefinition]:
    """
    Nest a flat layout and expand repeating groups into rows.

    Non-repeating groups get ``child_components``. Repeating groups get
    ``rows``; a repeating group without state gets an empty row list.

    Params:
        layout: Flat layout
        repeating_groups: Row state keyed by row-scoped group id
        settings: Hierarchy settings
        page_key: Page name used in error messages

    Returns:
        Top-level components with their children and rows nested

    Raises:
        LayoutConfigurationError: If the layout is invalid
    """
    return HierarchyBuilder(layout, repeating_groups, settings, page_key).build()
