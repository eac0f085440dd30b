"""
Generation of node trees from layouts and repeating group state.

Every call produces a new tree generation: fresh node objects for every
page, committed to the store in one step once all pages have been built.
If any page fails to build, nothing is committed and the previous
generation stays intact.
"""

import logging

from layouttree.config import DEFAULT_SETTINGS, HierarchySettings
from layouttree.core.types import RawLayout, RawRepeatingGroups
from layouttree.layout.hierarchy import HierarchyBuilder
from layouttree.layout.models import ComponentDefinition, RepeatingGroups
from layouttree.nodes.context import GeneratorContext
from layouttree.nodes.node import BaseRow, LayoutNode, NodeRow
from layouttree.nodes.page import LayoutPage, LayoutPages
from layouttree.nodes.store import NodeData, NodesDataStore

logger = logging.getLogger(__name__)

Layouts = dict[str, RawLayout | list[ComponentDefinition]]


class NodesGenerator:
    """Turns expanded hierarchies into LayoutNode trees backed by a store."""

    def __init__(
        self,
        store: NodesDataStore,
        settings: HierarchySettings = DEFAULT_SETTINGS,
    ):
        self.store = store
        self.settings = settings

    def generate(
        self,
        layouts: Layouts,
        current_view: str | None,
        repeating_groups: RawRepeatingGroups | RepeatingGroups | None = None,
    ) -> LayoutPages:
        """
        Build a new generation for all pages and commit it to the store.

        Params:
            layouts: Flat layout per page key, in page order
            current_view: Key of the page the user is on
            repeating_groups: Row state shared by all pages

        Returns:
            Collection of the generated pages

        Raises:
            LayoutConfigurationError: If any layout is invalid
        """
        generation = self.store.generation + 1
        pages: dict[str, LayoutPage] = {}
        data: dict[str, dict[str, NodeData]] = {}

        for page_key, layout in layouts.items():
            page_data: dict[str, NodeData] = {}
            pages[page_key] = self._generate_page(
                page_key, layout, repeating_groups, generation, page_data
            )
            data[page_key] = page_data

        self.store.commit(generation, data)
        logger.debug(
            "Generated %d nodes on %d pages (generation %d)",
            sum(len(page_data) for page_data in data.values()),
            len(pages),
            generation,
        )
        return LayoutPages(current_view, pages, generation)

    def _generate_page(
        self,
        page_key: str,
        layout: RawLayout | list[ComponentDefinition],
        repeating_groups: RawRepeatingGroups | RepeatingGroups | None,
        generation: int,
        data: dict[str, NodeData],
    ) -> LayoutPage:
        builder = HierarchyBuilder(layout, repeating_groups, self.settings, page_key)
        page = LayoutPage(page_key, generation)
        context = GeneratorContext(page=page, parent=page, generation=generation)
        for item in builder.build():
            page._add_top_level(self._generate_node(item, context, builder, data))
        return page

    def _generate_node(
        self,
        item: ComponentDefinition,
        context: GeneratorContext,
        builder: HierarchyBuilder,
        data: dict[str, NodeData],
    ) -> LayoutNode:
        definition = builder.definition(item)
        hidden = context.hidden or item.hidden is True
        node = LayoutNode(
            item=item,
            store=self.store,
            path=(context.page.page_key, item.id),
            parent=context.parent,
            page=context.page,
            definition=definition,
            generation=context.generation,
            row=context.row,
            depth=context.depth,
            hidden=hidden,
        )

        if self.settings.validate_bindings:
            for problem in definition.validate_data_model_bindings(item):
                logger.warning("Page '%s': %s", context.page.page_key, problem)

        child_context = context.for_children(node, hidden)
        if item.rows is not None:
            node._rows = []
            for row in item.rows:
                row_context = child_context.for_row(BaseRow(uuid=row.uuid, index=row.index))
                node._rows.append(
                    NodeRow(
                        uuid=row.uuid,
                        index=row.index,
                        items=[
                            self._generate_node(child, row_context, builder, data)
                            for child in row.items
                        ],
                    )
                )
        elif item.child_components is not None:
            node._child_nodes = [
                self._generate_node(child, child_context, builder, data)
                for child in item.child_components
            ]

        context.page._register(node)
        data[item.id] = NodeData(
            item=item.model_copy(update={"child_components": None, "rows": None}),
            generation=context.generation,
        )
        return node


def generate_entire_hierarchy(
    layouts: Layouts,
    current_view: str | None,
    repeating_groups: RawRepeatingGroups | RepeatingGroups | None = None,
    store: NodesDataStore | None = None,
    settings: HierarchySettings = DEFAULT_SETTINGS,
) -> LayoutPages:
    """
    Generate node trees for every layout page.

    Params:
        layouts: Flat layout per page key, in page order
        current_view: Key of the page the user is on
        repeating_groups: Row state keyed by row-scoped group id
        store: Store to commit the new generation to. A new store is created when omitted.
        settings: Hierarchy settings

    Returns:
        LayoutPages for the new generation
    """
    return NodesGenerator(store or NodesDataStore(), settings).generate(
        layouts, current_view, repeating_groups
    )


def nodes_in_layout(
    layout: RawLayout | list[ComponentDefinition],
    repeating_groups: RawRepeatingGroups | RepeatingGroups | None = None,
    page_key: str = "page",
    store: NodesDataStore | None = None,
    settings: HierarchySettings = DEFAULT_SETTINGS,
) -> LayoutPage:
    """
    Generate the node tree for a single layout.

    Params:
        layout: Flat layout
        repeating_groups: Row state keyed by row-scoped group id
        page_key: Key for the page
        store: Store to commit to. Any other pages in it are replaced.
        settings: Hierarchy settings

    Returns:
        Root of the generated tree
    """
    pages = generate_entire_hierarchy(
        {page_key: layout}, page_key, repeating_groups, store, settings
    )
    return pages.current()
