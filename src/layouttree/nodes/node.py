"""
Layout nodes: one component instance at one position in the tree.

A LayoutNode wraps a component (or an instance of a component inside a
repeating group row) with its parent and row, allowing you to traverse the
tree and find other components near it.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from attrs import frozen

from layouttree.core.data_binding import transpose_data_binding
from layouttree.core.types import FormDataSelector, NodePath
from layouttree.exceptions import StaleNodeError
from layouttree.layout.models import ComponentDefinition
from layouttree.layout.registry import ComponentCategory, ComponentDef
from layouttree.nodes.store import NodesDataStore

if TYPE_CHECKING:
    from layouttree.nodes.page import LayoutPage

ComponentMatcher = Callable[[ComponentDefinition], bool]


@frozen
class BaseRow:
    """Identity of a repeating group row: stable uuid plus current index."""

    uuid: str
    index: int


@dataclass
class NodeRow:
    """One row of a repeating group node, holding the node instances of that row."""

    uuid: str
    index: int
    items: list["LayoutNode"] = field(default_factory=list)


@frozen
class ChildLookupRestriction:
    """Restricts child lookups in a repeating group to a single row."""

    only_in_row_index: int | None = None
    only_in_row_uuid: str | None = None

    def matches(self, row: NodeRow) -> bool:
        if self.only_in_row_uuid is not None and row.uuid != self.only_in_row_uuid:
            return False
        if self.only_in_row_index is not None and row.index != self.only_in_row_index:
            return False
        return True

    @classmethod
    def coerce(
        cls, restriction: Union[int, "ChildLookupRestriction", None]
    ) -> "ChildLookupRestriction | None":
        """Accept a bare row index as shorthand for `only_in_row_index`."""
        if restriction is None or isinstance(restriction, ChildLookupRestriction):
            return restriction
        return cls(only_in_row_index=restriction)


ParentNode = Union["LayoutNode", "LayoutPage"]
Restriction = Union[int, ChildLookupRestriction, None]


class LayoutNode:
    """
    A component instance in a generated tree.

    Structure (parent, children, rows) is fixed when the node is generated.
    Component data is read from the store on every access through `item`,
    so it always reflects the latest store contents.
    """

    def __init__(
        self,
        item: ComponentDefinition,
        store: NodesDataStore,
        path: NodePath,
        parent: ParentNode,
        page: "LayoutPage",
        definition: ComponentDef,
        generation: int,
        row: BaseRow | None = None,
        depth: int = 1,
        hidden: bool = False,
    ):
        self._store = store
        self.path = path
        self.parent = parent
        self.page = page
        self.definition = definition
        self.generation = generation
        self.row = row
        self.depth = depth
        self._hidden = hidden
        self._child_nodes: list[LayoutNode] = []
        self._rows: list[NodeRow] | None = None
        self._update_common_props(item)

    def _update_common_props(self, item: ComponentDefinition) -> None:
        self._id = item.id
        self._base_id = item.base_component_id or item.id
        self._type = item.type
        self._multi_page_index = item.multi_page_index

    @property
    def item(self) -> ComponentDefinition:
        """
        Current component data from the store.

        Raises:
            StaleNodeError: If the store no longer holds this node
        """
        data = self._store.pick(self.path)
        if data is None:
            raise StaleNodeError(self.path)
        return data.item

    @property
    def child_nodes(self) -> list["LayoutNode"]:
        return self._child_nodes

    @property
    def rows(self) -> list[NodeRow] | None:
        """Rows of a repeating group node, None for every other node."""
        return self._rows

    def get_id(self) -> str:
        return self._id

    def get_base_id(self) -> str:
        return self._base_id

    def get_type(self) -> str:
        return self._type

    def is_type(self, component_type: str) -> bool:
        return self._type == component_type

    def get_multi_page_index(self) -> int | None:
        return self._multi_page_index

    def is_category(self, category: ComponentCategory) -> bool:
        return self.definition.category == category

    def page_key(self) -> str:
        return self.page.page_key

    def is_hidden(self) -> bool:
        """Whether this node or an ancestor is hidden by a literal ``hidden: true``."""
        return self._hidden

    def is_stale(self) -> bool:
        """Whether the store has moved on to a newer generation than this node's."""
        return self._store.generation != self.generation

    def is_same_as(self, other: Union["LayoutNode", str]) -> bool:
        if isinstance(other, str):
            return self._id == other
        return isinstance(other, LayoutNode) and self._id == other._id

    def is_same(self) -> Callable[[Union["LayoutNode", str]], bool]:
        return lambda other: self.is_same_as(other)

    def row_chain(self) -> list[BaseRow]:
        """Rows of every enclosing repeating group, outermost first, ending with this node's own row."""
        rows = [self.row] if self.row is not None else []
        for parent in self.parents():
            if isinstance(parent, LayoutNode) and parent.row is not None:
                rows.append(parent.row)
        return list(reversed(rows))

    def closest(self, matching: ComponentMatcher) -> Union["LayoutNode", None]:
        """
        Looks for a matching component upwards in the hierarchy, returning the
        first one (or None if none can be found).

        Checks this node, then its siblings (only those in the same row when
        inside a repeating group), then repeats from the parent.
        """
        if matching(self.item):
            return self

        restriction = (
            ChildLookupRestriction(only_in_row_uuid=self.row.uuid)
            if self.row is not None
            else None
        )
        sibling = self.parent.children(matching, restriction)
        if sibling is not None:
            return sibling

        return self.parent.closest(matching)

    def parents(self, matching: Callable[[ParentNode], bool] | None = None) -> list[ParentNode]:
        """
        Like children(), but matches upwards along the tree towards the top.

        Returns:
            Ancestors from the immediate parent up to and including the page
        """
        parents: list[ParentNode] = []
        current: ParentNode = self.parent
        while True:
            parents.append(current)
            if not isinstance(current, LayoutNode):
                break
            current = current.parent

        if matching:
            return [parent for parent in parents if matching(parent)]
        return parents

    def children(
        self,
        matching: ComponentMatcher | None = None,
        restriction: Restriction = None,
    ) -> Any:
        """
        Looks for a matching component inside the (direct) children of this node
        (only makes sense for a group node). When matching inside a repeating group
        with multiple rows, pass a restriction (or a row index) to select the row,
        otherwise you will most likely find a component on the first row.

        Params:
            matching: Predicate over component data. When omitted, all children are returned.
            restriction: Row index or ChildLookupRestriction

        Returns:
            First matching child (or None) when `matching` is given, otherwise a list of children
        """
        nodes = self.definition.pick_direct_children(
            self, ChildLookupRestriction.coerce(restriction)
        )
        if matching is None:
            return nodes

        for node in nodes:
            if matching(node.item):
                return node
        return None

    def flat(
        self, restriction: Restriction = None, include_groups: bool = True
    ) -> list["LayoutNode"]:
        """
        This node and every descendant, depth first with each node before its children.

        Params:
            restriction: If set, only children in the given row of this node are
                included. Nested groups below it are included in full.
            include_groups: Include container nodes, or only the leaves

        Returns:
            Flat list of nodes, including duplicates for repeating group rows
        """
        out: list[LayoutNode] = []

        def recurse(node: LayoutNode, node_restriction: Restriction) -> None:
            if include_groups or not node.definition.is_container():
                out.append(node)
            for child in node.children(None, node_restriction):
                recurse(child, None)

        recurse(self, restriction)
        return out

    def transpose_data_model(
        self,
        data_model_path: str,
        row_index: int | None = None,
        overwrite_existing_indices: bool = True,
    ) -> str:
        """
        This takes a data model path (without indexes) and alters it to add indexes
        such that it refers to an item in the same repeating group row (or nested
        repeating group row) as the data model binding of this component.

        Example: Let's say this component is in the second row of a repeating group,
        and inside the third row of a nested repeating group, bound to
        'MyModel.Group[1].NestedGroup[2].FirstName'. Passing 'MyModel.Group.NestedGroup.Age'
        gives 'MyModel.Group[1].NestedGroup[2].Age'. Passing 'MyModel.Group[2].NestedGroup[3].Age'
        gives the same result, unless `overwrite_existing_indices` is False.

        Components without data model bindings ask their parent, passing their own
        row index along.

        Params:
            data_model_path: Path to transpose
            row_index: Row of this node to use when it is a repeating group
            overwrite_existing_indices: Replace indices already present in the path

        Returns:
            Transposed path
        """
        first_binding = self.item.first_data_model_binding()
        if not first_binding:
            return self.parent.transpose_data_model(
                data_model_path,
                self.row.index if self.row is not None else None,
                overwrite_existing_indices,
            )

        return transpose_data_binding(
            subject=data_model_path,
            current_location=first_binding,
            row_index=row_index,
            current_location_is_rep_group=self.definition.is_repeating(self.item),
            overwrite_existing_indices=overwrite_existing_indices,
        )

    def get_form_data(self, form_data_selector: FormDataSelector) -> dict[str, Any]:
        from layouttree.nodes.selectors import get_node_form_data

        return get_node_form_data(self, form_data_selector)

    def get_display_data(self, form_data_selector: FormDataSelector) -> str:
        return self.definition.get_display_data(self, form_data_selector)

    def __repr__(self) -> str:
        return f"LayoutNode(id={self._id!r}, type={self._type!r}, page={self.page.page_key!r})"
