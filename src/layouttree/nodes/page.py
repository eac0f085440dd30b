"""
Layout pages and page collections.

A LayoutPage is the root of the node tree for one layout page. It owns the
top-level nodes and keeps an index of every node on the page by id and by
base id. LayoutPages groups all pages of one tree generation, with one of
them marked as current.
"""

from collections.abc import Callable

from layouttree.exceptions import DuplicateComponentIdError
from layouttree.nodes.node import ComponentMatcher, LayoutNode, Restriction


class LayoutPage:
    """Root node of one layout page."""

    def __init__(self, page_key: str, generation: int = 0):
        self.page_key = page_key
        self.generation = generation
        self._children: list[LayoutNode] = []
        self._all_nodes: list[LayoutNode] = []
        self._by_id: dict[str, LayoutNode] = {}
        self._by_base_id: dict[str, list[LayoutNode]] = {}
        self._position: dict[str, int] = {}

    def _add_top_level(self, node: LayoutNode) -> None:
        self._children.append(node)

    def _register(self, node: LayoutNode) -> None:
        """
        Add a node to the page index. Nodes are registered after their children,
        which gives `flat()` its order.

        Raises:
            DuplicateComponentIdError: If a node with the same id is already registered
        """
        node_id = node.get_id()
        if node_id in self._by_id:
            raise DuplicateComponentIdError(node_id, self.page_key)
        self._position[node_id] = len(self._all_nodes)
        self._all_nodes.append(node)
        self._by_id[node_id] = node
        self._by_base_id.setdefault(node.get_base_id(), []).append(node)

    def children(
        self,
        matching: ComponentMatcher | None = None,
        restriction: Restriction = None,
    ):
        """
        Top-level nodes of the page. The restriction is accepted for parity with
        LayoutNode.children() and ignored, as pages have no rows.
        """
        if matching is None:
            return list(self._children)
        for node in self._children:
            if matching(node.item):
                return node
        return None

    def closest(self, matching: ComponentMatcher) -> LayoutNode | None:
        return self.children(matching)

    def parents(self, matching: Callable | None = None) -> list:
        return []

    def flat(self, include_groups: bool = False) -> list[LayoutNode]:
        """
        Every node on the page, including each row instance in repeating groups.
        Container nodes come after their own children.

        Params:
            include_groups: Include container nodes, or only the leaves
        """
        if include_groups:
            return list(self._all_nodes)
        return [node for node in self._all_nodes if not node.definition.is_container()]

    def find_by_id(self, node_id: str) -> LayoutNode | None:
        """
        Find a node by its id, falling back to the first node with that base id.

        Params:
            node_id: Full node id (e.g., "input-1-0") or base component id (e.g., "input")

        Returns:
            Matching node, or None
        """
        node = self._by_id.get(node_id)
        if node is not None:
            return node
        instances = self._by_base_id.get(node_id)
        return instances[0] if instances else None

    def find_all_by_id(self, node_id: str) -> list[LayoutNode]:
        """Find every node whose id or base id equals `node_id`, in tree order."""
        matches = list(self._by_base_id.get(node_id, []))
        exact = self._by_id.get(node_id)
        if exact is not None and exact not in matches:
            matches.append(exact)
            matches.sort(key=lambda node: self._position[node.get_id()])
        return matches

    def transpose_data_model(
        self,
        data_model_path: str,
        row_index: int | None = None,
        overwrite_existing_indices: bool = True,
    ) -> str:
        """Pages have no data model location; paths pass through unchanged."""
        return data_model_path

    def __repr__(self) -> str:
        return f"LayoutPage(page_key={self.page_key!r}, nodes={len(self._all_nodes)})"


class LayoutPages:
    """
    All pages of one tree generation.

    Lookups by id search the current page first, so a component id used on
    several pages resolves to the instance the user is looking at.
    """

    def __init__(
        self,
        current_view: str | None,
        pages: dict[str, LayoutPage],
        generation: int = 0,
    ):
        self.current_view = current_view
        self._pages = dict(pages)
        self.generation = generation

    def current(self) -> LayoutPage | None:
        if self.current_view is None:
            return None
        return self._pages.get(self.current_view)

    def find_layout(self, page_key: str) -> LayoutPage | None:
        return self._pages.get(page_key)

    def all_pages(self) -> list[LayoutPage]:
        return list(self._pages.values())

    def page_keys(self) -> list[str]:
        return list(self._pages.keys())

    def all_nodes(self) -> list[LayoutNode]:
        nodes = []
        for page in self._pages.values():
            nodes.extend(page.flat(include_groups=True))
        return nodes

    def find_component_by_id(self, node_id: str) -> LayoutNode | None:
        """
        Find a component, preferring the current page.

        Params:
            node_id: Node id or base component id

        Returns:
            Matching node from the current page if there is one, otherwise from the
            first page (in declaration order) that has it, otherwise None
        """
        current = self.current()
        if current is not None:
            node = current.find_by_id(node_id)
            if node is not None:
                return node

        for page in self._pages.values():
            if page is current:
                continue
            node = page.find_by_id(node_id)
            if node is not None:
                return node
        return None

    def find_by_id(self, node_id: str) -> LayoutNode | None:
        return self.find_component_by_id(node_id)

    def find_all_components_by_id(self, node_id: str) -> list[LayoutNode]:
        """Find every matching node across all pages, in page declaration order."""
        nodes = []
        for page in self._pages.values():
            nodes.extend(page.find_all_by_id(node_id))
        return nodes

    def resolve(self, node: LayoutNode) -> LayoutNode | None:
        """
        Find the node in this generation that sits where `node` sat.

        Use this to refresh a node reference held across tree regenerations.

        Returns:
            Node with the same page and id in this generation, or None
        """
        page = self._pages.get(node.page_key())
        if page is None:
            return None
        candidate = page.find_by_id(node.get_id())
        if candidate is None or candidate.get_id() != node.get_id():
            return None
        return candidate

    def __repr__(self) -> str:
        return f"LayoutPages(current_view={self.current_view!r}, pages={self.page_keys()!r})"
