"""
Versioned store holding the live data of every node.

Nodes do not own their component data. They hold a path ``(page_key,
node_id)`` into this store and read through it, so a node object stays cheap
to pass around while the data behind it changes. Each tree generation
replaces the store contents in one commit; a node whose path no longer
exists afterwards is stale.
"""

from attrs import frozen

from layouttree.core.types import NodePath
from layouttree.layout.models import ComponentDefinition


@frozen
class NodeData:
    """Live data stored for one node."""

    item: ComponentDefinition
    generation: int


class NodesDataStore:
    """
    Page-keyed store of node data.

    ``generation`` counts committed tree generations. ``version`` counts every
    change, including single-item updates between generations.
    """

    def __init__(self):
        self._pages: dict[str, dict[str, NodeData]] = {}
        self._generation = 0
        self._version = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def version(self) -> int:
        return self._version

    def commit(self, generation: int, pages: dict[str, dict[str, NodeData]]) -> None:
        """
        Replace the whole store with the data of a new tree generation.

        Params:
            generation: Generation number of the new tree
            pages: Node data per page, keyed by node id

        Raises:
            ValueError: If `generation` is not newer than the current generation
        """
        if generation <= self._generation:
            raise ValueError(
                f"Generation {generation} is not newer than current generation {self._generation}"
            )
        self._pages = {key: dict(nodes) for key, nodes in pages.items()}
        self._generation = generation
        self._version += 1

    def pick(self, path: NodePath) -> NodeData | None:
        """Return the data at `path`, or None if nothing is stored there."""
        page_key, node_id = path
        return self._pages.get(page_key, {}).get(node_id)

    def set_item(self, path: NodePath, item: ComponentDefinition) -> None:
        """
        Overwrite the item of an existing node.

        Raises:
            KeyError: If no node is stored at `path`
        """
        existing = self.pick(path)
        if existing is None:
            raise KeyError(f"No node stored at /{'/'.join(path)}")
        page_key, node_id = path
        self._pages[page_key][node_id] = NodeData(item=item, generation=existing.generation)
        self._version += 1

    def remove(self, path: NodePath) -> None:
        page_key, node_id = path
        if self._pages.get(page_key, {}).pop(node_id, None) is not None:
            self._version += 1

    def page_keys(self) -> list[str]:
        return list(self._pages.keys())

    def node_ids(self, page_key: str) -> list[str]:
        return list(self._pages.get(page_key, {}).keys())
