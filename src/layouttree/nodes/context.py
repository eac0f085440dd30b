"""
Immutable context passed down while generating nodes.

Each level of the tree gets a context derived from its parent's, so values
such as depth, hidden state and the current row flow down explicitly
instead of through shared mutable state.
"""

from typing import TYPE_CHECKING, Union

from attrs import evolve, frozen

if TYPE_CHECKING:
    from layouttree.nodes.node import BaseRow, LayoutNode
    from layouttree.nodes.page import LayoutPage


@frozen
class GeneratorContext:
    """
    Params:
        page: Page the nodes are generated for
        parent: Node or page that owns the nodes at this level
        generation: Tree generation being built
        depth: 1 for top-level nodes, 2 for their children, and so on
        row: Repeating group row the nodes at this level belong to
        hidden: Whether an ancestor is statically hidden
    """

    page: "LayoutPage"
    parent: Union["LayoutNode", "LayoutPage"]
    generation: int
    depth: int = 1
    row: "BaseRow | None" = None
    hidden: bool = False

    def for_children(self, parent: "LayoutNode", hidden: bool) -> "GeneratorContext":
        """Derive the context for the children of `parent`. Rows are not inherited."""
        return evolve(
            self,
            parent=parent,
            depth=self.depth + 1,
            row=None,
            hidden=self.hidden or hidden,
        )

    def for_row(self, row: "BaseRow") -> "GeneratorContext":
        return evolve(self, row=row)
