"""
Plain-text inspector for generated node trees.

Useful when debugging a layout: prints every node with its type and id,
and every repeating group row with the nodes it contains.
"""

from layouttree.nodes.node import LayoutNode
from layouttree.nodes.page import LayoutPage

INDENT = "  "


def describe_nodes(nodes: list[LayoutNode], level: int = 0) -> str:
    """
    Render nodes and their descendants as an indented tree.

    Params:
        nodes: Nodes to render
        level: Indentation level of the first line

    Returns:
        One line per node (``Type  [pageIndex:]id``) and per row (``Row <index>``)

    Examples:
        Group  group2
          Row 0
            Input  group2_input-0
    """
    lines: list[str] = []
    for node in nodes:
        _describe(node, level, lines)
    return "\n".join(lines)


def describe_page(page: LayoutPage) -> str:
    return describe_nodes(page.children())


def _describe(node: LayoutNode, level: int, lines: list[str]) -> None:
    page_index = node.get_multi_page_index()
    prefix = f"{page_index}:" if page_index is not None else ""
    lines.append(f"{INDENT * level}{node.get_type()}  {prefix}{node.get_id()}")

    if node.rows is None:
        for child in node.child_nodes:
            _describe(child, level + 1, lines)
        return

    for row in node.rows:
        lines.append(f"{INDENT * (level + 1)}Row {row.index}")
        for child in row.items:
            _describe(child, level + 2, lines)
