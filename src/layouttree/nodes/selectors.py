"""
Helpers for consumers that read form data or traverse nodes for validation.

The form data store itself is external; these helpers only apply a
caller-supplied selector ``(path) -> value`` to the transposed data model
bindings of a node.
"""

from typing import Any

from layouttree.core.types import FormDataSelector
from layouttree.nodes.node import ChildLookupRestriction, LayoutNode
from layouttree.nodes.page import LayoutPage


def get_node_form_data(
    node: LayoutNode, form_data_selector: FormDataSelector
) -> dict[str, Any]:
    """
    Read the form data behind every data model binding of a node.

    ``list`` bindings default to an empty list, ``simpleBinding`` values are
    converted to strings (empty string when missing), and other bindings are
    passed through as returned by the selector.

    Params:
        node: Node whose bindings to read
        form_data_selector: Callable returning the value at a data model path

    Returns:
        Mapping from binding key to value
    """
    bindings = node.item.data_model_bindings
    if not bindings:
        return {}

    form_data: dict[str, Any] = {}
    for key, path in bindings.items():
        value = form_data_selector(path)
        if key == "list":
            form_data[key] = value if value is not None else []
        elif key == "simpleBinding":
            form_data[key] = str(value) if value is not None else ""
        else:
            form_data[key] = value
    return form_data


def nodes_for_deep_validation(
    node: LayoutNode | LayoutPage | None,
    only_children: bool = False,
    only_in_row_uuid: str | None = None,
) -> list[LayoutNode]:
    """
    Collect the nodes whose validations belong to `node`.

    Params:
        node: Node to collect for. Pages and None yield nothing.
        only_children: Only the direct children instead of the node and all descendants
        only_in_row_uuid: Limit the children of `node` to the row with this uuid

    Returns:
        List of nodes
    """
    if node is None or isinstance(node, LayoutPage):
        return []

    restriction = (
        ChildLookupRestriction(only_in_row_uuid=only_in_row_uuid)
        if only_in_row_uuid
        else None
    )
    if only_children:
        return node.children(None, restriction)
    return node.flat(restriction)
