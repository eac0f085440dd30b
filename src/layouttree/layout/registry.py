"""
Component definitions and the registry mapping type tags to them.

Every component type in a layout is backed by a ComponentDef. The definition
describes what the type can do: whether it claims children, whether it
repeats, how its direct children are picked from a node, how its display
data is derived from form data, and which data model bindings it needs.
Definitions are stateless and shared by all nodes of their type.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

from layouttree.core.data_binding import validate_data_binding
from layouttree.core.types import FormDataSelector
from layouttree.layout.models import ComponentDefinition, parse_child_reference

if TYPE_CHECKING:
    from layouttree.nodes.node import ChildLookupRestriction, LayoutNode


class ComponentCategory(Enum):
    """Broad behavioural category of a component type."""

    PRESENTATION = "presentation"
    FORM = "form"
    ACTION = "action"
    CONTAINER = "container"


class ComponentDef:
    """Definition for components that neither hold data nor contain children."""

    category = ComponentCategory.PRESENTATION
    required_bindings: tuple[str, ...] = ()

    def claim_children(self, item: ComponentDefinition) -> list[tuple[int | None, str]]:
        """
        List the children this component takes ownership of.

        Params:
            item: Component from the flat layout

        Returns:
            List of (multi page index, child id) in declaration order
        """
        return []

    def is_repeating(self, item: ComponentDefinition) -> bool:
        return False

    def is_container(self) -> bool:
        return self.category == ComponentCategory.CONTAINER

    def pick_direct_children(
        self,
        node: "LayoutNode",
        restriction: "ChildLookupRestriction | None" = None,
    ) -> list["LayoutNode"]:
        return []

    def get_display_data(
        self, node: "LayoutNode", form_data_selector: FormDataSelector
    ) -> str:
        return ""

    def validate_data_model_bindings(self, item: ComponentDefinition) -> list[str]:
        """
        Check that the component's data model bindings are usable.

        Params:
            item: Component to check

        Returns:
            List of problems, empty if the bindings are fine
        """
        errors = []
        bindings = item.data_model_bindings or {}
        for key in self.required_bindings:
            if key not in bindings:
                errors.append(f"'{item.id}' is missing required binding '{key}'")
        for key, path in bindings.items():
            for problem in validate_data_binding(path):
                errors.append(f"'{item.id}' binding '{key}': {problem}")
        return errors


class ActionComponentDef(ComponentDef):
    category = ComponentCategory.ACTION


class FormComponentDef(ComponentDef):
    """Definition for components bound to a single value through ``simpleBinding``."""

    category = ComponentCategory.FORM
    required_bindings = ("simpleBinding",)

    def get_display_data(
        self, node: "LayoutNode", form_data_selector: FormDataSelector
    ) -> str:
        from layouttree.nodes.selectors import get_node_form_data

        return get_node_form_data(node, form_data_selector).get("simpleBinding", "")


class NumberDef(FormComponentDef):
    def get_display_data(
        self, node: "LayoutNode", form_data_selector: FormDataSelector
    ) -> str:
        value = super().get_display_data(node, form_data_selector)
        try:
            number = float(value)
        except ValueError:
            return value
        return str(int(number)) if number.is_integer() else str(number)


class CheckboxesDef(FormComponentDef):
    """Checkbox values are stored comma separated in one field."""

    def get_display_data(
        self, node: "LayoutNode", form_data_selector: FormDataSelector
    ) -> str:
        value = super().get_display_data(node, form_data_selector)
        return ", ".join(part.strip() for part in value.split(",") if part.strip())


class AddressDef(FormComponentDef):
    required_bindings = ("address", "zipCode", "postPlace")

    def get_display_data(
        self, node: "LayoutNode", form_data_selector: FormDataSelector
    ) -> str:
        from layouttree.nodes.selectors import get_node_form_data

        data = get_node_form_data(node, form_data_selector)
        parts = [data.get("address"), data.get("zipCode"), data.get("postPlace")]
        return " ".join(str(part) for part in parts if part)


class ListDef(FormComponentDef):
    """Table selection component with one binding per column."""

    required_bindings = ()

    def get_display_data(
        self, node: "LayoutNode", form_data_selector: FormDataSelector
    ) -> str:
        from layouttree.nodes.selectors import get_node_form_data

        item = node.item
        summary_binding = getattr(item, "summaryBinding", None)
        if summary_binding and item.data_model_bindings:
            value = get_node_form_data(node, form_data_selector).get(summary_binding)
            return "" if value is None else str(value)
        return ""


class ContainerDef(ComponentDef):
    """Definition for components that contain the components listed in ``children``."""

    category = ComponentCategory.CONTAINER

    def claim_children(self, item: ComponentDefinition) -> list[tuple[int | None, str]]:
        return [parse_child_reference(reference) for reference in item.children or []]

    def pick_direct_children(
        self,
        node: "LayoutNode",
        restriction: "ChildLookupRestriction | None" = None,
    ) -> list["LayoutNode"]:
        if node.rows is None:
            return list(node.child_nodes)

        children = []
        for row in node.rows:
            if restriction is None or restriction.matches(row):
                children.extend(row.items)
        return children


class GroupDef(ContainerDef):
    """Group that repeats when it allows more than one row."""

    def is_repeating(self, item: ComponentDefinition) -> bool:
        return item.max_count is not None and item.max_count > 1


class RepeatingGroupDef(GroupDef):
    required_bindings = ("group",)

    def is_repeating(self, item: ComponentDefinition) -> bool:
        return True


class ComponentRegistry:
    """
    Registry of component definitions keyed by type tag.

    Lookups are exact and case sensitive, matching the ``type`` field of
    layout components.
    """

    def __init__(self, definitions: dict[str, ComponentDef] | None = None):
        self._definitions: dict[str, ComponentDef] = dict(definitions or {})

    def register(self, component_type: str, definition: ComponentDef) -> None:
        """
        Register or replace the definition for a component type.

        Params:
            component_type: Type tag as used in layouts (e.g., "Input")
            definition: Definition instance shared by all components of the type
        """
        self._definitions[component_type] = definition

    def get(self, component_type: str) -> ComponentDef | None:
        return self._definitions.get(component_type)

    def has(self, component_type: str) -> bool:
        return component_type in self._definitions

    def types(self) -> list[str]:
        return list(self._definitions.keys())

    def copy(self) -> "ComponentRegistry":
        return ComponentRegistry(self._definitions)


GENERIC_DEFINITION = ComponentDef()

_BUILTIN_DEFINITIONS: dict[str, Any] = {
    "Header": ComponentDef,
    "Paragraph": ComponentDef,
    "Image": ComponentDef,
    "Panel": ComponentDef,
    "Summary": ComponentDef,
    "Button": ActionComponentDef,
    "NavigationButtons": ActionComponentDef,
    "Input": FormComponentDef,
    "TextArea": FormComponentDef,
    "Datepicker": FormComponentDef,
    "Dropdown": FormComponentDef,
    "RadioButtons": FormComponentDef,
    "Number": NumberDef,
    "Checkboxes": CheckboxesDef,
    "Address": AddressDef,
    "List": ListDef,
    "Group": GroupDef,
    "RepeatingGroup": RepeatingGroupDef,
    "AccordionGroup": ContainerDef,
    "Accordion": ContainerDef,
    "ButtonGroup": ContainerDef,
}


def default_registry() -> ComponentRegistry:
    """Create a registry holding the built-in component types."""
    return ComponentRegistry(
        {name: definition() for name, definition in _BUILTIN_DEFINITIONS.items()}
    )
