"""
Tests for component definitions and custom registries.
"""

import logging

from attrs import evolve

from layouttree.config import DEFAULT_SETTINGS, HierarchySettings
from layouttree.layout.models import ComponentDefinition
from layouttree.layout.registry import (
    ComponentCategory,
    ContainerDef,
    GroupDef,
    RepeatingGroupDef,
    default_registry,
)
from layouttree.nodes import nodes_in_layout


def component(**kwargs):
    return ComponentDefinition.model_validate(kwargs)


class TestDefinitions:
    """Test behaviour of the built-in definitions."""

    def test_group_repeats_above_one_row(self):
        definition = GroupDef()
        assert definition.is_repeating(component(id="g", type="Group", maxCount=2))
        assert not definition.is_repeating(component(id="g", type="Group", maxCount=1))
        assert not definition.is_repeating(component(id="g", type="Group"))

    def test_repeating_group_always_repeats(self):
        assert RepeatingGroupDef().is_repeating(component(id="g", type="RepeatingGroup"))

    def test_container_claims_children_with_page_index(self):
        item = component(id="g", type="Group", children=["a", "2:b"])
        assert ContainerDef().claim_children(item) == [(None, "a"), (2, "b")]

    def test_non_containers_claim_nothing(self):
        registry = default_registry()
        item = component(id="i", type="Input", children=["a"])
        assert registry.get("Input").claim_children(item) == []

    def test_categories(self):
        registry = default_registry()
        assert registry.get("Header").category == ComponentCategory.PRESENTATION
        assert registry.get("Input").category == ComponentCategory.FORM
        assert registry.get("Button").category == ComponentCategory.ACTION
        assert registry.get("Group").is_container()
        assert not registry.get("Input").is_container()

    def test_required_bindings(self):
        registry = default_registry()
        assert registry.get("Input").validate_data_model_bindings(
            component(id="i", type="Input")
        ) == ["'i' is missing required binding 'simpleBinding'"]
        assert registry.get("RepeatingGroup").validate_data_model_bindings(
            component(id="g", type="RepeatingGroup", dataModelBindings={"group": "M.G"})
        ) == []

    def test_binding_syntax_problems(self):
        problems = default_registry().get("Input").validate_data_model_bindings(
            component(id="i", type="Input", dataModelBindings={"simpleBinding": "M..Name"})
        )
        assert len(problems) == 1
        assert problems[0].startswith("'i' binding 'simpleBinding':")


class TestComponentRegistry:
    """Test registering custom component types."""

    def test_lookup_is_exact(self):
        registry = default_registry()
        assert registry.has("Input")
        assert not registry.has("input")
        assert registry.get("input") is None

    def test_copy_is_independent(self):
        registry = default_registry()
        copy = registry.copy()
        copy.register("Tabs", ContainerDef())
        assert copy.has("Tabs")
        assert not registry.has("Tabs")
        assert "Tabs" in copy.types()

    def test_custom_container_type(self):
        """Test that a registered container type nests its children."""
        registry = default_registry()
        registry.register("Tabs", ContainerDef())
        settings = HierarchySettings(registry=registry)
        page = nodes_in_layout(
            [
                {"id": "tabs", "type": "Tabs", "children": ["a"]},
                {"id": "a", "type": "Input"},
            ],
            settings=settings,
        )
        assert [node.get_id() for node in page.find_by_id("tabs").children()] == ["a"]


class TestSettings:
    """Test hierarchy settings."""

    def test_default_registry_is_shared(self):
        assert DEFAULT_SETTINGS.get_registry() is HierarchySettings().get_registry()

    def test_row_uuid_is_deterministic(self):
        assert DEFAULT_SETTINGS.row_uuid("g", 1) == DEFAULT_SETTINGS.row_uuid("g", 1)
        assert DEFAULT_SETTINGS.row_uuid("g", 1) != DEFAULT_SETTINGS.row_uuid("g", 2)

    def test_validate_bindings_logs_problems(self, caplog):
        settings = evolve(DEFAULT_SETTINGS, validate_bindings=True)
        with caplog.at_level(logging.WARNING, logger="layouttree.nodes.generator"):
            nodes_in_layout([{"id": "i", "type": "Input"}], settings=settings)
        assert "missing required binding 'simpleBinding'" in caplog.text

    def test_bindings_not_validated_by_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="layouttree.nodes.generator"):
            nodes_in_layout([{"id": "i", "type": "Input"}])
        assert caplog.text == ""
