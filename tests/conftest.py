"""
Shared test fixtures for the layouttree test suite.

The main fixture layout has:
- two top-level components (top1, top2)
- a non-repeating group (group1) with a header and an input
- a repeating group (group2) bound to MyModel.Group2, containing a header,
  an input and a nested repeating group (group2nested) bound to MyModel.Group2.Nested
- a repeating group without bindings (group3) with multi-page children and a
  row filter (start=1, stop=2), containing a nested repeating group (group3nested)
"""

import pytest

HEADER = {"type": "Header", "size": "L"}
INPUT = {"type": "Input"}
GROUP = {"type": "Group"}
REP_GROUP = {"type": "Group", "maxCount": 3}


@pytest.fixture
def components():
    """Component definitions of the main fixture layout, without children."""
    return {
        "top1": {"id": "top1", **HEADER},
        "top2": {"id": "top2", **INPUT},
        "group1": {"id": "group1", **GROUP},
        "group1h": {"id": "group1_header", **HEADER},
        "group1i": {"id": "group1_input", **INPUT},
        "group2": {
            "id": "group2",
            "dataModelBindings": {"group": "MyModel.Group2"},
            **REP_GROUP,
        },
        "group2h": {"id": "group2_header", **HEADER},
        "group2i": {
            "id": "group2_input",
            **INPUT,
            "dataModelBindings": {"simpleBinding": "MyModel.Group2.Input"},
        },
        "group2n": {
            "id": "group2nested",
            **REP_GROUP,
            "dataModelBindings": {"group": "MyModel.Group2.Nested"},
        },
        "group2nh": {"id": "group2nested_header", **HEADER},
        "group2ni": {
            "id": "group2nested_input",
            **INPUT,
            "dataModelBindings": {"simpleBinding": "MyModel.Group2.Nested.Input"},
        },
        "group3": {
            "id": "group3",
            **REP_GROUP,
            "edit": {
                "multiPage": True,
                "filter": [
                    {"key": "start", "value": "1"},
                    {"key": "stop", "value": "2"},
                ],
            },
        },
        "group3h": {"id": "group3_header", **HEADER},
        "group3i": {"id": "group3_input", **INPUT},
        "group3n": {"id": "group3nested", **REP_GROUP},
        "group3nh": {"id": "group3nested_header", **HEADER},
        "group3ni": {"id": "group3nested_input", **INPUT},
    }


@pytest.fixture
def layout(components):
    """Flat layout combining all fixture components."""
    c = components
    return [
        c["top1"],
        c["top2"],
        {**c["group1"], "children": ["group1_header", "group1_input"]},
        c["group1h"],
        c["group1i"],
        {**c["group2"], "children": ["group2_header", "group2_input", "group2nested"]},
        c["group2h"],
        c["group2i"],
        {**c["group2n"], "children": ["group2nested_header", "group2nested_input"]},
        c["group2nh"],
        c["group2ni"],
        {**c["group3"], "children": ["0:group3_header", "1:group3_input", "2:group3nested"]},
        c["group3h"],
        c["group3i"],
        {**c["group3n"], "children": ["group3nested_header", "group3nested_input"]},
        c["group3nh"],
        c["group3ni"],
    ]


@pytest.fixture
def repeating_groups():
    """group2 has two rows; its nested group has two rows in row 0 and one in row 1."""
    return {
        "group2": {"index": 1, "baseGroupId": "group2"},
        "group2nested-0": {"index": 1, "baseGroupId": "group2nested"},
        "group2nested-1": {"index": 0, "baseGroupId": "group2nested"},
    }


@pytest.fixture
def many_repeating_groups():
    """Four rows everywhere in group2, five rows in group3 and its nested groups."""
    state = {"group2": {"index": 3, "baseGroupId": "group2"}, "group3": {"index": 4}}
    for row in range(4):
        state[f"group2nested-{row}"] = {"index": 3, "baseGroupId": "group2nested"}
        state[f"group3nested-{row}"] = {"index": 4, "baseGroupId": "group3nested"}
    return state


@pytest.fixture
def ids():
    """Return the ids of a list of nodes."""

    def _ids(nodes):
        return [node.get_id() for node in nodes]

    return _ids
