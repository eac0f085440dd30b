"""
Core layout tree components.

This package provides the fundamental building blocks shared by the layout
and node packages: type aliases and data model binding transposition.
"""

from layouttree.core.data_binding import (
    DataBinding,
    DataBindingPart,
    strip_indices,
    transpose_data_binding,
    validate_data_binding,
)
from layouttree.core.types import (
    ComponentDict,
    DataModelBindings,
    FormDataSelector,
    NodePath,
    RawLayout,
    RawRepeatingGroups,
)

__all__ = [
    "DataBinding",
    "DataBindingPart",
    "strip_indices",
    "transpose_data_binding",
    "validate_data_binding",
    "ComponentDict",
    "DataModelBindings",
    "FormDataSelector",
    "NodePath",
    "RawLayout",
    "RawRepeatingGroups",
]
