"""
Core type definitions for the layout tree library.

This module contains fundamental type aliases used throughout the library
for type safety and consistency.
"""

from collections.abc import Callable
from typing import Any

DataModelBindings = dict[str, str]

ComponentDict = dict[str, Any]

RawLayout = list[ComponentDict]

RawRepeatingGroups = dict[str, dict[str, Any]]

FormDataSelector = Callable[[str], Any]

NodePath = tuple[str, str]
