"""
Layout tree exception classes.

This package provides all exception types used throughout the layout tree
library for consistent error handling and reporting.
"""

from layouttree.exceptions.core import (
    CyclicChildReferenceError,
    DataBindingSyntaxError,
    DuplicateChildClaimError,
    DuplicateComponentIdError,
    ErrorContext,
    ErrorLevel,
    LayoutConfigurationError,
    LayoutTreeError,
    MissingChildComponentError,
    StaleNodeError,
    UnknownComponentTypeError,
)

__all__ = [
    "LayoutTreeError",
    "LayoutConfigurationError",
    "MissingChildComponentError",
    "CyclicChildReferenceError",
    "DuplicateComponentIdError",
    "DuplicateChildClaimError",
    "UnknownComponentTypeError",
    "StaleNodeError",
    "DataBindingSyntaxError",
    "ErrorContext",
    "ErrorLevel",
]
