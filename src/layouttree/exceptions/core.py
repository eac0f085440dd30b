"""
Exception classes for layout hierarchy construction and node access.

This module defines specific exception types for the error conditions that
can occur while expanding a flat layout into a node tree, parsing data model
bindings, and reading live node data after a tree has been regenerated.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Component and page only
    DEVELOPER = "developer"  # Adds the full child reference chain


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where in a layout an error occurred. Supports formatting at
    different detail levels for user-facing vs developer debugging.

    Params:
        page_key: Layout page the offending component belongs to
        component_id: Id of the component that caused the error
        parent_id: Id of the group referencing the component, if any
        reference_chain: Group ids walked from the top level down to the component
    """

    page_key: str | None = None
    component_id: str | None = None
    parent_id: str | None = None
    reference_chain: list[str] = field(default_factory=list)

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.component_id:
            if self.parent_id:
                lines.append(f"  in {self.parent_id} -> {self.component_id}")
            else:
                lines.append(f"  in {self.component_id}")

        if self.page_key:
            lines.append(f"  on page {self.page_key}")

        if error_level == ErrorLevel.DEVELOPER and self.reference_chain:
            lines.append(f"  chain: {' -> '.join(self.reference_chain)}")

        return "\n".join(lines)


class LayoutTreeError(Exception):
    """Base exception for all layout tree errors."""

    pass


class LayoutConfigurationError(LayoutTreeError):
    """Raised when a layout cannot be turned into a tree. Aborts construction."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Primary error message
            context: ErrorContext with layout location information
            error_level: Level of detail to show in error message
        """
        self.context = context
        self.error_level = error_level

        if context:
            location_info = context.format_location(error_level)
            full_message = f"{message}\n{location_info}" if location_info else message
        else:
            full_message = message

        super().__init__(full_message)


class MissingChildComponentError(LayoutConfigurationError):
    """Raised when a group references a child id that is not in the layout."""

    def __init__(
        self,
        parent_id: str,
        child_id: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        self.parent_id = parent_id
        self.child_id = child_id
        super().__init__(
            f"Group '{parent_id}' references missing child component '{child_id}'",
            context,
            error_level,
        )


class CyclicChildReferenceError(LayoutConfigurationError):
    """Raised when group children reference each other in a cycle."""

    def __init__(self, chain: list[str], context: ErrorContext | None = None):
        self.chain = chain
        super().__init__(
            f"Cyclic child reference detected: {' -> '.join(chain)}", context
        )


class DuplicateComponentIdError(LayoutConfigurationError):
    """Raised when the same component id appears more than once in a layout."""

    def __init__(self, component_id: str, page_key: str | None = None):
        self.component_id = component_id
        self.page_key = page_key
        where = f" on page '{page_key}'" if page_key else ""
        super().__init__(f"Component id '{component_id}' is not unique{where}")


class DuplicateChildClaimError(LayoutConfigurationError):
    """Raised when two groups both claim the same child component."""

    def __init__(self, child_id: str, first_parent: str, second_parent: str):
        self.child_id = child_id
        self.first_parent = first_parent
        self.second_parent = second_parent
        super().__init__(
            f"Component '{child_id}' is claimed as a child of both "
            f"'{first_parent}' and '{second_parent}'"
        )


class UnknownComponentTypeError(LayoutConfigurationError):
    """Raised when a component type has no registered definition."""

    def __init__(self, component_id: str, component_type: str):
        self.component_id = component_id
        self.component_type = component_type
        super().__init__(
            f"Component '{component_id}' has unknown type '{component_type}'"
        )


class StaleNodeError(LayoutTreeError):
    """Raised when reading live data for a node whose store entry has been removed."""

    def __init__(self, path: tuple[str, ...]):
        self.path = path
        super().__init__(f"Node not found in path: /{'/'.join(path)}")


class DataBindingSyntaxError(LayoutTreeError):
    """Raised when a data model binding cannot be parsed."""

    def __init__(self, path: str, reason: str):
        """
        Initialize the exception.

        Params:
            path: The invalid data model path
            reason: Why the path is invalid
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid data model binding '{path}': {reason}")
