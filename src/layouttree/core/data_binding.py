"""
Data model binding parsing and row transposition.

A data model binding is a dotted path into the form data model, where any
segment may carry a bracketed row index (``MyModel.Group[1].Nested[3].Age``).
This module parses such paths into segments and rewrites template paths so
they point into the same repeating group rows as a given location.
"""

import re
from dataclasses import dataclass, replace

from layouttree.exceptions import DataBindingSyntaxError

_PART_PATTERN = re.compile(r"^(?P<base>[^.\[\]]+)(?:\[(?P<index>\d+)\])?$")


@dataclass(frozen=True)
class DataBindingPart:
    """One dot-separated segment of a data model path."""

    base: str
    array_index: int | None
    parent_index: int

    def __str__(self) -> str:
        if self.array_index is None:
            return self.base
        return f"{self.base}[{self.array_index}]"


class DataBinding:
    """
    Parsed data model path.

    Segments are compared by their base name as a whole, so ``Group`` never
    matches ``Group22`` the way a string prefix comparison would.
    """

    def __init__(self, parts: list[DataBindingPart]):
        self.parts = parts

    @classmethod
    def parse(cls, path: str) -> "DataBinding":
        """
        Split a data model path into its segments.

        Params:
            path: Path string (e.g., "MyModel.Group[1].Name")

        Returns:
            DataBinding with one part per segment

        Raises:
            DataBindingSyntaxError: If a segment is empty or has malformed brackets

        Examples:
            "MyModel.Group[1].Name" -> [MyModel, Group[1], Name]
            "" -> []
        """
        if not path:
            return cls([])

        parts = []
        for position, segment in enumerate(path.split(".")):
            if not segment:
                raise DataBindingSyntaxError(path, "empty path segment")
            match = _PART_PATTERN.match(segment)
            if not match:
                raise DataBindingSyntaxError(
                    path, f"segment '{segment}' is not 'name' or 'name[<index>]'"
                )
            index = match.group("index")
            parts.append(
                DataBindingPart(
                    base=match.group("base"),
                    array_index=int(index) if index is not None else None,
                    parent_index=position,
                )
            )
        return cls(parts)

    def at(self, position: int) -> DataBindingPart | None:
        """Return the segment at `position`, or None past the end."""
        if 0 <= position < len(self.parts):
            return self.parts[position]
        return None

    def set_index(self, position: int, array_index: int | None) -> None:
        self.parts[position] = replace(self.parts[position], array_index=array_index)

    def without_indices(self) -> str:
        """Return the path with every row index removed."""
        return ".".join(part.base for part in self.parts)

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.parts)

    def __repr__(self) -> str:
        return f"DataBinding({str(self)!r})"


def strip_indices(path: str) -> str:
    """
    Remove all row indices from a data model path.

    Params:
        path: Path that may contain bracketed indices

    Returns:
        The template form of the path (e.g., "Group[1].Name" -> "Group.Name")
    """
    return DataBinding.parse(path).without_indices()


def transpose_data_binding(
    subject: str,
    current_location: str,
    row_index: int | None = None,
    current_location_is_rep_group: bool = False,
    overwrite_existing_indices: bool = True,
) -> str:
    """
    Rewrite `subject` so its row indices follow `current_location`.

    Segments are walked pairwise from the root. As long as the segment names
    agree, every index known at the current location is copied onto the
    subject. The walk stops at the first segment whose name differs, so
    paths under an unrelated root pass through unchanged.

    Params:
        subject: Path to rewrite (e.g., "MyModel.Group.Nested.Age")
        current_location: Binding of the location the subject is relative to
        row_index: Row of the repeating group at `current_location`, used for
            its last segment when that segment carries no index of its own
        current_location_is_rep_group: Whether `current_location` is the
            binding of a repeating group (only then is `row_index` applied)
        overwrite_existing_indices: Replace indices already present in the
            subject. When False, an explicit index that differs from the
            location stops the walk; the rows below it are unknown and stay
            unindexed.

    Returns:
        The transposed path

    Examples:
        ("MyModel.Group.Nested.Age", "MyModel.Group[1].Nested[3].Input")
            -> "MyModel.Group[1].Nested[3].Age"
        ("MyModel.Group22.Key", "MyModel.Group[1].Input")
            -> "MyModel.Group22.Key"
    """
    ours = DataBinding.parse(current_location)
    theirs = DataBinding.parse(subject)
    last_position = len(ours.parts) - 1

    for our_part in ours.parts:
        their_part = theirs.at(our_part.parent_index)
        if their_part is None or their_part.base != our_part.base:
            break

        array_index = our_part.array_index
        if (
            array_index is None
            and current_location_is_rep_group
            and our_part.parent_index == last_position
        ):
            array_index = row_index
        if array_index is None:
            continue

        if (
            their_part.array_index is not None
            and their_part.array_index != array_index
            and not overwrite_existing_indices
        ):
            break

        theirs.set_index(our_part.parent_index, array_index)

    return str(theirs)


def validate_data_binding(path: str) -> list[str]:
    """
    Check a data model path for syntax problems.

    Params:
        path: Data model path to check

    Returns:
        List of problems, empty if the path is valid
    """
    if not path or not isinstance(path, str):
        return ["binding must be a non-empty string"]
    if path.strip() != path:
        return ["binding must not have leading or trailing whitespace"]
    try:
        DataBinding.parse(path)
    except DataBindingSyntaxError as e:
        return [e.reason]
    return []
