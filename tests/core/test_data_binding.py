"""
Tests for data model binding parsing and transposition.

Focus Areas:
1. Parsing paths into segments, including malformed paths
2. Transposing template paths against a location binding
3. Guarding against prefix-only matches (Group vs Group22)
4. Conservative handling of conflicting explicit indices
"""

import pytest

from layouttree.core.data_binding import (
    DataBinding,
    strip_indices,
    transpose_data_binding,
    validate_data_binding,
)
from layouttree.exceptions import DataBindingSyntaxError


class TestDataBindingParsing:
    """Test splitting data model paths into segments."""

    def test_parse_plain_path(self):
        """Test parsing a path without indices."""
        binding = DataBinding.parse("MyModel.Group.Name")
        assert [part.base for part in binding.parts] == ["MyModel", "Group", "Name"]
        assert all(part.array_index is None for part in binding.parts)

    def test_parse_indexed_path(self):
        """Test parsing a path with row indices."""
        binding = DataBinding.parse("MyModel.Group[12].Nested[0].Name")
        assert [part.array_index for part in binding.parts] == [None, 12, 0, None]
        assert [part.parent_index for part in binding.parts] == [0, 1, 2, 3]

    def test_round_trip_string(self):
        """Test that parsing and printing a path gives the same path."""
        path = "MyModel.Group[1].Nested[3].Age"
        assert str(DataBinding.parse(path)) == path

    def test_empty_path(self):
        """Test that an empty path has no segments."""
        binding = DataBinding.parse("")
        assert binding.parts == []
        assert str(binding) == ""

    def test_at_past_end_returns_none(self):
        """Test that at() returns None beyond the last segment."""
        binding = DataBinding.parse("A.B")
        assert binding.at(1).base == "B"
        assert binding.at(2) is None

    @pytest.mark.parametrize(
        "path",
        ["MyModel..Name", "MyModel.Group[x].Name", "MyModel.Group[1", "Group[1][2]", ".Name"],
    )
    def test_malformed_paths_raise(self, path):
        """Test that malformed segments are rejected."""
        with pytest.raises(DataBindingSyntaxError) as exc_info:
            DataBinding.parse(path)
        assert exc_info.value.path == path

    def test_strip_indices(self):
        """Test removing all row indices."""
        assert strip_indices("MyModel.Group[1].Nested[2].Age") == "MyModel.Group.Nested.Age"

    def test_validate_data_binding(self):
        """Test binding validation reports problems instead of raising."""
        assert validate_data_binding("MyModel.Name") == []
        assert validate_data_binding("") == ["binding must be a non-empty string"]
        assert validate_data_binding(" MyModel.Name") != []
        assert validate_data_binding("MyModel.Group[a]") != []


class TestTransposeDataBinding:
    """Test rewriting template paths into a location's rows."""

    LOCATION = "MyModel.Group2[2].Nested[2].Input"

    def test_fills_in_missing_indices(self):
        """Test that unindexed template segments get the location's indices."""
        result = transpose_data_binding("MyModel.Group2.Nested.Age", self.LOCATION)
        assert result == "MyModel.Group2[2].Nested[2].Age"

    def test_stops_at_first_differing_segment(self):
        """Test that transposition stops where the paths diverge."""
        result = transpose_data_binding("MyModel.Group2.Other.Parents", self.LOCATION)
        assert result == "MyModel.Group2[2].Other.Parents"

    def test_already_transposed_path_is_unchanged(self):
        """Test that transposing the location's own binding returns it unchanged."""
        assert transpose_data_binding(self.LOCATION, self.LOCATION) == self.LOCATION
        assert (
            transpose_data_binding(
                self.LOCATION, self.LOCATION, overwrite_existing_indices=False
            )
            == self.LOCATION
        )

    @pytest.mark.parametrize(
        "path",
        [
            "MyModel.Group22.NestedOtherValue.Key",
            "MyModel.Gro.Nes[1].Key",
            "MyModel.Gro[0].Nes.Key",
            "Other.Group2.Nested.Age",
        ],
    )
    def test_no_prefix_matching(self, path):
        """Test that segment names must match exactly, not by prefix."""
        assert transpose_data_binding(path, self.LOCATION) == path

    def test_overwrites_existing_indices_by_default(self):
        """Test that explicit indices are replaced by default."""
        result = transpose_data_binding("MyModel.Group2[1].Nested[1].Age", self.LOCATION)
        assert result == "MyModel.Group2[2].Nested[2].Age"

    def test_conflicting_index_blocks_further_inference(self):
        """Test that a conflicting explicit index leaves later segments alone."""
        result = transpose_data_binding(
            "MyModel.Group2[3].Nested.Age",
            self.LOCATION,
            overwrite_existing_indices=False,
        )
        assert result == "MyModel.Group2[3].Nested.Age"

    def test_matching_explicit_index_keeps_resolving(self):
        """Test that an explicit index equal to the location's is trusted."""
        result = transpose_data_binding(
            "MyModel.Group2[2].Nested.Age",
            self.LOCATION,
            overwrite_existing_indices=False,
        )
        assert result == "MyModel.Group2[2].Nested[2].Age"

    def test_row_index_applies_to_repeating_group_location(self):
        """Test that the row index fills the last segment of a repeating group binding."""
        result = transpose_data_binding(
            "MyModel.Group2.Nested.Age",
            "MyModel.Group2[2].Nested",
            row_index=1,
            current_location_is_rep_group=True,
        )
        assert result == "MyModel.Group2[2].Nested[1].Age"

    def test_row_index_ignored_for_non_group_location(self):
        """Test that the row index is only used when the location is a repeating group."""
        result = transpose_data_binding(
            "MyModel.Group2.Nested.Age",
            "MyModel.Group2[2].Nested",
            row_index=1,
        )
        assert result == "MyModel.Group2[2].Nested.Age"

    def test_location_shorter_than_subject_index_untouched(self):
        """Test that explicit indices past the end of the location are preserved."""
        result = transpose_data_binding("MyModel.Group2.Nested[4].Age", "MyModel.Group2[1]")
        assert result == "MyModel.Group2[1].Nested[4].Age"
