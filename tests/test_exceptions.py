"""Tests for the forest exception hierarchy."""

import pytest

from dataknobs_forest.exceptions import (
    ExpectedBranchError,
    ExpectedLeafError,
    ForestError,
    ForestPathError,
    InvalidMoveError,
    OutOfBoundsError,
    ZeroLengthPathError,
)


class TestForestError:
    """Test the base ForestError class."""

    def test_basic_exception(self):
        error = ForestError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.context == {}
        assert error.details == {}

    def test_details_takes_precedence(self):
        error = ForestError("Error", context={"key": "context"}, details={"key": "details"})
        assert error.context == {"key": "details"}
        assert error.details is error.context


class TestPathErrors:
    """Test the positional path errors."""

    def test_out_of_bounds(self):
        error = OutOfBoundsError(7, 1)
        assert error.index == 7
        assert error.depth == 1
        assert error.context == {"index": 7, "depth": 1}
        assert "path element 7 (at 1) is out of bounds" in str(error)

    def test_expected_branch_with_and_without_position(self):
        assert "points to a leaf" in str(ExpectedBranchError(1, 0))
        assert str(ExpectedBranchError()) == (
            "Failed to resolve tree by path: expected branch, but got leaf"
        )
        assert ExpectedBranchError().index is None

    def test_expected_leaf_with_and_without_position(self):
        assert "points to a branch" in str(ExpectedLeafError(2, 0))
        assert str(ExpectedLeafError()) == (
            "Failed to resolve tree by path: expected leaf, but got branch"
        )

    def test_zero_length_path(self):
        assert str(ZeroLengthPathError()) == "Zero length forest paths are not allowed."

    def test_invalid_move(self):
        error = InvalidMoveError([2], [2, 1])
        assert error.from_path == (2,)
        assert error.to_path == (2, 1)
        assert error.context == {"from_path": (2,), "to_path": (2, 1)}

    @pytest.mark.parametrize(
        "error",
        [
            ZeroLengthPathError(),
            OutOfBoundsError(0, 0),
            ExpectedBranchError(),
            ExpectedLeafError(),
            InvalidMoveError((0,), (0, 0)),
        ],
    )
    def test_hierarchy(self, error):
        assert isinstance(error, ForestError)
        with pytest.raises(ForestError):
            raise error

    def test_positional_errors_share_a_base(self):
        for error in (OutOfBoundsError(0, 0), ExpectedBranchError(), ExpectedLeafError()):
            assert isinstance(error, ForestPathError)
