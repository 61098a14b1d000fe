"""
Tests for read-only matrix views.
"""

import numpy as np
import pytest

from matrixkit import (
    ArgumentError,
    ArgumentNullError,
    ComplexMatrix,
    DoubleMatrix,
    NotSupportedError,
    ReadOnlyComplexMatrix,
    ReadOnlyDoubleMatrix,
)

from conftest import assert_matrix_equal, assert_same_names


class TestReadOnlyConstruction:
    """Test wrapping matrices."""

    def test_wrap(self, named_matrix):
        """Test a view exposes the wrapped content."""
        view = ReadOnlyDoubleMatrix(named_matrix)
        assert view.is_read_only
        assert view.shape == named_matrix.shape
        assert view.name == "Sample"
        assert view == named_matrix
        assert_same_names(view, named_matrix)
        assert view.storage_scheme is named_matrix.storage_scheme

    def test_as_read_only(self, small_matrix):
        """Test as_read_only on an owner and on a view."""
        view = small_matrix.as_read_only()
        assert isinstance(view, ReadOnlyDoubleMatrix)
        assert view.as_read_only() is view

    def test_wrap_view_unwraps(self, small_matrix):
        """Test wrapping a view shares the owner matrix."""
        view = ReadOnlyDoubleMatrix(ReadOnlyDoubleMatrix(small_matrix))
        small_matrix[0, 0] = 12.0
        assert view[0, 0] == 12.0

    def test_wrap_none(self):
        """Test None is rejected."""
        with pytest.raises(ArgumentNullError):
            ReadOnlyDoubleMatrix(None)

    def test_wrap_wrong_type(self):
        """Test a complex matrix cannot be wrapped as real."""
        with pytest.raises(ArgumentError):
            ReadOnlyDoubleMatrix(ComplexMatrix.dense(1, 1))
        with pytest.raises(ArgumentError):
            ReadOnlyComplexMatrix(DoubleMatrix.dense(1, 1))


class TestReadOnlyTracksOwner:
    """Test views hold a reference, not a copy."""

    def test_mutation_is_visible(self, small_matrix):
        """Test later writes show through the view."""
        view = small_matrix.as_read_only()
        small_matrix[1, 1] = 42.0
        small_matrix.set_row_name(1, "changed")
        small_matrix.name = "renamed"
        assert view[1, 1] == 42.0
        assert view.get_row_name(1) == "changed"
        assert view.name == "renamed"

    def test_in_place_operations_are_visible(self, small_matrix, small_array):
        """Test storage replaced in place shows through the view."""
        view = small_matrix.as_read_only()
        small_matrix.in_place_transpose()
        assert view.shape == (4, 3)
        assert_matrix_equal(view, small_array.T)


class TestReadOnlyRejectsMutation:
    """Test every mutator raises and leaves the owner unchanged."""

    @pytest.mark.parametrize("mutate", [
        lambda v: v.__setitem__((0, 0), 1.0),
        lambda v: v.__setitem__(0, 1.0),
        lambda v: v.in_place_apply(lambda x: x + 1),
        lambda v: v.in_place_transpose(),
        lambda v: v.set_row_name(0, "x"),
        lambda v: v.set_column_name(0, "x"),
        lambda v: v.remove_row_name(0),
        lambda v: v.remove_column_name(0),
        lambda v: v.remove_all_row_names(),
        lambda v: v.remove_all_column_names(),
        lambda v: setattr(v, "name", "x"),
    ])
    def test_mutator_raises(self, named_matrix, mutate):
        """Test the mutator raises NotSupportedError."""
        before = named_matrix.clone()
        view = named_matrix.as_read_only()
        with pytest.raises(NotSupportedError):
            mutate(view)
        assert named_matrix == before
        assert_same_names(named_matrix, before)
        assert named_matrix.name == before.name

    def test_complex_in_place_conjugates(self, complex_array):
        """Test complex in-place operations are rejected."""
        owner = ComplexMatrix.from_array(complex_array)
        view = owner.as_read_only()
        with pytest.raises(NotSupportedError):
            view.in_place_conjugate()
        with pytest.raises(NotSupportedError):
            view.in_place_conjugate_transpose()
        assert_matrix_equal(owner, complex_array)


class TestReadOnlyDerived:
    """Test derived operations return mutable owners."""

    def test_derived_are_owners(self, named_matrix):
        """Test transpose, apply, clone and sub-matrices."""
        view = named_matrix.as_read_only()
        for result in (
            view.transpose(),
            view.apply(np.abs),
            view.clone(),
            view[[0, 1], ":"],
            view + view,
            view.to_dense(),
        ):
            assert type(result) is DoubleMatrix
            assert not result.is_read_only

    def test_clone_keeps_names(self, named_matrix):
        """Test a clone of a view copies names and name."""
        clone = named_matrix.as_read_only().clone()
        clone[0, 0] = 99.0
        assert named_matrix[0, 0] == 1.0
        assert clone.name == "Sample"
        assert_same_names(clone, named_matrix)

    def test_complex_view(self, complex_array):
        """Test complex operations through a view."""
        view = ComplexMatrix.from_array(complex_array).as_read_only()
        assert isinstance(view, ReadOnlyComplexMatrix)
        assert view.is_hermitian
        conjugate = view.conjugate()
        assert type(conjugate) is ComplexMatrix
        assert_matrix_equal(conjugate, np.conj(complex_array))
        assert type(view.modulus()) is DoubleMatrix
