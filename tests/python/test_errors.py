"""
Tests for the error taxonomy.
"""

import pytest

from matrixkit import error
from matrixkit.error import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    DimensionMismatchError,
    InvalidDataError,
    MatrixKitError,
    NameLookupError,
    NotSupportedError,
    NumericalError,
    check_error,
    check_not_none,
    read_only_error,
)


class TestErrorHierarchy:
    """Test every error is also the matching builtin exception."""

    @pytest.mark.parametrize("cls, builtin", [
        (ArgumentNullError, TypeError),
        (ArgumentError, ValueError),
        (DimensionMismatchError, ValueError),
        (ArgumentOutOfRangeError, IndexError),
        (ArgumentOutOfRangeError, ValueError),
        (NameLookupError, KeyError),
        (NotSupportedError, TypeError),
        (InvalidDataError, ValueError),
        (NumericalError, ArithmeticError),
    ])
    def test_builtin_base(self, cls, builtin):
        """Test builtin compatibility."""
        assert issubclass(cls, MatrixKitError)
        assert issubclass(cls, builtin)

    def test_argument_subclasses(self):
        """Test argument errors share a base."""
        assert issubclass(DimensionMismatchError, ArgumentError)
        assert issubclass(ArgumentOutOfRangeError, ArgumentError)


class TestErrorAttributes:
    """Test error attributes and messages."""

    def test_default_message(self):
        """Test the message defaults to the code description."""
        exc = ArgumentNullError(param_name='matrix')
        assert exc.code == error.MATRIXKIT_ERROR_ARGUMENT_NULL
        assert exc.message == "Value cannot be None"
        assert exc.param_name == 'matrix'
        assert "'matrix'" in str(exc)

    def test_name_lookup_str(self):
        """Test NameLookupError text is not quoted like a KeyError."""
        exc = NameLookupError("Name 'x' is not defined.")
        assert str(exc) == "Name 'x' is not defined."

    def test_invalid_data_position(self):
        """Test InvalidDataError carries the line and column."""
        exc = InvalidDataError(line_number=3, column=2)
        assert exc.line_number == 3
        assert exc.column == 2
        assert "line 3" in str(exc)
        assert "column 2" in str(exc)

    def test_read_only_error(self):
        """Test the read-only error."""
        assert isinstance(read_only_error(), NotSupportedError)


class TestErrorHelpers:
    """Test checking helpers."""

    def test_check_error(self):
        """Test codes map to their exception classes."""
        check_error(error.MATRIXKIT_OK)
        with pytest.raises(ArgumentOutOfRangeError) as info:
            check_error(error.MATRIXKIT_ERROR_OUT_OF_RANGE, "reading")
        assert str(info.value).startswith("reading: ")
        with pytest.raises(MatrixKitError) as info:
            check_error(999)
        assert info.value.code == 999

    def test_check_not_none(self):
        """Test check_not_none."""
        check_not_none(0, 'value')
        with pytest.raises(ArgumentNullError) as info:
            check_not_none(None, 'value')
        assert info.value.param_name == 'value'
