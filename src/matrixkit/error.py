"""
Error handling for matrixkit.

Every error raised by the library derives from MatrixKitError and carries a
numeric code. Each concrete class also derives from the builtin exception a
Python caller would expect, so ``except IndexError`` or ``except ValueError``
keep working.

Taxonomy:

    MatrixKitError (Exception)
    ├── ArgumentNullError (TypeError)         - required argument is None
    ├── ArgumentError (ValueError)            - argument violates a precondition
    │   ├── DimensionMismatchError            - shapes do not agree
    │   └── ArgumentOutOfRangeError (IndexError) - index/dimension out of bounds
    ├── NameLookupError (KeyError)            - unknown row/column/category name
    ├── NotSupportedError (TypeError)         - mutation through a read-only view
    ├── InvalidDataError (ValueError)         - malformed tabular input
    └── NumericalError (ArithmeticError)      - decomposition failure
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Error Codes
# =============================================================================

MATRIXKIT_OK = 0

# General errors (1-9)
MATRIXKIT_ERROR_UNKNOWN = 1
MATRIXKIT_ERROR_INTERNAL = 2
MATRIXKIT_ERROR_ARGUMENT_NULL = 4

# Argument errors (10-19)
MATRIXKIT_ERROR_INVALID_ARGUMENT = 10
MATRIXKIT_ERROR_DIMENSION_MISMATCH = 11
MATRIXKIT_ERROR_OUT_OF_RANGE = 14
MATRIXKIT_ERROR_NAME_NOT_FOUND = 15

# I/O errors (30-39)
MATRIXKIT_ERROR_INVALID_DATA = 33

# Feature errors (40-49)
MATRIXKIT_ERROR_NOT_SUPPORTED = 40

# Numerical errors (50-59)
MATRIXKIT_ERROR_NUMERICAL = 50


ERROR_MESSAGES = {
    MATRIXKIT_OK: "Success",
    MATRIXKIT_ERROR_UNKNOWN: "Unknown error",
    MATRIXKIT_ERROR_INTERNAL: "Internal error",
    MATRIXKIT_ERROR_ARGUMENT_NULL: "Value cannot be None",
    MATRIXKIT_ERROR_INVALID_ARGUMENT: "Invalid argument",
    MATRIXKIT_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    MATRIXKIT_ERROR_OUT_OF_RANGE: "Argument out of range",
    MATRIXKIT_ERROR_NAME_NOT_FOUND: "Name not found",
    MATRIXKIT_ERROR_INVALID_DATA: "Invalid data",
    MATRIXKIT_ERROR_NOT_SUPPORTED: "Specified method is not supported",
    MATRIXKIT_ERROR_NUMERICAL: "Numerical error",
}


# =============================================================================
# Exception Classes
# =============================================================================

class MatrixKitError(Exception):
    """
    Base exception for all matrixkit errors.

    Attributes:
        code: Numeric error code (see ERROR_MESSAGES)
        message: Human readable message
        param_name: Name of the offending parameter, if any
    """

    code = MATRIXKIT_ERROR_UNKNOWN

    def __init__(
        self,
        message: Optional[str] = None,
        param_name: Optional[str] = None,
        code: Optional[int] = None,
    ):
        if code is not None:
            self.code = code
        if message is None:
            message = ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        self.param_name = param_name
        text = message if param_name is None else f"{message} (parameter '{param_name}')"
        super().__init__(text)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "MatrixKitError":
        """Create the exception registered for ``code`` with optional context."""
        base_msg = ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        target = _CODE_TO_CLASS.get(code, cls)
        return target(msg, code=code)


class ArgumentNullError(MatrixKitError, TypeError):
    """A required argument is None."""

    code = MATRIXKIT_ERROR_ARGUMENT_NULL


class ArgumentError(MatrixKitError, ValueError):
    """An argument violates a structural precondition."""

    code = MATRIXKIT_ERROR_INVALID_ARGUMENT


class DimensionMismatchError(ArgumentError):
    """Operand shapes do not agree."""

    code = MATRIXKIT_ERROR_DIMENSION_MISMATCH


class ArgumentOutOfRangeError(ArgumentError, IndexError):
    """An index or dimension lies outside its valid range."""

    code = MATRIXKIT_ERROR_OUT_OF_RANGE


class NameLookupError(MatrixKitError, KeyError):
    """A row, column or category name is not defined."""

    code = MATRIXKIT_ERROR_NAME_NOT_FOUND

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message
        return Exception.__str__(self)


class NotSupportedError(MatrixKitError, TypeError):
    """The operation is not supported by this instance (e.g. read-only views)."""

    code = MATRIXKIT_ERROR_NOT_SUPPORTED


class InvalidDataError(MatrixKitError, ValueError):
    """
    Tabular input is malformed.

    Attributes:
        line_number: Zero-based line of the offending row, or None
        column: Zero-based column being read, or None
    """

    code = MATRIXKIT_ERROR_INVALID_DATA

    def __init__(
        self,
        message: Optional[str] = None,
        line_number: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[int] = None,
    ):
        self.line_number = line_number
        self.column = column
        if message is None and line_number is not None:
            message = (
                f"Not enough data at line {line_number}, column {column}."
            )
        super().__init__(message, code=code)


class NumericalError(MatrixKitError, ArithmeticError):
    """A numerical routine failed."""

    code = MATRIXKIT_ERROR_NUMERICAL


_CODE_TO_CLASS = {
    MATRIXKIT_ERROR_ARGUMENT_NULL: ArgumentNullError,
    MATRIXKIT_ERROR_INVALID_ARGUMENT: ArgumentError,
    MATRIXKIT_ERROR_DIMENSION_MISMATCH: DimensionMismatchError,
    MATRIXKIT_ERROR_OUT_OF_RANGE: ArgumentOutOfRangeError,
    MATRIXKIT_ERROR_NAME_NOT_FOUND: NameLookupError,
    MATRIXKIT_ERROR_INVALID_DATA: InvalidDataError,
    MATRIXKIT_ERROR_NOT_SUPPORTED: NotSupportedError,
    MATRIXKIT_ERROR_NUMERICAL: NumericalError,
}


# =============================================================================
# Checking Helpers
# =============================================================================

def check_error(code: int, context: str = "") -> None:
    """
    Raise the exception registered for ``code`` unless it is MATRIXKIT_OK.

    Args:
        code: Error code
        context: Optional context prefixed to the message

    Raises:
        MatrixKitError: If code != MATRIXKIT_OK
    """
    if code != MATRIXKIT_OK:
        raise MatrixKitError.from_code(code, context)


def check_not_none(value: Any, param_name: str) -> None:
    """Raise ArgumentNullError if ``value`` is None."""
    if value is None:
        raise ArgumentNullError(param_name=param_name)


def read_only_error() -> NotSupportedError:
    """Build the error raised by every mutator of a read-only view."""
    return NotSupportedError("Specified method is not supported: the instance is read only.")


__all__ = [
    # Codes
    "MATRIXKIT_OK",
    "MATRIXKIT_ERROR_UNKNOWN",
    "MATRIXKIT_ERROR_INTERNAL",
    "MATRIXKIT_ERROR_ARGUMENT_NULL",
    "MATRIXKIT_ERROR_INVALID_ARGUMENT",
    "MATRIXKIT_ERROR_DIMENSION_MISMATCH",
    "MATRIXKIT_ERROR_OUT_OF_RANGE",
    "MATRIXKIT_ERROR_NAME_NOT_FOUND",
    "MATRIXKIT_ERROR_INVALID_DATA",
    "MATRIXKIT_ERROR_NOT_SUPPORTED",
    "MATRIXKIT_ERROR_NUMERICAL",
    "ERROR_MESSAGES",
    # Exceptions
    "MatrixKitError",
    "ArgumentNullError",
    "ArgumentError",
    "DimensionMismatchError",
    "ArgumentOutOfRangeError",
    "NameLookupError",
    "NotSupportedError",
    "InvalidDataError",
    "NumericalError",
    # Helpers
    "check_error",
    "check_not_none",
    "read_only_error",
]
