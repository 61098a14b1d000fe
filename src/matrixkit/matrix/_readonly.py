"""
Read-Only Matrix Views

Non-owning wrappers around an owner matrix. A view keeps a reference, so
later mutations of the wrapped matrix are visible through it; every
mutator of the view raises NotSupportedError.
"""

from __future__ import annotations

from typing import Dict, Optional

from matrixkit.error import ArgumentError, ArgumentNullError, read_only_error
from matrixkit.matrix._backend import Storage
from matrixkit.matrix._base import MatrixBase
from matrixkit.matrix._complex import ComplexMatrix, ComplexOperations
from matrixkit.matrix._double import DoubleMatrix

__all__ = ['ReadOnlyMatrix', 'ReadOnlyDoubleMatrix', 'ReadOnlyComplexMatrix']


class ReadOnlyMatrix(MatrixBase):
    """Base class of read-only views; subclasses set ``_wrapped_type``."""

    _wrapped_type = None

    def __init__(self, matrix):
        if matrix is None:
            raise ArgumentNullError(param_name='matrix')
        if isinstance(matrix, ReadOnlyMatrix):
            matrix = matrix._matrix
        if not isinstance(matrix, self._wrapped_type):
            raise ArgumentError(
                f"Parameter must be a {self._wrapped_type.__name__}.", param_name='matrix'
            )
        self._matrix = matrix

    # =========================================================================
    # Hooks
    # =========================================================================

    @property
    def _store(self) -> Storage:
        return self._matrix._storage

    @property
    def _row_name_map(self) -> Dict[int, str]:
        return self._matrix._row_names

    @property
    def _column_name_map(self) -> Dict[int, str]:
        return self._matrix._column_names

    def _owner_type(self) -> type:
        return type(self._matrix)

    @property
    def is_read_only(self) -> bool:
        return True

    def as_read_only(self):
        return self

    @property
    def name(self) -> Optional[str]:
        return self._matrix.name

    @name.setter
    def name(self, value):
        raise read_only_error()

    # =========================================================================
    # Rejected Mutators
    # =========================================================================

    def __setitem__(self, key, value):
        raise read_only_error()

    def in_place_apply(self, func):
        raise read_only_error()

    def in_place_transpose(self):
        raise read_only_error()

    def set_row_name(self, row_index, name):
        raise read_only_error()

    def set_column_name(self, column_index, name):
        raise read_only_error()

    def remove_row_name(self, row_index):
        raise read_only_error()

    def remove_column_name(self, column_index):
        raise read_only_error()

    def remove_all_row_names(self):
        raise read_only_error()

    def remove_all_column_names(self):
        raise read_only_error()


class ReadOnlyDoubleMatrix(ReadOnlyMatrix):
    """Read-only view of a DoubleMatrix."""

    _wrapped_type = DoubleMatrix


class ReadOnlyComplexMatrix(ComplexOperations, ReadOnlyMatrix):
    """Read-only view of a ComplexMatrix."""

    _wrapped_type = ComplexMatrix

    def in_place_conjugate(self):
        raise read_only_error()

    def in_place_conjugate_transpose(self):
        raise read_only_error()
