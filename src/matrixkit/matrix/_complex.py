"""Complex (complex128) matrices."""

from __future__ import annotations

import numpy as np

from matrixkit.matrix._matrix import Matrix

__all__ = ['ComplexMatrix', 'ComplexOperations']


class ComplexOperations:
    """
    Read operations specific to complex matrices.

    Mixed into both ComplexMatrix and ReadOnlyComplexMatrix; relies on the
    MatrixBase hooks.
    """

    @property
    def is_hermitian(self) -> bool:
        if not self.is_square:
            return False
        array = self.to_array()
        return bool(np.array_equal(array, np.conj(array).T))

    @property
    def is_skew_hermitian(self) -> bool:
        if not self.is_square:
            return False
        array = self.to_array()
        return bool(np.array_equal(array, -np.conj(array).T))

    def conjugate(self):
        """New matrix of complex conjugates; names are kept."""
        return self._derive(
            self._store.map_values(np.conjugate),
            row_names=dict(self._row_name_map),
            column_names=dict(self._column_name_map),
        )

    def conjugate_transpose(self):
        """New matrix holding the conjugate transpose; names swap."""
        return self._derive(
            self._store.transpose().map_values(np.conjugate),
            row_names=dict(self._column_name_map),
            column_names=dict(self._row_name_map),
        )

    def _parts(self, ufunc):
        from matrixkit.matrix._double import DoubleMatrix
        return DoubleMatrix._from_storage(
            self._store.map_values(ufunc, np.float64),
            row_names=dict(self._row_name_map),
            column_names=dict(self._column_name_map),
        )

    def real(self):
        """DoubleMatrix of real parts."""
        return self._parts(np.real)

    def imaginary(self):
        """DoubleMatrix of imaginary parts."""
        return self._parts(np.imag)

    def modulus(self):
        """DoubleMatrix of absolute values."""
        return self._parts(np.abs)


class ComplexMatrix(ComplexOperations, Matrix):
    """
    Matrix of complex128 entries.

    Example:
        >>> m = ComplexMatrix.from_array([[1, 2 + 1j], [2 - 1j, 3]])
        >>> m.is_hermitian
        True
    """

    _dtype = np.complex128

    def as_read_only(self):
        """Read-only view of this matrix; reads follow later mutations."""
        from matrixkit.matrix._readonly import ReadOnlyComplexMatrix
        return ReadOnlyComplexMatrix(self)

    def in_place_conjugate(self) -> None:
        self._storage = self._storage.map_values(np.conjugate)

    def in_place_conjugate_transpose(self) -> None:
        self._storage = self._storage.transpose().map_values(np.conjugate)
        self._row_names, self._column_names = self._column_names, self._row_names
