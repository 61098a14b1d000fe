"""
Owner Matrix

Mutable matrix that owns its storage and names. DoubleMatrix and
ComplexMatrix fix the element dtype; everything else lives here.

Example:
    >>> m = DoubleMatrix.dense(2, 3, [1, 2, 3, 4, 5, 6])   # column-major
    >>> m[1, 0]
    2.0
    >>> m.set_row_name(0, "first")
    >>> m["first", ":"].shape
    (1, 3)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import numpy as np
import scipy.sparse as sp

from matrixkit._config import StorageScheme, config
from matrixkit._typing import check_position, is_integer, is_number, resolve_selector
from matrixkit.error import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    DimensionMismatchError,
    check_not_none,
)
from matrixkit.matrix._backend import (
    DenseStorage,
    SparseStorage,
    Storage,
    storage_from_array,
)
from matrixkit.matrix._base import MatrixBase

logger = logging.getLogger("matrixkit.matrix")

__all__ = ['Matrix']


def _check_dimension(value: int, param_name: str) -> int:
    if not is_integer(value) or value < 1:
        raise ArgumentOutOfRangeError(
            "Parameter must be greater than zero.", param_name=param_name
        )
    return int(value)


class Matrix(MatrixBase):
    """
    Matrix owning a dense or sparse storage.

    Subclasses set ``_dtype``. Instances are built through the factories
    (dense, sparse, identity, diagonal, from_array, from_scipy), never by
    calling the class directly with raw storage.

    Attributes:
        name: Optional matrix name.
    """

    _dtype = np.float64

    def __init__(
        self,
        storage: Storage,
        row_names: Optional[Dict[int, str]] = None,
        column_names: Optional[Dict[int, str]] = None,
        name: Optional[str] = None,
    ):
        self._storage = storage
        self._row_names = dict(row_names) if row_names else {}
        self._column_names = dict(column_names) if column_names else {}
        self._name = name

    @classmethod
    def _from_storage(cls, storage: Storage, row_names=None, column_names=None, name=None):
        if storage.dtype != np.dtype(cls._dtype):
            storage = storage.astype(cls._dtype)
        return cls(storage, row_names=row_names, column_names=column_names, name=name)

    # =========================================================================
    # Hooks
    # =========================================================================

    @property
    def _store(self) -> Storage:
        return self._storage

    @property
    def _row_name_map(self) -> Dict[int, str]:
        return self._row_names

    @property
    def _column_name_map(self) -> Dict[int, str]:
        return self._column_names

    def _owner_type(self) -> type:
        return type(self)

    @property
    def is_read_only(self) -> bool:
        return False

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: Optional[str]):
        self._name = value

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def dense(cls, number_of_rows: int, number_of_columns: int, data=None, *, row_major: bool = False):
        """
        Create a dense matrix.

        Args:
            number_of_rows: Number of rows, at least 1.
            number_of_columns: Number of columns, at least 1.
            data: None for zeros, a scalar fill value, a flat iterable of
                rows * columns entries, or a 2-D array-like.
            row_major: Read a flat ``data`` in row-major order instead of
                column-major order.

        Raises:
            ArgumentOutOfRangeError: If a dimension is less than 1.
            ArgumentError: If data does not hold rows * columns entries.
        """
        rows = _check_dimension(number_of_rows, 'number_of_rows')
        cols = _check_dimension(number_of_columns, 'number_of_columns')

        if data is None:
            return cls._from_storage(DenseStorage.zeros(rows, cols, cls._dtype))
        if is_number(data):
            return cls._from_storage(
                DenseStorage(rows, cols, np.full(rows * cols, data, dtype=cls._dtype))
            )

        array = np.asarray(data if not isinstance(data, MatrixBase) else data.to_array())
        if array.ndim == 2:
            if array.shape != (rows, cols):
                raise DimensionMismatchError(
                    f"Data has shape {array.shape}, expected {(rows, cols)}.",
                    param_name='data',
                )
            return cls._from_storage(DenseStorage.from_array(array, cls._dtype))

        flat = array.ravel()
        if flat.size != rows * cols:
            raise ArgumentError(
                f"Data has {flat.size} entries, expected {rows * cols}.",
                param_name='data',
            )
        grid = flat.reshape((rows, cols), order='C' if row_major else 'F')
        return cls._from_storage(DenseStorage.from_array(grid, cls._dtype))

    @classmethod
    def sparse(cls, number_of_rows: int, number_of_columns: int, capacity: int = 0):
        """
        Create an all-zero sparse matrix.

        Raises:
            ArgumentOutOfRangeError: If a dimension is less than 1 or
                capacity is negative.
        """
        rows = _check_dimension(number_of_rows, 'number_of_rows')
        cols = _check_dimension(number_of_columns, 'number_of_columns')
        if capacity < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='capacity'
            )
        return cls._from_storage(SparseStorage.zeros(rows, cols, cls._dtype, capacity))

    @classmethod
    def identity(cls, dimension: int):
        """Dense identity matrix of the given dimension."""
        n = _check_dimension(dimension, 'dimension')
        return cls._from_storage(DenseStorage.from_array(np.eye(n), cls._dtype))

    @classmethod
    def diagonal(cls, values, *, sparse: bool = False):
        """
        Square matrix with values on the main diagonal.

        Args:
            values: Vector matrix or iterable of diagonal entries.
            sparse: Use sparse storage.

        Raises:
            ArgumentNullError: If values is None.
            ArgumentError: If values is empty or a non-vector matrix.
        """
        check_not_none(values, 'values')
        if isinstance(values, MatrixBase):
            if not values.is_vector:
                raise ArgumentError("Parameter must be a vector.", param_name='values')
            entries = values._store.column_major()
        else:
            entries = np.asarray(list(values)).ravel()
        if entries.size == 0:
            raise ArgumentError("Parameter must be non empty.", param_name='values')
        scheme = StorageScheme.SPARSE if sparse else StorageScheme.DENSE
        return cls._from_storage(
            storage_from_array(np.diag(entries.astype(cls._dtype)), scheme, cls._dtype)
        )

    @classmethod
    def from_array(cls, array, scheme: Optional[StorageScheme] = None):
        """
        Create a matrix from a 1-D or 2-D array-like (copied).

        A 1-D input becomes a column vector. When scheme is omitted the
        configured default storage scheme is used.

        Raises:
            ArgumentNullError: If array is None.
            ArgumentError: If array is empty or has more than two dimensions.
        """
        check_not_none(array, 'array')
        if isinstance(array, MatrixBase):
            array = array.to_array()
        data = np.asarray(array)
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        if data.ndim != 2 or data.size == 0:
            raise ArgumentError(
                "Parameter must be a non empty 1-D or 2-D array.", param_name='array'
            )
        if not np.issubdtype(np.dtype(cls._dtype), np.complexfloating) and np.iscomplexobj(data):
            raise ArgumentError(
                "Cannot store complex data in a real matrix.", param_name='array'
            )
        scheme = config.default_scheme if scheme is None else StorageScheme(scheme)
        return cls._from_storage(storage_from_array(data, scheme, cls._dtype))

    @classmethod
    def from_scipy(cls, matrix):
        """
        Create a sparse matrix from any scipy sparse matrix or array.

        Raises:
            ArgumentNullError: If matrix is None.
            ArgumentError: If matrix is not a scipy sparse matrix, or is empty.
        """
        check_not_none(matrix, 'matrix')
        if not sp.issparse(matrix):
            raise ArgumentError("Parameter must be a scipy sparse matrix.", param_name='matrix')
        if matrix.shape[0] < 1 or matrix.shape[1] < 1:
            raise ArgumentError("Parameter must be non empty.", param_name='matrix')
        csr = sp.csr_matrix(matrix)
        csr.sum_duplicates()
        csr.sort_indices()
        return cls._from_storage(
            SparseStorage.from_csr(csr.shape, csr.indptr, csr.indices, csr.data, cls._dtype)
        )

    # =========================================================================
    # Names
    # =========================================================================

    def set_row_name(self, row_index: int, name: str) -> None:
        """Set the name of a row.

        Raises:
            ArgumentOutOfRangeError: If row_index is out of range.
            ArgumentNullError: If name is None.
        """
        row_index = check_position(row_index, self.number_of_rows, 'row_index')
        check_not_none(name, 'name')
        self._row_names[row_index] = name

    def set_column_name(self, column_index: int, name: str) -> None:
        """Set the name of a column.

        Raises:
            ArgumentOutOfRangeError: If column_index is out of range.
            ArgumentNullError: If name is None.
        """
        column_index = check_position(column_index, self.number_of_columns, 'column_index')
        check_not_none(name, 'name')
        self._column_names[column_index] = name

    def remove_row_name(self, row_index: int) -> bool:
        """Remove the name of a row; return whether it had one."""
        row_index = check_position(row_index, self.number_of_rows, 'row_index')
        return self._row_names.pop(row_index, None) is not None

    def remove_column_name(self, column_index: int) -> bool:
        """Remove the name of a column; return whether it had one."""
        column_index = check_position(column_index, self.number_of_columns, 'column_index')
        return self._column_names.pop(column_index, None) is not None

    def remove_all_row_names(self) -> None:
        self._row_names.clear()

    def remove_all_column_names(self) -> None:
        self._column_names.clear()

    # =========================================================================
    # Mutation
    # =========================================================================

    def _coerce_scalar(self, value):
        if not is_number(value):
            raise ArgumentError(
                "Value must be a number or a matrix.", param_name='value'
            )
        if np.iscomplexobj(value) and not np.issubdtype(self.dtype, np.complexfloating):
            if np.imag(value) != 0:
                raise ArgumentError(
                    "Cannot store a complex value in a real matrix.", param_name='value'
                )
            value = np.real(value)
        return self.dtype.type(value)

    def _coerce_block(self, value: MatrixBase, shape) -> np.ndarray:
        if value.shape != shape:
            raise DimensionMismatchError(
                f"Value has shape {value.shape}, expected {shape}.", param_name='value'
            )
        # Copy out first: value may share storage with self
        block = value.to_array()
        if np.iscomplexobj(block) and not np.issubdtype(self.dtype, np.complexfloating):
            raise ArgumentError(
                "Cannot store complex values in a real matrix.", param_name='value'
            )
        return block.astype(self.dtype)

    def __setitem__(self, key, value):
        if value is None:
            raise ArgumentNullError(param_name='value')

        if isinstance(key, tuple):
            if len(key) != 2:
                raise ArgumentError("Expected a (rows, columns) pair.", param_name='key')
            rows, row_scalar = resolve_selector(
                key[0], self.number_of_rows, 'row_index', self._row_names
            )
            cols, col_scalar = resolve_selector(
                key[1], self.number_of_columns, 'column_index', self._column_names
            )
            if isinstance(value, MatrixBase):
                block = self._coerce_block(value, (rows.size, cols.size))
                self._storage.put(rows, cols, block)
            elif row_scalar and col_scalar:
                self._storage.set(int(rows[0]), int(cols[0]), self._coerce_scalar(value))
            else:
                raise ArgumentError(
                    "A region can only be assigned a matrix.", param_name='value'
                )
            return

        if is_integer(key):
            k = check_position(key, self.count, 'linear_index')
            rows_total = self.number_of_rows
            if isinstance(value, MatrixBase):
                block = self._coerce_block(value, (1, 1))
                self._storage.set(k % rows_total, k // rows_total, block[0, 0])
            else:
                self._storage.set(k % rows_total, k // rows_total, self._coerce_scalar(value))
            return

        positions, _ = resolve_selector(key, self.count, 'linear_index')
        if not isinstance(value, MatrixBase):
            raise ArgumentError(
                "Several entries can only be assigned a matrix.", param_name='value'
            )
        if value.count != positions.size or not value.is_vector:
            raise DimensionMismatchError(
                f"Value must be a vector of {positions.size} entries.", param_name='value'
            )
        block = self._coerce_block(value, value.shape)
        self._storage.put_linear(positions, block.ravel(order='F'))

    def in_place_apply(self, func: Callable) -> None:
        """Replace every entry x by func(x).

        Raises:
            ArgumentNullError: If func is None.
        """
        check_not_none(func, 'func')
        self._storage = self._storage.apply(func)

    def in_place_transpose(self) -> None:
        """Transpose this matrix, swapping its row and column names."""
        self._storage = self._storage.transpose()
        self._row_names, self._column_names = self._column_names, self._row_names
