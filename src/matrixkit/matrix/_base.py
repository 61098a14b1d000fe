"""
Matrix Base Class

The read surface shared by owner matrices (DoubleMatrix, ComplexMatrix) and
their read-only views. Everything here reads through four hooks:

    _store              the storage holding the entries
    _row_name_map       index -> row name
    _column_name_map    index -> column name
    _owner_type()       class used to build derived matrices

Derived operations (transpose, apply, sub-matrices, arithmetic) always
return new owner matrices, so a read-only view produces mutable results.
"""

from __future__ import annotations

import logging
import warnings
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np
import scipy.sparse as sp

from matrixkit._config import StorageScheme, config
from matrixkit._typing import check_position, is_all_selector, is_integer, resolve_selector
from matrixkit.error import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    check_not_none,
)
from matrixkit.matrix import _ops
from matrixkit.matrix._backend import DenseStorage, Storage, storage_from_array
from matrixkit.matrix._index import IndexCollection

logger = logging.getLogger("matrixkit.matrix")

__all__ = ['MatrixBase']


class MatrixBase(ABC):
    """
    Abstract read surface of a matrix.

    Entries are addressed either by (row, column) or by a column-major
    linear index ``k = row + column * number_of_rows``.
    """

    # numpy must defer to the reflected operators below
    __array_ufunc__ = None

    # =========================================================================
    # Abstract Hooks
    # =========================================================================

    @property
    @abstractmethod
    def _store(self) -> Storage:
        """Storage holding the entries."""
        ...

    @property
    @abstractmethod
    def _row_name_map(self) -> Dict[int, str]:
        ...

    @property
    @abstractmethod
    def _column_name_map(self) -> Dict[int, str]:
        ...

    @abstractmethod
    def _owner_type(self) -> type:
        """Owner class used for derived matrices."""
        ...

    @property
    @abstractmethod
    def name(self) -> Optional[str]:
        """Matrix name, or None."""
        ...

    @property
    @abstractmethod
    def is_read_only(self) -> bool:
        ...

    @abstractmethod
    def as_read_only(self) -> 'MatrixBase':
        """Read-only view of this matrix."""
        ...

    def _derive(self, storage: Storage, row_names=None, column_names=None, name=None):
        return self._owner_type()._from_storage(
            storage, row_names=row_names, column_names=column_names, name=name
        )

    # =========================================================================
    # Shape
    # =========================================================================

    @property
    def number_of_rows(self) -> int:
        return self._store.rows

    @property
    def number_of_columns(self) -> int:
        return self._store.cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._store.shape

    @property
    def count(self) -> int:
        """Number of entries, rows times columns."""
        return self._store.rows * self._store.cols

    def __len__(self) -> int:
        return self.count

    @property
    def storage_scheme(self) -> StorageScheme:
        return self._store.scheme

    @property
    def dtype(self) -> np.dtype:
        return self._store.dtype

    @property
    def nnz(self) -> int:
        """Number of nonzero entries."""
        return self._store.nnz

    # =========================================================================
    # Names
    # =========================================================================

    @property
    def has_row_names(self) -> bool:
        return bool(self._row_name_map)

    @property
    def has_column_names(self) -> bool:
        return bool(self._column_name_map)

    @property
    def row_names(self) -> Dict[int, str]:
        """Copy of the row index to name map."""
        return dict(self._row_name_map)

    @property
    def column_names(self) -> Dict[int, str]:
        """Copy of the column index to name map."""
        return dict(self._column_name_map)

    def get_row_name(self, row_index: int) -> Optional[str]:
        """Name of a row, or None if it has none."""
        check_position(row_index, self.number_of_rows, 'row_index')
        return self._row_name_map.get(int(row_index))

    def get_column_name(self, column_index: int) -> Optional[str]:
        """Name of a column, or None if it has none."""
        check_position(column_index, self.number_of_columns, 'column_index')
        return self._column_name_map.get(int(column_index))

    def _selected_names(self, names: Dict[int, str], positions: np.ndarray) -> Dict[int, str]:
        return {
            new: names[int(old)]
            for new, old in enumerate(positions)
            if int(old) in names
        }

    # =========================================================================
    # Element Access
    # =========================================================================

    def _get_linear(self, linear_index: int):
        rows = self.number_of_rows
        return self._store.get(linear_index % rows, linear_index // rows)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise ArgumentError("Expected a (rows, columns) pair.", param_name='key')
            return self._get_region(key[0], key[1])
        return self._get_entries(key)

    def _get_entries(self, linear_indexes):
        if is_integer(linear_indexes):
            return self._get_linear(check_position(linear_indexes, self.count, 'linear_index'))
        return self.vec(linear_indexes)

    def _get_region(self, row_selector, column_selector):
        rows, row_scalar = resolve_selector(
            row_selector, self.number_of_rows, 'row_index', self._row_name_map
        )
        cols, col_scalar = resolve_selector(
            column_selector, self.number_of_columns, 'column_index', self._column_name_map
        )
        if row_scalar and col_scalar:
            return self._store.get(int(rows[0]), int(cols[0]))
        return self._derive(
            self._store.take(rows, cols),
            row_names=self._selected_names(self._row_name_map, rows),
            column_names=self._selected_names(self._column_name_map, cols),
        )

    def view(self, row_indexes, column_indexes, avoid_dense_allocations=None):
        """
        Sub-matrix of the selected rows and columns.

        Equivalent to ``m[row_indexes, column_indexes]``.

        Args:
            row_indexes: Row selector.
            column_indexes: Column selector.
            avoid_dense_allocations: Deprecated and ignored.
        """
        if avoid_dense_allocations is not None:
            warnings.warn(
                "avoid_dense_allocations is deprecated and has no effect",
                DeprecationWarning,
                stacklevel=2,
            )
        return self._get_region(row_indexes, column_indexes)

    def vec(self, linear_indexes=None):
        """
        Column vector of entries in column-major order.

        Args:
            linear_indexes: Linear selector; all entries when omitted.

        Returns:
            count x 1 matrix (or k x 1 for k selected entries) with the
            storage scheme of this matrix.
        """
        if linear_indexes is None or is_all_selector(linear_indexes):
            data = self._store.column_major()
        else:
            positions, _ = resolve_selector(linear_indexes, self.count, 'linear_index')
            data = self._store.take_linear(positions)
        column = np.asarray(data, dtype=self.dtype).reshape(-1, 1)
        return self._derive(storage_from_array(column, self.storage_scheme, self.dtype))

    # =========================================================================
    # Pattern Predicates
    # =========================================================================

    @property
    def is_scalar(self) -> bool:
        return self.number_of_rows == 1 and self.number_of_columns == 1

    @property
    def is_vector(self) -> bool:
        return self.number_of_rows == 1 or self.number_of_columns == 1

    @property
    def is_row_vector(self) -> bool:
        return self.number_of_rows == 1

    @property
    def is_column_vector(self) -> bool:
        return self.number_of_columns == 1

    @property
    def is_square(self) -> bool:
        return self.number_of_rows == self.number_of_columns

    @property
    def lower_bandwidth(self) -> int:
        """Largest i - j over nonzero entries below the diagonal, 0 if none."""
        rows, cols = self._store.nonzero()
        distance = np.asarray(rows) - np.asarray(cols)
        return int(distance.max()) if distance.size and distance.max() > 0 else 0

    @property
    def upper_bandwidth(self) -> int:
        """Largest j - i over nonzero entries above the diagonal, 0 if none."""
        rows, cols = self._store.nonzero()
        distance = np.asarray(cols) - np.asarray(rows)
        return int(distance.max()) if distance.size and distance.max() > 0 else 0

    def _bandwidths(self) -> Tuple[int, int]:
        return self.lower_bandwidth, self.upper_bandwidth

    @property
    def is_symmetric(self) -> bool:
        if not self.is_square:
            return False
        array = self.to_array()
        return bool(np.array_equal(array, array.T))

    @property
    def is_skew_symmetric(self) -> bool:
        if not self.is_square:
            return False
        array = self.to_array()
        return bool(np.array_equal(array, -array.T))

    @property
    def is_diagonal(self) -> bool:
        return self.is_square and self._bandwidths() == (0, 0)

    @property
    def is_lower_triangular(self) -> bool:
        return self.is_square and self.upper_bandwidth == 0

    @property
    def is_upper_triangular(self) -> bool:
        return self.is_square and self.lower_bandwidth == 0

    @property
    def is_triangular(self) -> bool:
        if not self.is_square:
            return False
        lower, upper = self._bandwidths()
        return lower == 0 or upper == 0

    @property
    def is_lower_bidiagonal(self) -> bool:
        if not self.is_square:
            return False
        lower, upper = self._bandwidths()
        return lower <= 1 and upper == 0

    @property
    def is_upper_bidiagonal(self) -> bool:
        if not self.is_square:
            return False
        lower, upper = self._bandwidths()
        return upper <= 1 and lower == 0

    @property
    def is_bidiagonal(self) -> bool:
        return self.is_lower_bidiagonal or self.is_upper_bidiagonal

    @property
    def is_tridiagonal(self) -> bool:
        if not self.is_square:
            return False
        lower, upper = self._bandwidths()
        return lower <= 1 and upper <= 1

    @property
    def is_lower_hessenberg(self) -> bool:
        return self.is_square and self.upper_bandwidth <= 1

    @property
    def is_upper_hessenberg(self) -> bool:
        return self.is_square and self.lower_bandwidth <= 1

    @property
    def is_hessenberg(self) -> bool:
        if not self.is_square:
            return False
        lower, upper = self._bandwidths()
        return lower <= 1 or upper <= 1

    # =========================================================================
    # Search
    # =========================================================================

    @staticmethod
    def _linear_hits(mask: np.ndarray) -> Optional[IndexCollection]:
        hits = np.flatnonzero(mask)
        if hits.size == 0:
            return None
        return IndexCollection(hits.astype(np.int64))

    def find(self, value) -> Optional[IndexCollection]:
        """Linear indexes of entries equal to value, or None."""
        return self._linear_hits(self._store.column_major() == value)

    def find_nonzero(self) -> Optional[IndexCollection]:
        """Linear indexes of nonzero entries, or None."""
        return self._linear_hits(self._store.column_major() != 0)

    def find_while(self, predicate: Callable) -> Optional[IndexCollection]:
        """Linear indexes of entries satisfying predicate, or None.

        Raises:
            ArgumentNullError: If predicate is None.
        """
        check_not_none(predicate, 'predicate')
        values = self._store.column_major().tolist()
        mask = np.array([bool(predicate(v)) for v in values], dtype=bool)
        return self._linear_hits(mask)

    def index_of(self, value) -> int:
        """Linear index of the first entry equal to value, or -1."""
        hits = np.flatnonzero(self._store.column_major() == value)
        return int(hits[0]) if hits.size else -1

    def contains(self, value) -> bool:
        return self.index_of(value) != -1

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def copy_to(self, array: List, offset: int) -> None:
        """
        Copy the entries, in column-major order, into array at offset.

        Raises:
            ArgumentNullError: If array is None.
            ArgumentOutOfRangeError: If offset is negative.
            ArgumentError: If array has fewer than count slots after offset.
        """
        if array is None:
            raise ArgumentNullError(param_name='array')
        if offset < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='offset'
            )
        if len(array) - offset < self.count:
            raise ArgumentError("Not enough space in array.", param_name='array')
        array[offset:offset + self.count] = self._store.column_major().tolist()

    def __iter__(self) -> Iterator:
        return iter(self._store.column_major().tolist())

    # =========================================================================
    # Derived Matrices
    # =========================================================================

    def transpose(self):
        """New matrix holding the transpose; row and column names swap."""
        return self._derive(
            self._store.transpose(),
            row_names=dict(self._column_name_map),
            column_names=dict(self._row_name_map),
        )

    @property
    def T(self):
        return self.transpose()

    def apply(self, func: Callable):
        """New matrix whose entries are func applied to each entry.

        Raises:
            ArgumentNullError: If func is None.
        """
        check_not_none(func, 'func')
        return self._derive(self._store.apply(func))

    def clone(self):
        """Independent deep copy with the same scheme, names and name."""
        return self._derive(
            self._store.copy(),
            row_names=dict(self._row_name_map),
            column_names=dict(self._column_name_map),
            name=self.name,
        )

    def copy(self):
        """Alias of clone()."""
        return self.clone()

    def _with_scheme(self, scheme: StorageScheme):
        if self.storage_scheme is scheme:
            return self.clone()
        logger.debug(
            "Converting %dx%d matrix from %s to %s storage",
            self.number_of_rows, self.number_of_columns,
            self.storage_scheme.value, scheme.value,
        )
        return self._derive(
            storage_from_array(self._store.to_array(), scheme, self.dtype),
            row_names=dict(self._row_name_map),
            column_names=dict(self._column_name_map),
            name=self.name,
        )

    def to_dense(self):
        """Copy of this matrix in dense storage."""
        return self._with_scheme(StorageScheme.DENSE)

    def to_sparse(self):
        """Copy of this matrix in sparse storage."""
        return self._with_scheme(StorageScheme.SPARSE)

    def to_array(self) -> np.ndarray:
        """Entries as a new 2-D ndarray."""
        return self._store.to_array()

    def to_scipy(self) -> sp.csr_matrix:
        """Entries as a new scipy CSR matrix."""
        store = self._store
        if isinstance(store, DenseStorage):
            return sp.csr_matrix(store.to_array())
        return sp.csr_matrix(
            (store.values.copy(), store.col_idx.copy(), store.row_ptr.copy()),
            shape=store.shape,
        )

    def __array__(self, dtype=None, copy=None):
        array = self.to_array()
        return array if dtype is None else array.astype(dtype)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other):
        return _ops.add(self, other)

    def __radd__(self, other):
        return _ops.add(other, self)

    def __sub__(self, other):
        return _ops.subtract(self, other)

    def __rsub__(self, other):
        return _ops.subtract(other, self)

    def __mul__(self, other):
        if isinstance(other, MatrixBase):
            return NotImplemented
        return _ops.scale(self, other)

    def __rmul__(self, other):
        return _ops.scale(self, other)

    def __truediv__(self, other):
        if isinstance(other, MatrixBase):
            return NotImplemented
        return _ops.divide(self, other)

    def __matmul__(self, other):
        return _ops.matmul(self, other)

    def __neg__(self):
        return _ops.negate(self)

    def multiply(self, other):
        """Element-wise product with another matrix of the same shape."""
        return _ops.multiply(self, other)

    # =========================================================================
    # Comparison and Display
    # =========================================================================

    def __eq__(self, other) -> bool:
        if not isinstance(other, MatrixBase):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(np.array_equal(self.to_array(), other.to_array()))

    __hash__ = None

    def __repr__(self) -> str:
        label = f", name={self.name!r}" if self.name else ""
        return (
            f"{type(self).__name__}(shape={self.shape}, "
            f"scheme={self.storage_scheme.value}{label})"
        )

    def __str__(self) -> str:
        fmt = config.format
        rows, cols = self.shape
        shown_rows = list(range(min(rows, fmt.max_rows)))
        shown_cols = list(range(min(cols, fmt.max_cols)))
        array = self._store.take(
            np.asarray(shown_rows, dtype=np.int64), np.asarray(shown_cols, dtype=np.int64)
        ).to_array()

        def cell(value) -> str:
            return format(value, f".{fmt.precision}g")

        table = [[cell(v) for v in row] for row in array.tolist()]
        if cols > len(shown_cols):
            for line in table:
                line.append("...")
        if self.has_column_names:
            header = [self._column_name_map.get(j, "") for j in shown_cols]
            if cols > len(shown_cols):
                header.append("")
            table.insert(0, header)
        if self.has_row_names:
            offset = 1 if self.has_column_names else 0
            for position, line in enumerate(table):
                i = position - offset
                line.insert(0, self._row_name_map.get(i, "") if i >= 0 else "")

        widths = [max(len(line[k]) for line in table) for k in range(len(table[0]))]
        lines = [
            " ".join(text.rjust(width) for text, width in zip(line, widths))
            for line in table
        ]
        if rows > len(shown_rows):
            lines.append("...")
        return "\n".join(lines)
