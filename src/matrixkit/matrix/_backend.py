"""Storage Backends.

This module defines the two interchangeable storage representations behind
every matrix:

- DenseStorage: contiguous column-major buffer of R*C entries
- SparseStorage: compressed-row (CSR) listing of nonzero entries only

Design Philosophy:
    A matrix holds exactly one storage and dispatches every element
    operation to it. Both storages expose the same capability set
    (get/set/take/put/transpose/apply/...), so matrix code never needs to
    know which one it is talking to. Storages never validate indexes:
    bounds are checked by the matrix before a storage is reached.

Canonical Form:
    SparseStorage never stores an explicit zero. Writing zero into a
    stored position removes the entry; apply() prunes zeros it produces.

Example:
    >>> dense = DenseStorage.from_array(np.eye(3), np.float64)
    >>> sparse = SparseStorage.from_array(np.eye(3), np.float64)
    >>> dense.get(1, 1) == sparse.get(1, 1)
    True
    >>> sparse.nnz
    3
"""

import logging
from dataclasses import dataclass
from typing import Callable, Tuple, Union

import numpy as np

from matrixkit._config import StorageScheme

logger = logging.getLogger("matrixkit.storage")

__all__ = [
    'StorageScheme',
    'DenseStorage',
    'SparseStorage',
    'Storage',
    'storage_from_array',
]


# =============================================================================
# Dense Storage
# =============================================================================

@dataclass
class DenseStorage:
    """Column-major dense storage.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        values: 1-D buffer of length rows * cols; entry (i, j) lives at
            offset i + j * rows.
    """
    rows: int
    cols: int
    values: np.ndarray

    scheme = StorageScheme.DENSE

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype) -> 'DenseStorage':
        return cls(rows, cols, np.zeros(rows * cols, dtype=dtype))

    @classmethod
    def from_array(cls, array: np.ndarray, dtype) -> 'DenseStorage':
        """Create from a 2-D array (copied)."""
        array = np.asarray(array, dtype=dtype)
        rows, cols = array.shape
        return cls(rows, cols, array.ravel(order='F').copy())

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def dtype(self) -> np.dtype:
        return self.values.dtype

    @property
    def nnz(self) -> int:
        return int(np.count_nonzero(self.values))

    def _grid(self) -> np.ndarray:
        # Fortran-ordered view sharing the buffer
        return self.values.reshape((self.rows, self.cols), order='F')

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    def get(self, i: int, j: int):
        return self.values[i + j * self.rows].item()

    def set(self, i: int, j: int, value) -> None:
        self.values[i + j * self.rows] = value

    def take(self, rows: np.ndarray, cols: np.ndarray) -> 'DenseStorage':
        return DenseStorage.from_array(self._grid()[np.ix_(rows, cols)], self.dtype)

    def put(self, rows: np.ndarray, cols: np.ndarray, block: np.ndarray) -> None:
        grid = self._grid()
        for a, i in enumerate(rows):
            for b, j in enumerate(cols):
                grid[i, j] = block[a, b]

    def take_linear(self, positions: np.ndarray) -> np.ndarray:
        return self.values[positions]

    def put_linear(self, positions: np.ndarray, data: np.ndarray) -> None:
        for k, value in zip(positions, data):
            self.values[k] = value

    # -------------------------------------------------------------------------
    # Whole-storage operations
    # -------------------------------------------------------------------------

    def copy(self) -> 'DenseStorage':
        return DenseStorage(self.rows, self.cols, self.values.copy())

    def to_array(self) -> np.ndarray:
        return self._grid().copy()

    def column_major(self) -> np.ndarray:
        return self.values.copy()

    def transpose(self) -> 'DenseStorage':
        return DenseStorage.from_array(self._grid().T, self.dtype)

    def apply(self, func: Callable) -> 'DenseStorage':
        mapped = np.array([func(v) for v in self.values.tolist()], dtype=self.dtype)
        return DenseStorage(self.rows, self.cols, mapped)

    def map_values(self, ufunc: Callable, dtype=None) -> 'DenseStorage':
        dtype = self.dtype if dtype is None else dtype
        return DenseStorage(self.rows, self.cols, np.asarray(ufunc(self.values), dtype=dtype))

    def nonzero(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.nonzero(self._grid())

    def astype(self, dtype) -> 'DenseStorage':
        return DenseStorage(self.rows, self.cols, self.values.astype(dtype))


# =============================================================================
# Sparse Storage
# =============================================================================

@dataclass
class SparseStorage:
    """Compressed-row sparse storage.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        row_ptr: Row pointers, length rows + 1.
        col_idx: Column index of each stored entry, sorted within a row.
        values: Stored entries, none of which is zero.
    """
    rows: int
    cols: int
    row_ptr: np.ndarray
    col_idx: np.ndarray
    values: np.ndarray

    scheme = StorageScheme.SPARSE

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype, capacity: int = 0) -> 'SparseStorage':
        # numpy arrays grow on insert; capacity is only a sizing hint
        return cls(
            rows,
            cols,
            np.zeros(rows + 1, dtype=np.int64),
            np.empty(0, dtype=np.int64),
            np.empty(0, dtype=dtype),
        )

    @classmethod
    def from_array(cls, array: np.ndarray, dtype) -> 'SparseStorage':
        """Create from a 2-D array, dropping zero entries."""
        array = np.asarray(array, dtype=dtype)
        rows, cols = array.shape
        r, c = np.nonzero(array)
        counts = np.bincount(r, minlength=rows)
        row_ptr = np.zeros(rows + 1, dtype=np.int64)
        np.cumsum(counts, out=row_ptr[1:])
        return cls(rows, cols, row_ptr, c.astype(np.int64), array[r, c].copy())

    @classmethod
    def from_csr(cls, shape, indptr, indices, data, dtype) -> 'SparseStorage':
        """Create from CSR arrays with sorted indices and no duplicates."""
        storage = cls(
            int(shape[0]),
            int(shape[1]),
            np.asarray(indptr, dtype=np.int64).copy(),
            np.asarray(indices, dtype=np.int64).copy(),
            np.asarray(data, dtype=dtype).copy(),
        )
        return storage._pruned()

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def dtype(self) -> np.dtype:
        return self.values.dtype

    @property
    def nnz(self) -> int:
        return int(self.values.size)

    def _row_of_entries(self) -> np.ndarray:
        return np.repeat(np.arange(self.rows, dtype=np.int64), np.diff(self.row_ptr))

    def _find(self, i: int, j: int) -> Tuple[int, bool]:
        start, end = int(self.row_ptr[i]), int(self.row_ptr[i + 1])
        pos = start + int(np.searchsorted(self.col_idx[start:end], j))
        return pos, (pos < end and self.col_idx[pos] == j)

    def _pruned(self) -> 'SparseStorage':
        keep = self.values != 0
        if keep.all():
            return self
        rows_of = self._row_of_entries()[keep]
        counts = np.bincount(rows_of, minlength=self.rows)
        row_ptr = np.zeros(self.rows + 1, dtype=np.int64)
        np.cumsum(counts, out=row_ptr[1:])
        return SparseStorage(
            self.rows, self.cols, row_ptr, self.col_idx[keep], self.values[keep]
        )

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    def get(self, i: int, j: int):
        pos, found = self._find(i, j)
        if found:
            return self.values[pos].item()
        return self.values.dtype.type(0).item()

    def set(self, i: int, j: int, value) -> None:
        pos, found = self._find(i, j)
        if value == 0:
            if found:
                self.col_idx = np.delete(self.col_idx, pos)
                self.values = np.delete(self.values, pos)
                self.row_ptr[i + 1:] -= 1
            return
        if found:
            self.values[pos] = value
        else:
            self.col_idx = np.insert(self.col_idx, pos, j)
            self.values = np.insert(self.values, pos, value)
            self.row_ptr[i + 1:] += 1

    def take(self, rows: np.ndarray, cols: np.ndarray) -> 'SparseStorage':
        cols = np.asarray(cols, dtype=np.int64)
        new_ptr = np.zeros(len(rows) + 1, dtype=np.int64)
        new_cols = []
        new_vals = []
        for a, i in enumerate(rows):
            start, end = int(self.row_ptr[i]), int(self.row_ptr[i + 1])
            if end > start:
                row_cols = self.col_idx[start:end]
                pos = np.searchsorted(row_cols, cols)
                clipped = np.minimum(pos, end - start - 1)
                hit = (pos < end - start) & (row_cols[clipped] == cols)
                new_cols.append(np.flatnonzero(hit))
                new_vals.append(self.values[start:end][pos[hit]])
                new_ptr[a + 1] = new_ptr[a] + int(hit.sum())
            else:
                new_ptr[a + 1] = new_ptr[a]
        col_idx = np.concatenate(new_cols).astype(np.int64) if new_cols else np.empty(0, np.int64)
        values = np.concatenate(new_vals) if new_vals else np.empty(0, self.dtype)
        return SparseStorage(len(rows), len(cols), new_ptr, col_idx, values.astype(self.dtype))

    def put(self, rows: np.ndarray, cols: np.ndarray, block: np.ndarray) -> None:
        for a, i in enumerate(rows):
            for b, j in enumerate(cols):
                self.set(int(i), int(j), block[a, b])

    def take_linear(self, positions: np.ndarray) -> np.ndarray:
        return np.array(
            [self.get(int(k % self.rows), int(k // self.rows)) for k in positions],
            dtype=self.dtype,
        )

    def put_linear(self, positions: np.ndarray, data: np.ndarray) -> None:
        for k, value in zip(positions, data):
            self.set(int(k % self.rows), int(k // self.rows), value)

    # -------------------------------------------------------------------------
    # Whole-storage operations
    # -------------------------------------------------------------------------

    def copy(self) -> 'SparseStorage':
        return SparseStorage(
            self.rows, self.cols,
            self.row_ptr.copy(), self.col_idx.copy(), self.values.copy(),
        )

    def to_array(self) -> np.ndarray:
        array = np.zeros((self.rows, self.cols), dtype=self.dtype)
        array[self._row_of_entries(), self.col_idx] = self.values
        return array

    def column_major(self) -> np.ndarray:
        return self.to_array().ravel(order='F')

    def transpose(self) -> 'SparseStorage':
        rows_of = self._row_of_entries()
        order = np.lexsort((rows_of, self.col_idx))
        counts = np.bincount(self.col_idx, minlength=self.cols)
        row_ptr = np.zeros(self.cols + 1, dtype=np.int64)
        np.cumsum(counts, out=row_ptr[1:])
        return SparseStorage(
            self.cols, self.rows, row_ptr, rows_of[order], self.values[order].copy()
        )

    def apply(self, func: Callable) -> 'SparseStorage':
        zero = self.values.dtype.type(0).item()
        has_zeros = self.nnz < self.rows * self.cols
        if has_zeros and func(zero) != 0:
            # Every implicit zero changes: map the full grid
            full = self.to_array()
            mapped = np.array(
                [func(v) for v in full.ravel().tolist()], dtype=self.dtype
            ).reshape(full.shape)
            logger.debug("Sparse apply touched every entry of a %dx%d matrix", *self.shape)
            return SparseStorage.from_array(mapped, self.dtype)
        mapped = np.array([func(v) for v in self.values.tolist()], dtype=self.dtype)
        result = SparseStorage(
            self.rows, self.cols, self.row_ptr.copy(), self.col_idx.copy(), mapped
        )
        return result._pruned()

    def map_values(self, ufunc: Callable, dtype=None) -> 'SparseStorage':
        # ufunc must map zero to zero
        dtype = self.dtype if dtype is None else dtype
        result = SparseStorage(
            self.rows, self.cols, self.row_ptr.copy(), self.col_idx.copy(),
            np.asarray(ufunc(self.values), dtype=dtype),
        )
        return result._pruned()

    def nonzero(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._row_of_entries(), self.col_idx.copy()

    def astype(self, dtype) -> 'SparseStorage':
        return SparseStorage(
            self.rows, self.cols, self.row_ptr.copy(), self.col_idx.copy(),
            self.values.astype(dtype),
        )


Storage = Union[DenseStorage, SparseStorage]


def storage_from_array(array: np.ndarray, scheme: StorageScheme, dtype) -> Storage:
    """Build a storage of the requested scheme from a 2-D array."""
    if StorageScheme(scheme) is StorageScheme.SPARSE:
        return SparseStorage.from_array(array, dtype)
    return DenseStorage.from_array(array, dtype)
