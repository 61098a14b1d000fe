"""
Index Collections

Ordered, non-empty sequences of non-negative integer positions used to select
rows, columns or linear entries of a matrix. Positions need not be sorted,
contiguous or unique.

Example:
    >>> rows = IndexCollection.range(0, 2)           # 0, 1, 2
    >>> odd = IndexCollection.sequence(1, 2, 9)      # 1, 3, 5, 7, 9
    >>> picked = IndexCollection.from_array([4, 0, 4])
    >>> picked.max
    4
    >>> odd[IndexCollection.from_array([0, 2])]      # 1, 5
"""

from functools import total_ordering
from typing import Iterable, Iterator, List, Optional, Union

import numpy as np

from matrixkit.error import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
)

__all__ = ['IndexCollection']


@total_ordering
class IndexCollection:
    """
    Ordered collection of zero-based indexes.

    The collection is mutable through item assignment and ``sort()``; its
    maximum is kept up to date. Collections compare quasi-lexicographically:
    shorter collections come first, equal lengths compare entry by entry.

    Attributes:
        max (int): Largest index in the collection.
        count (int): Number of indexes.
    """

    __slots__ = ('_indexes', '_max')

    def __init__(self, indexes: np.ndarray, max_index: Optional[int] = None):
        # Internal: callers must pass a validated, non-empty int64 array.
        self._indexes = indexes
        self._max = int(indexes.max()) if max_index is None else max_index

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def from_array(cls, indexes: Iterable[int], copy: bool = True) -> 'IndexCollection':
        """Create a collection from an array of indexes.

        Args:
            indexes: Non-negative integer indexes.
            copy: Copy the indexes if they are already an int64 ndarray.

        Raises:
            ArgumentNullError: If indexes is None.
            ArgumentError: If indexes is empty, contains negative entries
                or non-integer values.
        """
        if indexes is None:
            raise ArgumentNullError(param_name='indexes')

        if isinstance(indexes, IndexCollection):
            return indexes.copy() if copy else indexes

        if isinstance(indexes, np.ndarray) and indexes.dtype == np.int64 and not copy:
            array = indexes.ravel()
        else:
            raw = np.asarray(list(indexes) if not isinstance(indexes, np.ndarray) else indexes)
            if raw.size and not np.issubdtype(raw.dtype, np.integer):
                if not np.all(np.equal(np.mod(raw, 1), 0)):
                    raise ArgumentError("Indexes must be integers.", param_name='indexes')
            array = raw.astype(np.int64).ravel()

        if array.size == 0:
            raise ArgumentError("Parameter must be non empty.", param_name='indexes')
        if (array < 0).any():
            raise ArgumentError(
                "Parameter entries must be non negative.", param_name='indexes'
            )

        return cls(array)

    @classmethod
    def default(cls, last_index: int) -> 'IndexCollection':
        """Create the collection 0, 1, ..., last_index.

        Raises:
            ArgumentOutOfRangeError: If last_index is negative.
        """
        if last_index < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='last_index'
            )
        return cls(np.arange(0, last_index + 1, dtype=np.int64), last_index)

    @classmethod
    def range(cls, first_index: int, last_index: int) -> 'IndexCollection':
        """Create the collection first_index, ..., last_index (inclusive).

        Raises:
            ArgumentOutOfRangeError: If first_index is negative or greater
                than last_index.
        """
        if first_index < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='first_index'
            )
        if first_index > last_index:
            raise ArgumentOutOfRangeError(
                "Last index cannot be less than first index.", param_name='last_index'
            )
        return cls(np.arange(first_index, last_index + 1, dtype=np.int64), last_index)

    @classmethod
    def sequence(cls, first_index: int, increment: int, index_bound: int) -> 'IndexCollection':
        """Create an arithmetic sequence starting at first_index.

        The sequence holds ``first_index + k * increment`` for every k such
        that the value does not pass ``index_bound``.

        Example:
            >>> list(IndexCollection.sequence(5, -2, 0))
            [5, 3, 1]

        Raises:
            ArgumentOutOfRangeError: If first_index or index_bound is negative,
                increment is zero, or the increment points away from
                index_bound.
        """
        if first_index < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='first_index'
            )
        if increment == 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be nonzero.", param_name='increment'
            )
        if index_bound < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='index_bound'
            )

        if increment < 0:
            if first_index < index_bound:
                raise ArgumentOutOfRangeError(
                    "With a negative increment, first index cannot be less than index bound.",
                    param_name='index_bound',
                )
            count = (first_index - index_bound) // (-increment) + 1
            max_index = first_index
        else:
            if first_index > index_bound:
                raise ArgumentOutOfRangeError(
                    "With a positive increment, index bound cannot be less than first index.",
                    param_name='index_bound',
                )
            count = (index_bound - first_index) // increment + 1
            max_index = first_index + (count - 1) * increment

        indexes = first_index + increment * np.arange(count, dtype=np.int64)
        return cls(indexes, max_index)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def max(self) -> int:
        """Largest index in the collection."""
        return self._max

    @property
    def count(self) -> int:
        """Number of indexes."""
        return int(self._indexes.size)

    def __len__(self) -> int:
        return int(self._indexes.size)

    # =========================================================================
    # Element Access
    # =========================================================================

    def __getitem__(self, position: Union[int, 'IndexCollection']):
        if isinstance(position, IndexCollection):
            if position.max >= self.count:
                raise ArgumentOutOfRangeError(
                    "Position exceeds the collection dimensions.", param_name='positions'
                )
            return IndexCollection(self._indexes[position._indexes])

        position = int(position)
        if position < 0 or position >= self.count:
            raise ArgumentOutOfRangeError(
                "Position exceeds the collection dimensions.", param_name='position'
            )
        return int(self._indexes[position])

    def __setitem__(self, position: int, value: int):
        if value < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='value'
            )
        if position < 0 or position >= self.count:
            raise ArgumentOutOfRangeError(
                "Position exceeds the collection dimensions.", param_name='position'
            )

        previous = int(self._indexes[position])
        if previous == value:
            return
        self._indexes[position] = value
        if value > self._max:
            self._max = int(value)
        elif previous == self._max:
            self._max = int(self._indexes.max())

    def __iter__(self) -> Iterator[int]:
        return (int(i) for i in self._indexes)

    def index_of(self, item: int) -> int:
        """Position of the first occurrence of item, or -1."""
        hits = np.flatnonzero(self._indexes == item)
        return int(hits[0]) if hits.size else -1

    def contains(self, item: int) -> bool:
        """Whether item is in the collection."""
        return self.index_of(item) != -1

    def __contains__(self, item) -> bool:
        return self.contains(item)

    def copy_to(self, array: List[int], offset: int) -> None:
        """Copy the indexes into array starting at offset.

        Raises:
            ArgumentNullError: If array is None.
            ArgumentOutOfRangeError: If offset is negative.
            ArgumentError: If array has not enough space after offset.
        """
        if array is None:
            raise ArgumentNullError(param_name='array')
        if offset < 0:
            raise ArgumentOutOfRangeError(
                "Parameter must be non negative.", param_name='offset'
            )
        if len(array) - offset < self.count:
            raise ArgumentError("Not enough space in array.", param_name='array')
        array[offset:offset + self.count] = self.tolist()

    def sort(self) -> None:
        """Sort the indexes in ascending order, in place."""
        self._indexes.sort(kind='stable')

    def copy(self) -> 'IndexCollection':
        """Return an independent copy."""
        return IndexCollection(self._indexes.copy(), self._max)

    def to_array(self) -> np.ndarray:
        """Return the indexes as an int64 ndarray copy."""
        return self._indexes.copy()

    def tolist(self) -> List[int]:
        return self._indexes.tolist()

    # =========================================================================
    # Comparison
    # =========================================================================

    def _compare(self, other: 'IndexCollection') -> int:
        if self.count != other.count:
            return -1 if self.count < other.count else 1
        diff = np.flatnonzero(self._indexes != other._indexes)
        if diff.size == 0:
            return 0
        k = diff[0]
        return -1 if self._indexes[k] < other._indexes[k] else 1

    def __eq__(self, other) -> bool:
        if not isinstance(other, IndexCollection):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, IndexCollection):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        return hash(self._indexes.tobytes())

    def __repr__(self) -> str:
        return f"IndexCollection([{self}])"

    def __str__(self) -> str:
        return ", ".join(str(i) for i in self._indexes.tolist())
