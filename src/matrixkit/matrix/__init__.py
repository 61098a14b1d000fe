"""
Matrices

Dense and sparse real/complex matrices, index collections and read-only
views.

Example:
    >>> from matrixkit.matrix import DoubleMatrix, IndexCollection
    >>> m = DoubleMatrix.dense(3, 3, range(9))
    >>> m[IndexCollection.range(0, 1), ":"].shape
    (2, 3)
"""

from matrixkit.matrix._backend import DenseStorage, SparseStorage, StorageScheme
from matrixkit.matrix._index import IndexCollection
from matrixkit.matrix._base import MatrixBase
from matrixkit.matrix._matrix import Matrix
from matrixkit.matrix._double import DoubleMatrix
from matrixkit.matrix._complex import ComplexMatrix
from matrixkit.matrix._readonly import (
    ReadOnlyComplexMatrix,
    ReadOnlyDoubleMatrix,
    ReadOnlyMatrix,
)

__all__ = [
    'StorageScheme',
    'DenseStorage',
    'SparseStorage',
    'IndexCollection',
    'MatrixBase',
    'Matrix',
    'DoubleMatrix',
    'ComplexMatrix',
    'ReadOnlyMatrix',
    'ReadOnlyDoubleMatrix',
    'ReadOnlyComplexMatrix',
]
