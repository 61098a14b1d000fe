"""
matrixkit - Dense and Sparse Matrices with Categorical Data Tools

Numerical matrix library on top of numpy/scipy with:
- Real and complex matrices under dense or sparse (CSR) storage
- Index collections, named rows/columns and sub-matrix selection
- Read-only views that follow the wrapped matrix
- CSV matrix serialization
- Categorical encoding and entropy-minimization discretization
- Classical multidimensional scaling

Modules:
- matrix: IndexCollection, DoubleMatrix, ComplexMatrix, read-only views
- io: CSV serialization
- data: categorical data sets and discretization
- statistics: classical multidimensional scaling

Architecture:
    ┌──────────────────────────────────────────────┐
    │   DoubleMatrix / ComplexMatrix (owners)      │
    │   ReadOnly*Matrix (views, by reference)      │
    ├──────────────────────────────────────────────┤
    │   MatrixBase: shared read surface            │
    ├──────────────────────────────────────────────┤
    │   Storage: DenseStorage | SparseStorage      │
    └──────────────────────────────────────────────┘

Example:
    >>> import matrixkit
    >>> from matrixkit import DoubleMatrix, IndexCollection
    >>>
    >>> m = DoubleMatrix.dense(3, 3, [1, 0, 0, 2, 3, 0, 0, 4, 5])
    >>> m.is_upper_triangular
    True
    >>> sub = m[IndexCollection.range(0, 1), ":"]
    >>> view = m.as_read_only()
    >>> view[0, 0] = 9.0            # raises NotSupportedError
"""

__version__ = '0.1.0'

# Import main modules
from . import matrix
from . import io
from . import data
from . import statistics

# Configuration
from ._config import (
    StorageScheme,
    FormatConfig,
    StorageConfig,
    ScalingConfig,
    Config,
    config,
    get_config,
    set_default_storage,
    set_precision,
)

# Errors
from .error import (
    MatrixKitError,
    ArgumentNullError,
    ArgumentError,
    DimensionMismatchError,
    ArgumentOutOfRangeError,
    NameLookupError,
    NotSupportedError,
    InvalidDataError,
    NumericalError,
)

# Re-export common types
from .matrix import (
    IndexCollection,
    MatrixBase,
    DoubleMatrix,
    ComplexMatrix,
    ReadOnlyDoubleMatrix,
    ReadOnlyComplexMatrix,
)
from .data import (
    Category,
    CategoricalVariable,
    CategoricalDataSet,
    categorize_by_entropy_minimization,
)
from .statistics import ClassicalMultidimensionalScaling

__all__ = [
    '__version__',
    # Modules
    'matrix',
    'io',
    'data',
    'statistics',
    # Configuration
    'StorageScheme',
    'FormatConfig',
    'StorageConfig',
    'ScalingConfig',
    'Config',
    'config',
    'get_config',
    'set_default_storage',
    'set_precision',
    # Errors
    'MatrixKitError',
    'ArgumentNullError',
    'ArgumentError',
    'DimensionMismatchError',
    'ArgumentOutOfRangeError',
    'NameLookupError',
    'NotSupportedError',
    'InvalidDataError',
    'NumericalError',
    # Matrices
    'IndexCollection',
    'MatrixBase',
    'DoubleMatrix',
    'ComplexMatrix',
    'ReadOnlyDoubleMatrix',
    'ReadOnlyComplexMatrix',
    # Data
    'Category',
    'CategoricalVariable',
    'CategoricalDataSet',
    'categorize_by_entropy_minimization',
    'ClassicalMultidimensionalScaling',
]
