"""Matrix arithmetic.

Element-wise and algebraic operators shared by every matrix type. The
operands may be owner matrices or read-only views; results are always new
owner matrices with no names.

Result type:
    ComplexMatrix if any operand is complex, DoubleMatrix otherwise.

Result scheme:
    Sparse when every matrix operand is sparse and the operation maps zero
    to zero (scalar addition does not), dense otherwise.
"""

import logging

import numpy as np

from matrixkit._config import StorageScheme
from matrixkit._typing import is_number
from matrixkit.error import ArgumentNullError, DimensionMismatchError
from matrixkit.matrix._backend import SparseStorage, storage_from_array

logger = logging.getLogger("matrixkit.ops")

__all__ = ['add', 'subtract', 'scale', 'divide', 'negate', 'matmul', 'multiply']


# =============================================================================
# Helpers
# =============================================================================

def _is_matrix(value) -> bool:
    from matrixkit.matrix._base import MatrixBase
    return isinstance(value, MatrixBase)


def _owner_for(dtype):
    from matrixkit.matrix._complex import ComplexMatrix
    from matrixkit.matrix._double import DoubleMatrix
    if np.issubdtype(dtype, np.complexfloating):
        return ComplexMatrix
    return DoubleMatrix


def _from_array(array: np.ndarray, scheme: StorageScheme):
    owner = _owner_for(array.dtype)
    return owner._from_storage(storage_from_array(array, scheme, owner._dtype))


def _from_csr(csr):
    csr = csr.tocsr()
    csr.sum_duplicates()
    csr.sort_indices()
    owner = _owner_for(csr.dtype)
    return owner._from_storage(
        SparseStorage.from_csr(csr.shape, csr.indptr, csr.indices, csr.data, owner._dtype)
    )


def _both_sparse(left, right) -> bool:
    return (
        left.storage_scheme is StorageScheme.SPARSE
        and right.storage_scheme is StorageScheme.SPARSE
    )


def _check_same_shape(left, right, operation: str) -> None:
    if left.shape != right.shape:
        raise DimensionMismatchError(
            f"Cannot {operation} a {left.shape} matrix and a {right.shape} matrix.",
            param_name='right',
        )


def _map_scalar(matrix, func, scalar):
    dtype = np.result_type(matrix.dtype, np.asarray(scalar).dtype, np.float64)
    owner = _owner_for(dtype)
    return owner._from_storage(matrix._store.map_values(func, owner._dtype))


# =============================================================================
# Operators
# =============================================================================

def add(left, right):
    """Sum of two matrices, or of a matrix and a scalar."""
    if _is_matrix(left) and _is_matrix(right):
        _check_same_shape(left, right, "add")
        if _both_sparse(left, right):
            return _from_csr(left.to_scipy() + right.to_scipy())
        return _from_array(left.to_array() + right.to_array(), StorageScheme.DENSE)

    matrix, scalar = (left, right) if _is_matrix(left) else (right, left)
    if scalar is None:
        raise ArgumentNullError(param_name='right')
    if not is_number(scalar):
        return NotImplemented
    return _from_array(matrix.to_array() + scalar, StorageScheme.DENSE)


def subtract(left, right):
    """Difference of two operands, at least one of which is a matrix."""
    if _is_matrix(left) and _is_matrix(right):
        _check_same_shape(left, right, "subtract")
        if _both_sparse(left, right):
            return _from_csr(left.to_scipy() - right.to_scipy())
        return _from_array(left.to_array() - right.to_array(), StorageScheme.DENSE)

    if left is None or right is None:
        raise ArgumentNullError(param_name='left' if left is None else 'right')
    scalar = right if _is_matrix(left) else left
    if not is_number(scalar):
        return NotImplemented
    left_value = left.to_array() if _is_matrix(left) else left
    right_value = right.to_array() if _is_matrix(right) else right
    return _from_array(np.asarray(left_value - right_value), StorageScheme.DENSE)


def scale(matrix, scalar):
    """Product of a matrix and a scalar; keeps the matrix scheme."""
    if scalar is None:
        raise ArgumentNullError(param_name='scalar')
    if not is_number(scalar):
        return NotImplemented
    if matrix.storage_scheme is StorageScheme.SPARSE and not np.isfinite(scalar):
        # Implicit zeros become NaN: stored-value mapping would miss them
        with np.errstate(invalid='ignore'):
            return _from_array(matrix.to_array() * scalar, StorageScheme.SPARSE)
    with np.errstate(invalid='ignore'):
        return _map_scalar(matrix, lambda values: values * scalar, scalar)


def divide(matrix, scalar):
    """Quotient of a matrix by a scalar."""
    if scalar is None:
        raise ArgumentNullError(param_name='scalar')
    if not is_number(scalar):
        return NotImplemented
    if matrix.storage_scheme is StorageScheme.SPARSE and (scalar == 0 or np.isnan(scalar)):
        # Implicit zeros become NaN: stored-value mapping would miss them
        with np.errstate(divide='ignore', invalid='ignore'):
            return _from_array(matrix.to_array() / scalar, StorageScheme.SPARSE)
    with np.errstate(divide='ignore', invalid='ignore'):
        return _map_scalar(matrix, lambda values: values / scalar, scalar)


def negate(matrix):
    """Additive inverse of a matrix; keeps the matrix scheme."""
    owner = _owner_for(matrix.dtype)
    return owner._from_storage(matrix._store.map_values(np.negative))


def matmul(left, right):
    """Matrix product.

    Raises:
        DimensionMismatchError: If the inner dimensions differ.
    """
    if not (_is_matrix(left) and _is_matrix(right)):
        return NotImplemented
    if left.number_of_columns != right.number_of_rows:
        raise DimensionMismatchError(
            f"Cannot multiply a {left.shape} matrix by a {right.shape} matrix.",
            param_name='right',
        )
    if _both_sparse(left, right):
        return _from_csr(left.to_scipy() @ right.to_scipy())
    return _from_array(left.to_array() @ right.to_array(), StorageScheme.DENSE)


def multiply(left, right):
    """Element-wise (Hadamard) product of two matrices."""
    if right is None:
        raise ArgumentNullError(param_name='other')
    if not _is_matrix(right):
        if is_number(right):
            return scale(left, right)
        return NotImplemented
    _check_same_shape(left, right, "multiply")
    if _both_sparse(left, right):
        return _from_csr(left.to_scipy().multiply(right.to_scipy()))
    return _from_array(left.to_array() * right.to_array(), StorageScheme.DENSE)
