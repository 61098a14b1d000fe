"""
Pytest configuration and shared fixtures for matrixkit tests.
"""

import io
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import matrixkit
from matrixkit import ComplexMatrix, DoubleMatrix, StorageScheme


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Restore the global configuration after every test."""
    yield
    matrixkit.config.reset()


@pytest.fixture(params=[StorageScheme.DENSE, StorageScheme.SPARSE], ids=["dense", "sparse"])
def scheme(request):
    """Run a test once per storage scheme."""
    return request.param


# =============================================================================
# Matrices
# =============================================================================

@pytest.fixture
def small_array():
    """Reference 3x4 array.

    [[1, 0, 2, 0],
     [0, 3, 0, 4],
     [5, 0, 0, 6]]
    """
    return np.array([
        [1.0, 0.0, 2.0, 0.0],
        [0.0, 3.0, 0.0, 4.0],
        [5.0, 0.0, 0.0, 6.0],
    ])


@pytest.fixture
def small_matrix(small_array, scheme):
    """small_array stored under the current scheme."""
    return DoubleMatrix.from_array(small_array, scheme)


@pytest.fixture
def dense_sparse_pair(small_array):
    """Same content under both schemes."""
    return (
        DoubleMatrix.from_array(small_array, StorageScheme.DENSE),
        DoubleMatrix.from_array(small_array, StorageScheme.SPARSE),
    )


@pytest.fixture
def named_matrix(small_array, scheme):
    """small_array with row names r0..r2 and column names c0..c3."""
    matrix = DoubleMatrix.from_array(small_array, scheme)
    for i in range(3):
        matrix.set_row_name(i, f"r{i}")
    for j in range(4):
        matrix.set_column_name(j, f"c{j}")
    matrix.name = "Sample"
    return matrix


@pytest.fixture
def complex_array():
    """Hermitian 2x2 complex array."""
    return np.array([
        [2.0 + 0.0j, 1.0 - 1.0j],
        [1.0 + 1.0j, 3.0 + 0.0j],
    ])


@pytest.fixture
def pattern_arrays():
    """4x4 arrays with known structure."""
    return {
        "diagonal": np.diag([1.0, 2.0, 3.0, 4.0]),
        "lower_bidiagonal": np.array([
            [1, 0, 0, 0],
            [2, 1, 0, 0],
            [0, 2, 1, 0],
            [0, 0, 2, 1],
        ], dtype=float),
        "upper_bidiagonal": np.array([
            [1, 2, 0, 0],
            [0, 1, 2, 0],
            [0, 0, 1, 2],
            [0, 0, 0, 1],
        ], dtype=float),
        "tridiagonal": np.array([
            [1, 2, 0, 0],
            [3, 1, 2, 0],
            [0, 3, 1, 2],
            [0, 0, 3, 1],
        ], dtype=float),
        "lower_triangular": np.array([
            [1, 0, 0, 0],
            [2, 1, 0, 0],
            [3, 2, 1, 0],
            [4, 3, 2, 1],
        ], dtype=float),
        "upper_hessenberg": np.array([
            [1, 2, 3, 4],
            [5, 1, 2, 3],
            [0, 5, 1, 2],
            [0, 0, 5, 1],
        ], dtype=float),
        "symmetric": np.array([
            [1, 2, 3, 4],
            [2, 1, 5, 6],
            [3, 5, 1, 7],
            [4, 6, 7, 1],
        ], dtype=float),
        "skew_symmetric": np.array([
            [0, 2, -3, 4],
            [-2, 0, 5, -6],
            [3, -5, 0, 7],
            [-4, 6, -7, 0],
        ], dtype=float),
        "full": np.arange(1.0, 17.0).reshape(4, 4),
    }


# =============================================================================
# Text Sources
# =============================================================================

@pytest.fixture
def color_lines():
    """Categorical data with a header; COLOR is column 0."""
    return [
        "COLOR,HAPPINESS,NUMBER",
        "Red,High,1",
        "Green,Low,2",
        "Red,Low,3",
        "Black,High,4",
        "Black,High,5",
    ]


@pytest.fixture
def color_stream(color_lines):
    """color_lines as a text stream."""
    return io.StringIO("\n".join(color_lines) + "\n")


@pytest.fixture
def elomaa_rousu_lines():
    """Numerical attribute with a three-class target.

    Value: class frequencies
        0: A x3    1: B x4    2: B x2    3: C x3    4: B x3, C x1
        5: A x2    6: A x1    7: C x3    8: C x2    9: C x3
    """
    counts = [
        (0, "A", 3), (1, "B", 4), (2, "B", 2), (3, "C", 3), (4, "B", 3),
        (4, "C", 1), (5, "A", 2), (6, "A", 1), (7, "C", 3), (8, "C", 2),
        (9, "C", 3),
    ]
    lines = ["NUMERICAL,TARGET"]
    for value, label, count in counts:
        lines.extend([f"{value},{label}"] * count)
    return lines


@pytest.fixture
def iris_path():
    """UCI iris data without a header; the class is column 4."""
    return Path(__file__).parent / "data" / "iris.csv"


@pytest.fixture
def proximities_array():
    """Symmetric 4x4 proximities."""
    return np.array([
        [0.0, 1.0, 7.0, 20.0],
        [1.0, 0.0, 3.0, 8.0],
        [7.0, 3.0, 0.0, 5.0],
        [20.0, 8.0, 5.0, 0.0],
    ])


# =============================================================================
# Helper Functions
# =============================================================================

def assert_matrix_equal(matrix, expected, rtol=1e-7, atol=1e-10):
    """Assert a matrix holds the values of an array-like."""
    expected = np.asarray(expected)
    assert matrix.shape == expected.shape
    np.testing.assert_allclose(matrix.to_array(), expected, rtol=rtol, atol=atol)


def assert_same_names(left, right):
    """Assert two matrices carry the same row and column names."""
    assert left.row_names == right.row_names
    assert left.column_names == right.column_names


def make_complex(array, scheme=StorageScheme.DENSE):
    """ComplexMatrix from an array-like."""
    return ComplexMatrix.from_array(np.asarray(array, dtype=complex), scheme)
