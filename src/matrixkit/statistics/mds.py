"""
Classical Multidimensional Scaling

Principal coordinates analysis: points in a low-dimensional Euclidean space
whose distances approximate a matrix of proximities.
"""

import logging
from typing import Optional

import numpy as np
import scipy.linalg

from matrixkit._config import StorageScheme, config
from matrixkit.error import (
    ArgumentError,
    ArgumentOutOfRangeError,
    NumericalError,
    check_not_none,
)
from matrixkit.matrix import DoubleMatrix, MatrixBase

logger = logging.getLogger("matrixkit.statistics")

__all__ = ['ClassicalMultidimensionalScaling']


class ClassicalMultidimensionalScaling:
    """
    Result of a classical multidimensional scaling.

    Attributes:
        configuration: n x d DoubleMatrix of point coordinates, one row per
            object; rows carry the proximities' row names.
        goodness_of_fit: Share of the absolute eigenvalue mass captured by
            the d retained dimensions, in (0, 1].
    """

    def __init__(self, configuration: DoubleMatrix, goodness_of_fit: float):
        self.configuration = configuration
        self.goodness_of_fit = goodness_of_fit

    def __repr__(self) -> str:
        return (
            f"ClassicalMultidimensionalScaling(shape={self.configuration.shape}, "
            f"goodness_of_fit={self.goodness_of_fit:.6g})"
        )

    @classmethod
    def analyze(
        cls,
        proximities,
        configuration_dimension: Optional[int] = None,
    ) -> 'ClassicalMultidimensionalScaling':
        """
        Scale a symmetric matrix of proximities.

        Args:
            proximities: Symmetric n x n matrix (or read-only view, or 2-D
                array-like) of distances between n objects.
            configuration_dimension: Number of coordinates per object.
                Defaults to the number of positive eigenvalues.

        Returns:
            The configuration and its goodness of fit.

        Raises:
            ArgumentNullError: If proximities is None.
            ArgumentError: If proximities is not symmetric, or has no
                positive eigenvalue when no dimension is requested.
            ArgumentOutOfRangeError: If configuration_dimension is less
                than 1, exceeds n, or exceeds the number of positive
                eigenvalues.
            NumericalError: If the eigendecomposition fails.

        Example:
            >>> d = DoubleMatrix.from_array([[0, 3, 4], [3, 0, 5], [4, 5, 0]])
            >>> result = ClassicalMultidimensionalScaling.analyze(d)
            >>> result.configuration.shape
            (3, 2)
            >>> result.goodness_of_fit
            1.0

        Notes:
            With D2 the element-wise squared proximities and
            J = I - 11'/n, the doubly centred matrix B = -J D2 J / 2 is
            decomposed as B = V L V'. The configuration is V_d L_d^(1/2)
            for the d largest eigenvalues. An eigenvalue is positive when
            it exceeds ``config.scaling.eigenvalue_tolerance`` times the
            largest absolute eigenvalue.

        References:
            Torgerson, W. S. (1952). Multidimensional scaling: I. Theory
            and method. Psychometrika 17, 401-419.
        """
        check_not_none(proximities, 'proximities')
        if not isinstance(proximities, MatrixBase):
            proximities = DoubleMatrix.from_array(proximities, StorageScheme.DENSE)

        if not proximities.is_symmetric:
            raise ArgumentError("Parameter must be symmetric.", param_name='proximities')

        n = proximities.number_of_rows
        if configuration_dimension is not None:
            if configuration_dimension < 1:
                raise ArgumentOutOfRangeError(
                    "Parameter must be positive.", param_name='configuration_dimension'
                )
            if configuration_dimension > n:
                raise ArgumentOutOfRangeError(
                    "Parameter must not be greater than the number of rows of proximities.",
                    param_name='configuration_dimension',
                )

        d2 = proximities.apply(lambda v: v ** 2)
        centering = DoubleMatrix.identity(n) - DoubleMatrix.dense(n, n, 1.0 / n)
        b = -0.5 * (centering @ d2 @ centering)

        try:
            eigenvalues, eigenvectors = scipy.linalg.eigh(b.to_array())
        except (scipy.linalg.LinAlgError, ValueError) as exc:
            raise NumericalError(f"Eigendecomposition failed: {exc}") from exc

        # eigh sorts ascending: count positive eigenvalues from the top
        threshold = config.scaling.eigenvalue_tolerance * float(np.max(np.abs(eigenvalues)))
        maximal_dimension = 0
        for value in eigenvalues[::-1]:
            if value > threshold:
                maximal_dimension += 1
            else:
                break
        logger.debug("Proximities have %d positive eigenvalues out of %d", maximal_dimension, n)

        if configuration_dimension is None:
            if maximal_dimension == 0:
                raise ArgumentError(
                    "The proximities cannot be scaled: no positive eigenvalue.",
                    param_name='proximities',
                )
            dimension = maximal_dimension
        else:
            if configuration_dimension > maximal_dimension:
                raise ArgumentOutOfRangeError(
                    f"Parameter cannot exceed {maximal_dimension}, "
                    "the number of positive eigenvalues.",
                    param_name='configuration_dimension',
                )
            dimension = int(configuration_dimension)

        top = np.arange(n - 1, n - 1 - dimension, -1)
        coordinates = eigenvectors[:, top] * np.sqrt(eigenvalues[top])
        configuration = DoubleMatrix.from_array(coordinates, StorageScheme.DENSE)
        for i, name in proximities.row_names.items():
            configuration.set_row_name(i, name)

        absolute = np.abs(eigenvalues)
        goodness_of_fit = float(absolute[top].sum() / absolute.sum())
        return cls(configuration, goodness_of_fit)
