"""Real (float64) matrices."""

from __future__ import annotations

import numpy as np

from matrixkit.matrix._matrix import Matrix

__all__ = ['DoubleMatrix']


class DoubleMatrix(Matrix):
    """
    Matrix of float64 entries.

    Example:
        >>> m = DoubleMatrix.from_array([[1.0, 2.0], [2.0, 1.0]])
        >>> m.is_symmetric
        True
        >>> (m @ DoubleMatrix.identity(2)) == m
        True
    """

    _dtype = np.float64

    def as_read_only(self):
        """Read-only view of this matrix; reads follow later mutations."""
        from matrixkit.matrix._readonly import ReadOnlyDoubleMatrix
        return ReadOnlyDoubleMatrix(self)

    @classmethod
    def encode(
        cls,
        reader,
        delimiter,
        extracted_columns,
        first_line_contains_names,
        special_codifiers=None,
        provider=None,
    ) -> 'DoubleMatrix':
        """
        Encode numerical data from delimited text.

        Args:
            reader: Path, text stream or iterable of lines.
            delimiter: Token separator; no quoting is supported.
            extracted_columns: Zero-based columns to read, in output order.
            first_line_contains_names: Whether the first line holds column
                names.
            special_codifiers: Optional map from an extracted column to a
                callable ``(token, provider) -> float`` used instead of
                float parsing.
            provider: Opaque formatting context passed to the codifiers.

        Returns:
            Dense items x columns matrix whose column names are the
            extracted column names (or "0", "1", ... without a header).

        Raises:
            ArgumentNullError: If reader or extracted_columns is None.
            ArgumentError: If a codifier is None or targets a column that
                is not extracted.
            InvalidDataError: If a line is short, a token cannot be coded,
                or there are no data lines.
        """
        from matrixkit.data._encode import encode_numerical
        return encode_numerical(
            cls,
            reader,
            delimiter,
            extracted_columns,
            first_line_contains_names,
            special_codifiers,
            provider,
        )
