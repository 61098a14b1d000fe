"""
Matrix I/O

CSV serialization of dense and sparse, real and complex matrices.

Example:
    >>> import io
    >>> from matrixkit.io import serialize, deserialize
    >>> buffer = io.StringIO()
    >>> serialize(buffer, m)
    >>> buffer.seek(0)
    >>> deserialize(buffer) == m
    True
"""

from matrixkit.io._csv import DELIMITER, deserialize, deserialize_complex, serialize
from matrixkit.io._text import format_number, iter_lines, open_target

__all__ = [
    'format_number',
    'DELIMITER',
    'serialize',
    'deserialize',
    'deserialize_complex',
    'iter_lines',
    'open_target',
]
