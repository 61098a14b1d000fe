"""
CSV Matrix Serialization

Dense layout::

    Dense|Double,R,C,name,
    ,colname_0,...,colname_{C-1}
    rowname_0,v_00,...,v_0{C-1},
    ...

Sparse layout::

    Sparse|Double,R,C,name,nnz
    i,j,v                          (nnz lines, row by row)
    index,colname,index,colname    (empty line when there are no names)
    index,rowname,...              (empty line when there are no names)

Complex matrices use ``|Complex`` and write each entry as ``(real imag)``.
Unset names are written as empty cells; an absent matrix name leaves the
fourth header cell empty.
"""

import logging
from typing import Callable, Dict, List, Tuple

import numpy as np

from matrixkit._config import StorageScheme
from matrixkit.error import ArgumentError, InvalidDataError, check_not_none
from matrixkit.io._text import format_number, iter_lines, open_target
from matrixkit.matrix import ComplexMatrix, DoubleMatrix, MatrixBase

logger = logging.getLogger("matrixkit.io")

__all__ = ['DELIMITER', 'serialize', 'deserialize', 'deserialize_complex']

DELIMITER = ','

_SCHEME_TOKENS = {
    StorageScheme.DENSE: 'Dense',
    StorageScheme.SPARSE: 'Sparse',
}


# =============================================================================
# Entry Formatting
# =============================================================================

_format_real = format_number


def _format_complex(value: complex) -> str:
    return f"({_format_real(value.real)} {_format_real(value.imag)})"


def _parse_complex(token: str) -> complex:
    token = token.strip()
    if not (token.startswith('(') and token.endswith(')')):
        raise ValueError(f"Malformed complex entry '{token}'")
    real, imaginary = token[1:-1].split(' ')
    return complex(float(real), float(imaginary))


def _is_complex(matrix: MatrixBase) -> bool:
    return np.issubdtype(matrix.dtype, np.complexfloating)


# =============================================================================
# Serialize
# =============================================================================

def _names_line(names: Dict[int, str]) -> str:
    return DELIMITER.join(f"{index}{DELIMITER}{names[index]}" for index in sorted(names))


def _dense_lines(matrix: MatrixBase, entry_type: str, fmt: Callable) -> List[str]:
    rows, cols = matrix.shape
    lines = [
        DELIMITER.join(
            [f"Dense|{entry_type}", str(rows), str(cols), matrix.name or ""]
        ) + DELIMITER
    ]

    column_names = matrix._column_name_map
    lines.append(
        DELIMITER + DELIMITER.join(column_names.get(j, "") for j in range(cols))
    )

    row_names = matrix._row_name_map
    for i, row in enumerate(matrix.to_array().tolist()):
        cells = [row_names.get(i, "")] + [fmt(value) for value in row]
        lines.append(DELIMITER.join(cells) + DELIMITER)
    return lines


def _sparse_lines(matrix: MatrixBase, entry_type: str, fmt: Callable) -> List[str]:
    rows, cols = matrix.shape
    store = matrix._store
    lines = [
        DELIMITER.join(
            [f"Sparse|{entry_type}", str(rows), str(cols), matrix.name or "", str(store.nnz)]
        )
    ]
    entry_rows, entry_cols = store.nonzero()
    for i, j, value in zip(entry_rows.tolist(), entry_cols.tolist(), store.values.tolist()):
        lines.append(DELIMITER.join([str(i), str(j), fmt(value)]))
    lines.append(_names_line(matrix._column_name_map))
    lines.append(_names_line(matrix._row_name_map))
    return lines


def serialize(target, matrix: MatrixBase) -> None:
    """
    Write a matrix in CSV format.

    Args:
        target: File path or writable text stream.
        matrix: Matrix or read-only view to write.

    Raises:
        ArgumentNullError: If target or matrix is None.
        ArgumentError: If matrix is not a matrix.
    """
    check_not_none(target, 'writer')
    check_not_none(matrix, 'matrix')
    if not isinstance(matrix, MatrixBase):
        raise ArgumentError("Parameter must be a matrix.", param_name='matrix')

    if _is_complex(matrix):
        entry_type, fmt = "Complex", _format_complex
    else:
        entry_type, fmt = "Double", _format_real

    if matrix.storage_scheme is StorageScheme.SPARSE:
        lines = _sparse_lines(matrix, entry_type, fmt)
    else:
        lines = _dense_lines(matrix, entry_type, fmt)

    with open_target(target) as stream:
        for line in lines:
            stream.write(line)
            stream.write("\n")

    logger.debug(
        "Serialized %s %dx%d matrix (%d lines)",
        matrix.storage_scheme.value, matrix.number_of_rows, matrix.number_of_columns,
        len(lines),
    )


# =============================================================================
# Deserialize
# =============================================================================

class _LineReader:
    """Numbered line cursor over a text source."""

    def __init__(self, source):
        self._lines = iter_lines(source)
        self.line_number = -1

    def next(self, required: bool = True):
        try:
            line = next(self._lines)
        except StopIteration:
            if required:
                raise InvalidDataError(
                    "Unexpected end of data.", line_number=self.line_number + 1, column=0
                ) from None
            return None
        self.line_number += 1
        return line

    def remaining(self):
        while True:
            line = self.next(required=False)
            if line is None:
                return
            yield line


def _convert(convert: Callable, tokens: List[str], column: int, line_number: int):
    try:
        return convert(tokens[column])
    except (IndexError, ValueError) as exc:
        raise InvalidDataError(line_number=line_number, column=column) from exc


def _read_header(reader: _LineReader, expected_type: str) -> Tuple[str, int, int, str, List[str]]:
    tokens = reader.next().split(DELIMITER)
    scheme_token, _, entry_type = tokens[0].partition('|')
    if entry_type and entry_type != expected_type:
        raise InvalidDataError(
            f"Unexpected entry type '{entry_type}', expected '{expected_type}'.",
            line_number=0,
            column=0,
        )
    rows = _convert(int, tokens, 1, 0)
    cols = _convert(int, tokens, 2, 0)
    if rows < 1 or cols < 1:
        raise InvalidDataError("Matrix dimensions must be positive.", line_number=0, column=1)
    name = tokens[3] if len(tokens) > 3 and tokens[3] else None
    return scheme_token, rows, cols, name, tokens


def _read_dense(reader: _LineReader, owner, rows: int, cols: int, parse: Callable):
    names_tokens = reader.next().split(DELIMITER)
    if len(names_tokens) - 1 > cols:
        raise InvalidDataError(
            "Too many column names.", line_number=reader.line_number, column=cols + 1
        )

    data = np.zeros((rows, cols), dtype=owner._dtype)
    row_names = {}
    i = -1
    for i, line in enumerate(reader.remaining()):
        if i >= rows:
            raise InvalidDataError(
                f"Expected {rows} data lines.", line_number=reader.line_number, column=0
            )
        tokens = line.split(DELIMITER)
        if tokens[0].strip():
            row_names[i] = tokens[0]
        for j in range(cols):
            data[i, j] = _convert(parse, tokens, j + 1, reader.line_number)
    if i + 1 < rows:
        raise InvalidDataError(
            f"Expected {rows} data lines.", line_number=reader.line_number + 1, column=0
        )

    matrix = owner.from_array(data, StorageScheme.DENSE)
    for j, token in enumerate(names_tokens[1:]):
        if token.strip():
            matrix.set_column_name(j, token)
    for i, row_name in row_names.items():
        matrix.set_row_name(i, row_name)
    return matrix


def _read_names(reader: _LineReader, bound: int) -> Dict[int, str]:
    line = reader.next(required=False)
    if not line:
        return {}
    tokens = line.split(DELIMITER)
    names = {}
    for p in range(0, len(tokens) - 1, 2):
        index = _convert(int, tokens, p, reader.line_number)
        if index < 0 or index >= bound:
            raise InvalidDataError(
                "Name index exceeds the matrix dimensions.",
                line_number=reader.line_number,
                column=p,
            )
        names[index] = tokens[p + 1]
    return names


def _read_sparse(reader: _LineReader, owner, rows: int, cols: int, parse: Callable, header):
    nnz = _convert(int, header, 4, 0)
    matrix = owner.sparse(rows, cols, nnz)
    for _ in range(nnz):
        tokens = reader.next().split(DELIMITER)
        i = _convert(int, tokens, 0, reader.line_number)
        j = _convert(int, tokens, 1, reader.line_number)
        if not (0 <= i < rows and 0 <= j < cols):
            raise InvalidDataError(
                "Entry position exceeds the matrix dimensions.",
                line_number=reader.line_number,
                column=0,
            )
        matrix[i, j] = _convert(parse, tokens, 2, reader.line_number)

    for j, name in _read_names(reader, cols).items():
        matrix.set_column_name(j, name)
    for i, name in _read_names(reader, rows).items():
        matrix.set_row_name(i, name)
    return matrix


def _deserialize(source, owner, expected_type: str, parse: Callable):
    check_not_none(source, 'reader')
    reader = _LineReader(source)
    scheme_token, rows, cols, name, header = _read_header(reader, expected_type)
    if scheme_token == 'Sparse':
        matrix = _read_sparse(reader, owner, rows, cols, parse, header)
    else:
        matrix = _read_dense(reader, owner, rows, cols, parse)
    matrix.name = name
    logger.debug(
        "Deserialized %s %dx%d matrix", matrix.storage_scheme.value, rows, cols
    )
    return matrix


def deserialize(source) -> DoubleMatrix:
    """
    Read a real matrix written by serialize().

    Args:
        source: File path, text stream or iterable of lines.

    Raises:
        ArgumentNullError: If source is None.
        InvalidDataError: If the data is malformed or holds complex entries.
    """
    return _deserialize(source, DoubleMatrix, "Double", float)


def deserialize_complex(source) -> ComplexMatrix:
    """Read a complex matrix written by serialize(); see deserialize()."""
    return _deserialize(source, ComplexMatrix, "Complex", _parse_complex)
