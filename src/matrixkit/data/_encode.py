"""
Delimited Text Encoders

Shared reader for the categorical and numerical encoders. Lines are split
on a single delimiter with no quoting; only the extracted columns are read,
in the order they are given. Line numbers in errors are zero-based and
count the header line, if any.
"""

import logging
from typing import Callable, Dict, List, Optional

import numpy as np

from matrixkit._config import StorageScheme
from matrixkit.error import (
    ArgumentError,
    InvalidDataError,
    check_not_none,
)
from matrixkit.io._text import iter_lines
from matrixkit.matrix import IndexCollection

logger = logging.getLogger("matrixkit.data")

__all__ = ['read_columns', 'encode_categorical', 'encode_numerical']


def _check_columns(extracted_columns, special: Optional[Dict], param_name: str):
    columns = IndexCollection.from_array(extracted_columns)
    special = {} if special is None else dict(special)
    for key, func in special.items():
        if key not in columns:
            raise ArgumentError(
                "A special function refers to a column that is not extracted.",
                param_name=param_name,
            )
        if func is None:
            raise ArgumentError("A special function cannot be None.", param_name=param_name)
    return columns.tolist(), special


def read_columns(
    reader,
    delimiter: str,
    columns: List[int],
    first_line_contains_names: bool,
    convert: Callable[[int, int, str], object],
    read_names: bool = True,
):
    """
    Read the extracted columns of a delimited text source.

    Args:
        reader: Path, text stream or iterable of lines.
        delimiter: Token separator.
        columns: Zero-based columns to extract.
        first_line_contains_names: Whether line 0 holds column names.
        convert: Called as ``convert(position, column, token)`` for every
            extracted token of a data line; its result is stored.
        read_names: Take names from the header line; when False the
            header line is skipped unread.

    Returns:
        (names, rows): extracted column names (or "0", "1", ... without a
        header) and one list of converted values per data line.

    Raises:
        InvalidDataError: If a line has too few tokens, a name is blank,
            convert fails, or there are no data lines.
    """
    names = [str(j) for j in range(len(columns))]
    rows = []
    line_number = -1
    for line_number, line in enumerate(iter_lines(reader)):
        tokens = line.split(delimiter)

        if line_number == 0 and first_line_contains_names:
            if not read_names:
                continue
            for j, column in enumerate(columns):
                if column >= len(tokens) or not tokens[column].strip():
                    raise InvalidDataError(line_number=line_number, column=column)
                names[j] = tokens[column]
            continue

        row = []
        for j, column in enumerate(columns):
            if column >= len(tokens):
                raise InvalidDataError(line_number=line_number, column=column)
            try:
                row.append(convert(j, column, tokens[column]))
            except InvalidDataError:
                raise
            except Exception as exc:
                raise InvalidDataError(line_number=line_number, column=column) from exc
        rows.append(row)

    if not rows:
        raise InvalidDataError(
            "Not enough data: no items found.", line_number=line_number + 1, column=0
        )
    return names, rows


def _rows_to_matrix(owner, names: List[str], rows: List[List[float]]):
    data = owner.from_array(np.asarray(rows, dtype=np.float64), StorageScheme.DENSE)
    for j, name in enumerate(names):
        data.set_column_name(j, name)
    return data


def encode_categorical(
    reader,
    delimiter: str,
    extracted_columns,
    first_line_contains_names: bool,
    special_categorizers=None,
    provider=None,
):
    """Encode categorical data; see CategoricalDataSet.encode()."""
    from matrixkit.data._dataset import CategoricalDataSet
    from matrixkit.data._variable import CategoricalVariable
    from matrixkit.matrix import DoubleMatrix

    check_not_none(reader, 'reader')
    check_not_none(delimiter, 'delimiter')
    check_not_none(extracted_columns, 'extracted_columns')
    columns, special = _check_columns(
        extracted_columns, special_categorizers, 'special_categorizers'
    )

    codes: List[Dict[str, float]] = [{} for _ in columns]

    def categorize(position: int, column: int, token: str) -> float:
        categorizer = special.get(column)
        label = token if categorizer is None else categorizer(token, provider)
        if label is None or not str(label).strip():
            raise ArgumentError("Category labels cannot be blank.", param_name='label')
        mapping = codes[position]
        if label not in mapping:
            mapping[label] = float(len(mapping))
        return mapping[label]

    names, rows = read_columns(reader, delimiter, columns, first_line_contains_names, categorize)

    variables = []
    for name, mapping in zip(names, codes):
        variable = CategoricalVariable(name)
        for label, code in mapping.items():
            variable.add(code, label)
        variable.set_as_read_only()
        variables.append(variable)

    logger.debug("Encoded %d items over %d categorical variables", len(rows), len(variables))
    return CategoricalDataSet(variables, _rows_to_matrix(DoubleMatrix, names, rows))


def encode_numerical(
    owner,
    reader,
    delimiter: str,
    extracted_columns,
    first_line_contains_names: bool,
    special_codifiers=None,
    provider=None,
):
    """Encode numerical data; see DoubleMatrix.encode()."""
    check_not_none(reader, 'reader')
    check_not_none(delimiter, 'delimiter')
    check_not_none(extracted_columns, 'extracted_columns')
    columns, special = _check_columns(extracted_columns, special_codifiers, 'special_codifiers')

    def codify(position: int, column: int, token: str) -> float:
        codifier = special.get(column)
        value = float(token) if codifier is None else codifier(token, provider)
        if value is None:
            raise ArgumentError("Codifiers must return a number.", param_name='value')
        return float(value)

    names, rows = read_columns(reader, delimiter, columns, first_line_contains_names, codify)
    logger.debug("Encoded %d items over %d numerical columns", len(rows), len(columns))
    return _rows_to_matrix(owner, names, rows)
