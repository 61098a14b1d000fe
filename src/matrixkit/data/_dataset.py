"""
Categorical Data Sets

A categorical data set pairs an items x variables matrix of category codes
with the categorical variables that give those codes a meaning.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from matrixkit._config import StorageScheme
from matrixkit.data._variable import CategoricalVariable
from matrixkit.error import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
)
from matrixkit.matrix import DoubleMatrix, MatrixBase, ReadOnlyDoubleMatrix

logger = logging.getLogger("matrixkit.data")

__all__ = ['CategoricalDataSet']


class CategoricalDataSet:
    """
    Encoded categorical data.

    The data matrix has one row per item and one column per variable; its
    column names are the variable names. Variables passed in are frozen.

    Example:
        >>> data_set = CategoricalDataSet.encode(
        ...     io.StringIO("COLOR,SIZE\\nRed,S\\nGreen,L\\nRed,L\\n"),
        ...     ",", [0, 1], True)
        >>> data_set.variables[0].labels
        ['Red', 'Green']
        >>> data_set.decode()[2]
        ['Red', 'L']

    Attributes:
        variables: The categorical variables, one per data column.
        data: Read-only view of the encoded data.
        name: Optional data set name, shared with the data matrix.
    """

    def __init__(self, variables: Sequence[CategoricalVariable], data: MatrixBase):
        """
        Args:
            variables: One variable per data column.
            data: Matrix of category codes.

        Raises:
            ArgumentNullError: If variables or data is None.
            ArgumentOutOfRangeError: If the number of data columns differs
                from the number of variables.
            ArgumentError: If an entry of a column is not a code of its
                variable.
        """
        if variables is None:
            raise ArgumentNullError(param_name='variables')
        if data is None:
            raise ArgumentNullError(param_name='data')
        variables = list(variables)
        if data.number_of_columns != len(variables):
            raise ArgumentOutOfRangeError(
                "The number of data columns must equal the number of variables.",
                param_name='data',
            )

        array = data.to_array()
        for j, variable in enumerate(variables):
            self._check_codes(array[:, j], variable, 'data')
        for variable in variables:
            variable.set_as_read_only()

        owned = DoubleMatrix.from_array(array, data.storage_scheme)
        owned.name = data.name
        for j, variable in enumerate(variables):
            owned.set_column_name(j, variable.name)

        self._variables = variables
        self._data = owned
        self._read_only_data = ReadOnlyDoubleMatrix(owned)

    @staticmethod
    def _check_codes(column: np.ndarray, variable: CategoricalVariable, param_name: str):
        unknown = np.setdiff1d(np.unique(column), np.asarray(variable.codes, dtype=np.float64))
        if unknown.size:
            raise ArgumentError(
                f"Entry {unknown[0]} is not a category code of variable '{variable.name}'.",
                param_name=param_name,
            )

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def from_encoded_data(
        cls, variables: Sequence[CategoricalVariable], data: MatrixBase
    ) -> 'CategoricalDataSet':
        """Data set from already encoded data; the data is copied."""
        return cls(variables, data)

    @classmethod
    def encode(
        cls,
        reader,
        delimiter: str,
        extracted_columns,
        first_line_contains_names: bool,
        special_categorizers=None,
        provider=None,
    ) -> 'CategoricalDataSet':
        """
        Encode categorical data from delimited text.

        Each extracted token becomes a category label, either verbatim or
        through the special categorizer of its column. Codes 0, 1, 2, ...
        are assigned per variable in order of first appearance.

        Args:
            reader: Path, text stream or iterable of lines.
            delimiter: Token separator; no quoting is supported.
            extracted_columns: Zero-based columns to encode, in output order.
            first_line_contains_names: Whether the first line holds variable
                names. Without a header variables are named "0", "1", ...
            special_categorizers: Optional map from an extracted column to a
                callable ``(token, provider) -> label``.
            provider: Opaque formatting context passed to the categorizers.

        Raises:
            ArgumentNullError: If reader or extracted_columns is None.
            ArgumentError: If a categorizer is None or targets a column
                that is not extracted.
            InvalidDataError: If a line has too few tokens, a name or label
                is blank, a categorizer fails, or there are no data lines.
        """
        from matrixkit.data._encode import encode_categorical
        return encode_categorical(
            reader,
            delimiter,
            extracted_columns,
            first_line_contains_names,
            special_categorizers,
            provider,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def variables(self) -> Tuple[CategoricalVariable, ...]:
        return tuple(self._variables)

    @property
    def data(self) -> ReadOnlyDoubleMatrix:
        return self._read_only_data

    @property
    def name(self) -> Optional[str]:
        return self._data.name

    @name.setter
    def name(self, value: Optional[str]):
        self._data.name = value

    def __repr__(self) -> str:
        return (
            f"CategoricalDataSet(items={self._data.number_of_rows}, "
            f"variables={[v.name for v in self._variables]})"
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def decode(self) -> List[List[str]]:
        """Category labels of every item, one list per data row."""
        lookups = [
            {category.code: category.label for category in variable.categories}
            for variable in self._variables
        ]
        return [
            [lookups[j][code] for j, code in enumerate(row)]
            for row in self._data.to_array().tolist()
        ]

    def contingency_table(self, row_variable_index: int, column_variable_index: int) -> DoubleMatrix:
        """
        Joint frequencies of two variables.

        Rows follow the categories of the row variable and columns those of
        the column variable; names are the category labels and the table
        is named "<row name>-by-<column name>".

        Raises:
            ArgumentOutOfRangeError: If a variable index is out of range.
        """
        count = len(self._variables)
        if row_variable_index < 0 or row_variable_index >= count:
            raise ArgumentOutOfRangeError(
                "Index exceeds the number of variables.", param_name='row_variable_index'
            )
        if column_variable_index < 0 or column_variable_index >= count:
            raise ArgumentOutOfRangeError(
                "Index exceeds the number of variables.", param_name='column_variable_index'
            )

        row_variable = self._variables[row_variable_index]
        column_variable = self._variables[column_variable_index]
        row_positions = {code: i for i, code in enumerate(row_variable.codes)}
        column_positions = {code: j for j, code in enumerate(column_variable.codes)}

        table = np.zeros((row_variable.number_of_categories, column_variable.number_of_categories))
        array = self._data.to_array()
        for row_code, column_code in zip(
            array[:, row_variable_index].tolist(), array[:, column_variable_index].tolist()
        ):
            table[row_positions[row_code], column_positions[column_code]] += 1.0

        result = DoubleMatrix.from_array(table, StorageScheme.DENSE)
        for i, label in enumerate(row_variable.labels):
            result.set_row_name(i, label)
        for j, label in enumerate(column_variable.labels):
            result.set_column_name(j, label)
        result.name = f"{row_variable.name}-by-{column_variable.name}"
        return result

    def disjoin(self, supplementary_data: Optional[MatrixBase] = None) -> DoubleMatrix:
        """
        Disjunctive (indicator) form of the data.

        Every variable contributes one 0/1 column per category, in category
        order; columns are named after the category labels.

        Args:
            supplementary_data: Other items coded with the same variables;
                this data set's own data when omitted.

        Raises:
            ArgumentError: If supplementary_data has the wrong number of
                columns or holds an entry that is not a category code.
        """
        if supplementary_data is None:
            array = self._data.to_array()
        else:
            if supplementary_data.number_of_columns != len(self._variables):
                raise ArgumentError(
                    "The number of data columns must equal the number of variables.",
                    param_name='supplementary_data',
                )
            array = supplementary_data.to_array()
            for j, variable in enumerate(self._variables):
                self._check_codes(array[:, j], variable, 'supplementary_data')

        widths = [variable.number_of_categories for variable in self._variables]
        indicators = np.zeros((array.shape[0], sum(widths)))
        labels = []
        leading = 0
        for j, variable in enumerate(self._variables):
            for c, category in enumerate(variable.categories):
                indicators[array[:, j] == category.code, leading + c] = 1.0
                labels.append(category.label)
            leading += widths[j]

        result = DoubleMatrix.from_array(indicators, StorageScheme.SPARSE)
        for k, label in enumerate(labels):
            result.set_column_name(k, label)
        return result
