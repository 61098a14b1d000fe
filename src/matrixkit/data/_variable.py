"""
Categorical Variables

A categorical variable is a named, ordered list of categories, each pairing
a numeric code with a label. Codes and labels are unique within a variable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from matrixkit.error import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    NameLookupError,
    check_not_none,
    read_only_error,
)
from matrixkit.io._text import format_number

__all__ = ['Category', 'CategoricalVariable']


def _check_label(value, param_name: str) -> str:
    if value is None:
        raise ArgumentNullError(param_name=param_name)
    if not isinstance(value, str) or not value.strip():
        raise ArgumentError(
            "Parameter cannot be empty or consist only of white-space characters.",
            param_name=param_name,
        )
    return value


@dataclass(frozen=True)
class Category:
    """A (code, label) pair.

    Attributes:
        code: Numeric code.
        label: Non-blank label.
    """
    code: float
    label: str

    def __post_init__(self):
        _check_label(self.label, 'label')
        object.__setattr__(self, 'code', float(self.code))

    def __str__(self) -> str:
        return f"{format_number(self.code)} - {self.label}"


class CategoricalVariable:
    """
    Ordered collection of categories.

    Categories are added until ``set_as_read_only()`` is called; afterwards
    the variable cannot change.

    Example:
        >>> color = CategoricalVariable("COLOR")
        >>> color.add(0, "Red")
        >>> color.add(1, "Green")
        >>> str(color)
        'COLOR: [0 - Red, 1 - Green]'
        >>> color.get_code("Green")
        1.0
    """

    def __init__(self, name: str):
        self._name = _check_label(name, 'name')
        self._categories: List[Category] = []
        self._is_read_only = False

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str):
        self._check_writable()
        self._name = _check_label(value, 'value')

    @property
    def is_read_only(self) -> bool:
        return self._is_read_only

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._categories)

    @property
    def number_of_categories(self) -> int:
        return len(self._categories)

    @property
    def codes(self) -> List[float]:
        return [category.code for category in self._categories]

    @property
    def labels(self) -> List[str]:
        return [category.label for category in self._categories]

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(tuple(self._categories))

    def __str__(self) -> str:
        return f"{self._name}: [{', '.join(str(c) for c in self._categories)}]"

    def __repr__(self) -> str:
        return f"CategoricalVariable({self._name!r}, categories={len(self._categories)})"

    # =========================================================================
    # Lookup
    # =========================================================================

    def try_get(self, key: Union[float, str]) -> Optional[Category]:
        """Category with the given label (str) or code (number), or None."""
        if isinstance(key, str):
            for category in self._categories:
                if category.label == key:
                    return category
            return None
        for category in self._categories:
            if category.code == key:
                return category
        return None

    def get_code(self, label: str) -> float:
        """Code of the category with the given label.

        Raises:
            NameLookupError: If no category has that label.
        """
        category = self.try_get(label) if isinstance(label, str) else None
        if category is None:
            raise NameLookupError(f"Category '{label}' is not defined.", param_name='label')
        return category.code

    def get_label(self, code: float) -> str:
        """Label of the category with the given code.

        Raises:
            NameLookupError: If no category has that code.
        """
        category = None if isinstance(code, str) else self.try_get(code)
        if category is None:
            raise NameLookupError(f"Category code {code} is not defined.", param_name='code')
        return category.label

    def __contains__(self, key) -> bool:
        return self.try_get(key) is not None

    # =========================================================================
    # Mutation
    # =========================================================================

    def _check_writable(self) -> None:
        if self._is_read_only:
            raise read_only_error()

    def set_as_read_only(self) -> None:
        """Freeze the variable."""
        self._is_read_only = True

    def add(self, code: float, label: Optional[str] = None) -> None:
        """
        Append a category.

        Args:
            code: Category code.
            label: Category label; defaults to the text of code.

        Raises:
            NotSupportedError: If the variable is read only.
            ArgumentError: If label is blank, or code or label is already
                in the variable.
        """
        if label is None:
            label = format_number(code)
        _check_label(label, 'label')
        self._check_writable()
        for category in self._categories:
            if category.code == code or category.label == label:
                raise ArgumentError(
                    "A category with the same code or label already exists.",
                    param_name='label' if category.label == label else 'code',
                )
        self._categories.append(Category(code, label))

    def remove(self, key: Union[float, str]) -> bool:
        """Remove the category with the given label or code.

        Raises:
            NotSupportedError: If the variable is read only.
            ArgumentNullError: If key is None.
        """
        self._check_writable()
        check_not_none(key, 'key')
        category = self.try_get(key)
        if category is None:
            return False
        self._categories.remove(category)
        return True

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_matrix(self):
        """Column vector of codes whose row names are the labels."""
        from matrixkit.matrix import DoubleMatrix

        matrix = DoubleMatrix.dense(max(len(self._categories), 1), 1)
        for i, category in enumerate(self._categories):
            matrix[i] = category.code
            matrix.set_row_name(i, category.label)
        matrix.name = self._name
        return matrix

    @classmethod
    def from_matrix(cls, matrix) -> 'CategoricalVariable':
        """
        Variable whose codes are the entries of a column vector.

        Row names become labels; unnamed rows are labelled by their code.

        Raises:
            ArgumentNullError: If matrix is None.
            ArgumentOutOfRangeError: If matrix is not a column vector.
        """
        check_not_none(matrix, 'matrix')
        if not matrix.is_column_vector:
            raise ArgumentOutOfRangeError(
                "Parameter must be a column vector.", param_name='matrix'
            )
        variable = cls(matrix.name)
        for i in range(matrix.number_of_rows):
            variable.add(matrix[i], matrix.get_row_name(i))
        return variable
