"""
Categorical Data

Encoding of delimited text into categorical data sets, and supervised
discretization of numerical columns.

Example:
    >>> from matrixkit.data import CategoricalDataSet, categorize_by_entropy_minimization
    >>> categorizers = categorize_by_entropy_minimization("iris.csv", ",", [0, 1], True, 4)
    >>> data_set = CategoricalDataSet.encode(
    ...     "iris.csv", ",", [0, 1, 4], True, special_categorizers=categorizers)
"""

from matrixkit.data._variable import Category, CategoricalVariable
from matrixkit.data._dataset import CategoricalDataSet
from matrixkit.data._encode import read_columns
from matrixkit.data._discretize import IntervalCategorizer, categorize_by_entropy_minimization

__all__ = [
    'Category',
    'CategoricalVariable',
    'CategoricalDataSet',
    'IntervalCategorizer',
    'categorize_by_entropy_minimization',
    'read_columns',
]
