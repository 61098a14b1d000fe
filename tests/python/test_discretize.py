"""
Tests for entropy-minimization discretization.
"""

import math

import pytest

from matrixkit import (
    ArgumentNullError,
    ArgumentOutOfRangeError,
    CategoricalDataSet,
    InvalidDataError,
    categorize_by_entropy_minimization,
)
from matrixkit.data import IntervalCategorizer

from conftest import assert_matrix_equal


class TestIntervalCategorizer:
    """Test IntervalCategorizer."""

    def test_labels(self):
        """Test interval labels and bounds."""
        categorizer = IntervalCategorizer([1.0, 2.5])
        assert categorizer.labels == ["]-Inf, 1]", "]1, 2.5]", "]2.5, Inf["]
        assert categorizer.cut_points == [1.0, 2.5]

    def test_boundaries(self):
        """Test intervals are closed on the right."""
        categorizer = IntervalCategorizer([1.0, 2.5])
        assert categorizer.categorize(1.0) == "]-Inf, 1]"
        assert categorizer.categorize(1.0001) == "]1, 2.5]"
        assert categorizer.categorize(2.5) == "]1, 2.5]"
        assert categorizer.categorize(1e9) == "]2.5, Inf["
        assert categorizer.categorize(-1e9) == "]-Inf, 1]"

    def test_infinite_values(self):
        """Test infinities fall outside every interval."""
        categorizer = IntervalCategorizer([0.0])
        assert categorizer.categorize(math.inf) is None
        assert categorizer.categorize(-math.inf) is None

    def test_no_cut_points(self):
        """Test a single unbounded interval."""
        categorizer = IntervalCategorizer([])
        assert categorizer.labels == ["]-Inf, Inf["]
        assert categorizer.categorize(42.0) == "]-Inf, Inf["

    def test_call_parses_tokens(self):
        """Test calling with a text token and a provider."""
        categorizer = IntervalCategorizer([2.5])
        assert categorizer("2", None) == "]-Inf, 2.5]"
        assert categorizer("3") == "]2.5, Inf["


class TestEntropyMinimization:
    """Test categorize_by_entropy_minimization."""

    def test_single_cut(self, elomaa_rousu_lines):
        """Test the minimum description length criterion keeps one cut."""
        categorizers = categorize_by_entropy_minimization(
            elomaa_rousu_lines, ",", [0], True, 1
        )
        assert list(categorizers) == [0]
        categorizer = categorizers[0]
        assert categorizer.cut_points == [2.5]
        assert categorizer.labels == ["]-Inf, 2.5]", "]2.5, Inf["]

    def test_without_header(self, elomaa_rousu_lines):
        """Test the same cuts are found without a header line."""
        categorizers = categorize_by_entropy_minimization(
            elomaa_rousu_lines[1:], ",", [0], False, 1
        )
        assert categorizers[0].cut_points == [2.5]

    def test_pure_target(self):
        """Test a single class leaves the column uncut."""
        lines = ["X,T", "1,A", "2,A", "3,A", "4,A"]
        categorizers = categorize_by_entropy_minimization(lines, ",", [0], True, 1)
        assert categorizers[0].labels == ["]-Inf, Inf["]

    def test_several_columns(self, elomaa_rousu_lines):
        """Test every numerical column gets a categorizer."""
        lines = [elomaa_rousu_lines[0] + ",CONSTANT"]
        lines += [line + ",7" for line in elomaa_rousu_lines[1:]]
        categorizers = categorize_by_entropy_minimization(lines, ",", [0, 2], True, 1)
        assert sorted(categorizers) == [0, 2]
        assert categorizers[0].cut_points == [2.5]
        assert categorizers[2].cut_points == []

    def test_as_special_categorizers(self, elomaa_rousu_lines):
        """Test the categorizers plug into categorical encoding."""
        categorizers = categorize_by_entropy_minimization(
            elomaa_rousu_lines, ",", [0], True, 1
        )
        data_set = CategoricalDataSet.encode(
            elomaa_rousu_lines, ",", [0, 1], True, special_categorizers=categorizers
        )
        numerical, target = data_set.variables
        assert numerical.name == "NUMERICAL"
        assert numerical.labels == ["]-Inf, 2.5]", "]2.5, Inf["]
        assert target.labels == ["A", "B", "C"]
        column = data_set.data[":", 0]
        assert_matrix_equal(column, [[0.0]] * 9 + [[1.0]] * 18)

    def test_iris_sepal_length(self, iris_path):
        """Test the sepal length of the iris data is cut at 5.55 and 6.15."""
        categorizers = categorize_by_entropy_minimization(
            iris_path, ",", [0, 1, 2, 3], False, 4
        )
        assert sorted(categorizers) == [0, 1, 2, 3]
        sepal_length = categorizers[0]
        assert sepal_length.cut_points == [5.55, 6.15]
        assert sepal_length.labels == ["]-Inf, 5.55]", "]5.55, 6.15]", "]6.15, Inf["]

    @pytest.mark.parametrize("token, label", [
        ("5.54", "]-Inf, 5.55]"),
        ("5.55", "]-Inf, 5.55]"),
        ("5.56", "]5.55, 6.15]"),
        ("6.15", "]5.55, 6.15]"),
        ("6.14999999999995", "]5.55, 6.15]"),
        ("6.15000000000001", "]6.15, Inf["),
        ("7.21", "]6.15, Inf["),
    ])
    def test_iris_sepal_length_boundaries(self, iris_path, token, label):
        """Test tokens on and around the iris cut points."""
        categorizers = categorize_by_entropy_minimization(iris_path, ",", [0], False, 4)
        assert categorizers[0](token, None) == label

    def test_iris_encoding(self, iris_path):
        """Test encoding the iris data with its interval categorizers."""
        categorizers = categorize_by_entropy_minimization(iris_path, ",", [0], False, 4)
        data_set = CategoricalDataSet.encode(
            iris_path, ",", [0, 4], False, special_categorizers=categorizers
        )
        assert data_set.data.shape == (150, 2)
        assert data_set.variables[1].labels == [
            "Iris-setosa", "Iris-versicolor", "Iris-virginica",
        ]
        table = data_set.contingency_table(1, 0)
        assert table.to_array().sum() == 150.0

    def test_invalid_arguments(self, elomaa_rousu_lines):
        """Test argument validation."""
        with pytest.raises(ArgumentNullError):
            categorize_by_entropy_minimization(None, ",", [0], True, 1)
        with pytest.raises(ArgumentNullError):
            categorize_by_entropy_minimization(elomaa_rousu_lines, ",", None, True, 1)
        with pytest.raises(ArgumentOutOfRangeError):
            categorize_by_entropy_minimization(elomaa_rousu_lines, ",", [0], True, -1)

    def test_invalid_data(self):
        """Test malformed lines."""
        with pytest.raises(InvalidDataError) as info:
            categorize_by_entropy_minimization(["X,T", "1,A", "x,B"], ",", [0], True, 1)
        assert info.value.line_number == 2
        assert info.value.column == 0
        with pytest.raises(InvalidDataError):
            categorize_by_entropy_minimization(["X,T", "1,A", "2, "], ",", [0], True, 1)
        with pytest.raises(InvalidDataError):
            categorize_by_entropy_minimization(["X,T", "1"], ",", [0], True, 1)
        with pytest.raises(InvalidDataError):
            categorize_by_entropy_minimization(["X,T"], ",", [0], True, 1)
