"""
Entropy-Minimization Discretization

Supervised discretization of numerical columns: each column is cut into
intervals chosen to minimize the class entropy of a target column, by
recursive binary splitting stopped with the minimum description length
criterion.

References:
    Fayyad, U. M., Irani, K. B. (1993). Multi-interval discretization of
    continuous-valued attributes for classification learning. IJCAI.

    Elomaa, T., Rousu, J. (1999). General and efficient multisplitting of
    numerical attributes. Machine Learning 36(3), 201-244.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from matrixkit.data._encode import read_columns
from matrixkit.data._variable import CategoricalVariable
from matrixkit.error import ArgumentOutOfRangeError, check_not_none
from matrixkit.io._text import format_number
from matrixkit.matrix import IndexCollection

logger = logging.getLogger("matrixkit.data")

__all__ = ['IntervalCategorizer', 'categorize_by_entropy_minimization']


# =============================================================================
# Blocks
# =============================================================================

@dataclass
class _Block:
    """Run of sorted values with its class frequencies (in code order)."""
    first_value: float
    last_value: float
    frequencies: np.ndarray

    @property
    def is_heterogeneous(self) -> bool:
        return int(np.count_nonzero(self.frequencies)) > 1

    @property
    def mode(self) -> int:
        return int(np.argmax(self.frequencies))


def _bins(values: np.ndarray, targets: np.ndarray) -> List[_Block]:
    order = np.argsort(values, kind='stable')
    sorted_values = values[order]
    sorted_targets = targets[order]
    codes = np.unique(sorted_targets)
    positions = np.searchsorted(codes, sorted_targets)

    starts = np.flatnonzero(np.r_[True, sorted_values[1:] != sorted_values[:-1]])
    ends = np.r_[starts[1:], sorted_values.size]
    bins = []
    for start, end in zip(starts, ends):
        frequencies = np.bincount(positions[start:end], minlength=codes.size)
        value = float(sorted_values[start])
        bins.append(_Block(value, value, frequencies))
    return bins


def _blocks(values: np.ndarray, targets: np.ndarray) -> List[_Block]:
    """Bins, with runs of pure bins sharing the same mode merged."""
    bins = _bins(values, targets)
    blocks = []
    i = 0
    while i < len(bins):
        current = bins[i]
        if current.is_heterogeneous:
            blocks.append(current)
            i += 1
            continue
        mode = current.mode
        j = i + 1
        while j < len(bins) and not bins[j].is_heterogeneous and bins[j].mode == mode:
            j += 1
        if j - i > 1:
            frequencies = np.zeros_like(current.frequencies)
            frequencies[mode] = sum(int(b.frequencies[mode]) for b in bins[i:j])
            blocks.append(_Block(current.first_value, bins[j - 1].last_value, frequencies))
        else:
            blocks.append(current)
        i = j
    return blocks


@dataclass
class _BlockRange:
    """Blocks first..last (inclusive) and their class statistics."""
    first: int
    last: int
    entropy: float
    size: int
    observed_classes: int

    @classmethod
    def of(cls, first: int, last: int, blocks: List[_Block]) -> '_BlockRange':
        frequencies = sum(block.frequencies for block in blocks[first:last + 1])
        observed = frequencies[frequencies > 0].astype(np.float64)
        n = int(frequencies.sum())
        entropy = -float(np.sum(observed * np.log2(observed))) / n + math.log2(n)
        return cls(first, last, entropy, n, int(observed.size))


def _accepts(entropy: float, parent: _BlockRange, left: _BlockRange, right: _BlockRange) -> bool:
    k, k1, k2 = parent.observed_classes, left.observed_classes, right.observed_classes
    n = parent.size
    gain = parent.entropy - entropy
    delta = math.log2(3.0 ** k - 2.0) - k * parent.entropy + k1 * left.entropy + k2 * right.entropy
    return gain > (math.log2(n - 1) + delta) / n


def _split(block_range: _BlockRange, blocks: List[_Block]) -> List[_BlockRange]:
    """Terminal ranges of the recursive split, left to right."""
    best = None
    minimal_entropy = math.inf
    for i in range(block_range.first, block_range.last - 1):
        left = _BlockRange.of(block_range.first, i, blocks)
        right = _BlockRange.of(i + 1, block_range.last, blocks)
        entropy = (left.entropy * left.size + right.entropy * right.size) / (left.size + right.size)
        if entropy < minimal_entropy:
            minimal_entropy = entropy
            best = (left, right)

    if best is None or not _accepts(minimal_entropy, block_range, *best):
        return [block_range]
    left, right = best
    logger.debug(
        "Accepted cut between %r and %r",
        blocks[left.last].last_value, blocks[right.first].first_value,
    )
    return _split(left, blocks) + _split(right, blocks)


# =============================================================================
# Categorizer
# =============================================================================

class IntervalCategorizer:
    """
    Maps numerical tokens to interval labels.

    Intervals are open on the left and closed on the right, except the
    last one which is open on both ends: ``]-Inf, c1]``, ``]c1, c2]``, ...,
    ``]ck, Inf[``.

    Attributes:
        cut_points: Interior interval bounds, ascending.
        labels: Interval labels, in ascending order.
    """

    def __init__(self, cut_points: List[float]):
        self._intervals: List[Tuple[str, float, float]] = []
        bounds = [-math.inf]
        texts = []
        for cut in cut_points:
            text = format_number(cut)
            texts.append(text)
            bounds.append(float(text))
        bounds.append(math.inf)
        texts = ["-Inf"] + texts + ["Inf"]

        for k in range(len(bounds) - 1):
            closing = "[" if k == len(bounds) - 2 else "]"
            label = f"]{texts[k]}, {texts[k + 1]}{closing}"
            self._intervals.append((label, bounds[k], bounds[k + 1]))
        self.cut_points = bounds[1:-1]

    @property
    def labels(self) -> List[str]:
        return [label for label, _, _ in self._intervals]

    def categorize(self, value: float) -> Optional[str]:
        """Label of the interval containing value, or None."""
        for label, lower, upper in self._intervals:
            if math.isinf(upper):
                if lower < value < upper:
                    return label
            elif lower < value <= upper:
                return label
        return None

    def __call__(self, token: str, provider=None) -> Optional[str]:
        return self.categorize(float(token))

    def __repr__(self) -> str:
        return f"IntervalCategorizer({self.labels})"


def _discretize(values: np.ndarray, targets: np.ndarray) -> IntervalCategorizer:
    blocks = _blocks(values, targets)
    ranges = _split(_BlockRange.of(0, len(blocks) - 1, blocks), blocks)
    cut_points = [
        (blocks[r.last].last_value + blocks[r.last + 1].first_value) / 2.0
        for r in ranges[:-1]
    ]
    return IntervalCategorizer(cut_points)


def categorize_by_entropy_minimization(
    reader,
    delimiter: str,
    numerical_columns,
    first_line_contains_names: bool,
    target_column: int,
    provider=None,
) -> Dict[int, Callable]:
    """
    Build interval categorizers for numerical columns.

    Each numerical column is discretized against the classes of the target
    column; the returned categorizers can be passed as special categorizers
    to CategoricalDataSet.encode().

    Args:
        reader: Path, text stream or iterable of lines.
        delimiter: Token separator; no quoting is supported.
        numerical_columns: Zero-based columns holding numbers.
        first_line_contains_names: Whether the first line is a header (it
            is skipped).
        target_column: Zero-based column holding the class labels.
        provider: Opaque formatting context, accepted for symmetry with
            the encoders.

    Returns:
        Map from each numerical column to its IntervalCategorizer.

    Raises:
        ArgumentNullError: If reader or numerical_columns is None.
        ArgumentOutOfRangeError: If target_column is negative.
        InvalidDataError: If a line has too few tokens, a number cannot be
            parsed, a target label is blank, or there are no data lines.

    Example:
        >>> categorizers = categorize_by_entropy_minimization(
        ...     "iris.csv", ",", [0], True, target_column=4)
        >>> categorizers[0]("5.8")
        ']5.55, 6.15]'
    """
    check_not_none(reader, 'reader')
    check_not_none(numerical_columns, 'numerical_columns')
    if target_column < 0:
        raise ArgumentOutOfRangeError(
            "Parameter must be non negative.", param_name='target_column'
        )
    check_not_none(delimiter, 'delimiter')

    columns = IndexCollection.from_array(numerical_columns).tolist()
    target = CategoricalVariable("Target")
    target_position = len(columns)

    def convert(position: int, column: int, token: str) -> float:
        if position < target_position:
            return float(token)
        category = target.try_get(token)
        if category is None:
            target.add(float(target.number_of_categories), token)
            category = target.try_get(token)
        return category.code

    _, rows = read_columns(
        reader,
        delimiter,
        columns + [int(target_column)],
        first_line_contains_names,
        convert,
        read_names=False,
    )

    data = np.asarray(rows, dtype=np.float64)
    targets = data[:, target_position]
    categorizers = {}
    for j, column in enumerate(columns):
        categorizer = _discretize(data[:, j], targets)
        logger.debug("Column %d discretized into %s", column, categorizer.labels)
        categorizers[column] = categorizer
    return categorizers
