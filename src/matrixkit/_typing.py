"""
Type System for matrixkit

Selector aliases and the coercion helpers that turn a user-supplied row,
column or linear selector into validated integer positions.

Selector kinds:
    int                 a single position (no negative wrap-around)
    IndexCollection     positions in order, duplicates allowed
    Sequence[int]       list, tuple or integer ndarray of positions
    ":" / slice         all positions, or the positions of a slice
    str                 a row or column name
"""

from __future__ import annotations

import numbers
from typing import TYPE_CHECKING, Dict, Sequence, Tuple, Union

import numpy as np

from matrixkit.error import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    NameLookupError,
)

if TYPE_CHECKING:
    from matrixkit.matrix._index import IndexCollection


# =============================================================================
# Type Aliases
# =============================================================================

IndexLike = Union[int, np.integer]
"""A single zero-based position."""

CollectionLike = Union['IndexCollection', Sequence[int], np.ndarray]
"""Anything coercible to an IndexCollection."""

Selector = Union[IndexLike, CollectionLike, str, slice]
"""Any row, column or linear selector."""

ALL = ":"
"""String selector meaning every position."""


# =============================================================================
# Type Checking Helpers
# =============================================================================

def is_integer(value) -> bool:
    """Check whether value is an integer scalar (bools excluded)."""
    return isinstance(value, (numbers.Integral, np.integer)) and not isinstance(value, bool)


def is_number(value) -> bool:
    """Check whether value is a real or complex scalar."""
    return isinstance(value, (numbers.Number, np.number)) and not isinstance(value, bool)


def is_all_selector(value) -> bool:
    """Check whether value selects every position."""
    if isinstance(value, str):
        return value == ALL
    return isinstance(value, slice) and value == slice(None)


# =============================================================================
# Selector Resolution
# =============================================================================

def check_position(position, bound: int, param_name: str) -> int:
    """Validate a single position against [0, bound).

    Raises:
        ArgumentOutOfRangeError: If position is negative or >= bound.
    """
    position = int(position)
    if position < 0 or position >= bound:
        raise ArgumentOutOfRangeError(
            "Index exceeds the matrix dimensions.", param_name=param_name
        )
    return position


def _resolve_slice(selector: slice, bound: int, param_name: str) -> np.ndarray:
    for part in (selector.start, selector.stop, selector.step):
        if part is not None and part < 0:
            raise ArgumentOutOfRangeError(
                "Slice parts must be non negative.", param_name=param_name
            )
    positions = np.arange(*selector.indices(bound), dtype=np.int64)
    if positions.size == 0:
        raise ArgumentError("Slice selects no positions.", param_name=param_name)
    return positions


def _resolve_name(name: str, names: Dict[int, str], param_name: str) -> int:
    hits = [index for index, value in names.items() if value == name]
    if not hits:
        raise NameLookupError(f"Name '{name}' is not defined.", param_name=param_name)
    return min(hits)


def resolve_selector(
    selector: Selector,
    bound: int,
    param_name: str,
    names: Dict[int, str] = None,
) -> Tuple[np.ndarray, bool]:
    """
    Resolve a selector into validated positions.

    Args:
        selector: Row, column or linear selector.
        bound: Exclusive upper bound of valid positions.
        param_name: Parameter named by range errors.
        names: Index-to-name map used by string selectors.

    Returns:
        (positions, is_scalar): int64 positions and whether the selector
        denoted a single position.

    Raises:
        ArgumentNullError: If selector is None.
        ArgumentOutOfRangeError: If any position lies outside [0, bound).
        NameLookupError: If a name is not defined.
    """
    from matrixkit.matrix._index import IndexCollection

    if selector is None:
        raise ArgumentNullError(param_name=param_name)

    if is_integer(selector):
        return np.array([check_position(selector, bound, param_name)], dtype=np.int64), True

    if is_all_selector(selector):
        return np.arange(bound, dtype=np.int64), False

    if isinstance(selector, slice):
        return _resolve_slice(selector, bound, param_name), False

    if isinstance(selector, str):
        position = _resolve_name(selector, names or {}, param_name)
        return np.array([position], dtype=np.int64), True

    if isinstance(selector, IndexCollection):
        collection = selector
    else:
        if is_number(selector):
            raise ArgumentError(
                "Selector must be an integer, a name or a collection.",
                param_name=param_name,
            )
        items = list(selector)
        if items and all(isinstance(item, str) for item in items):
            items = [_resolve_name(item, names or {}, param_name) for item in items]
        try:
            collection = IndexCollection.from_array(items)
        except ArgumentError as exc:
            raise ArgumentOutOfRangeError(exc.message, param_name=param_name) from exc

    if collection.max >= bound:
        raise ArgumentOutOfRangeError(
            "Index exceeds the matrix dimensions.", param_name=param_name
        )
    return collection.to_array(), False


__all__ = [
    "IndexLike",
    "CollectionLike",
    "Selector",
    "ALL",
    "is_integer",
    "is_number",
    "is_all_selector",
    "check_position",
    "resolve_selector",
]
