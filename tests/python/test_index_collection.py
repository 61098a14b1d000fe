"""
Tests for IndexCollection.
"""

import numpy as np
import pytest

from matrixkit import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    IndexCollection,
)


class TestIndexCollectionFactories:
    """Test IndexCollection factories."""

    def test_from_array(self):
        """Test creating from a list keeps order and duplicates."""
        indexes = IndexCollection.from_array([4, 0, 4, 2])
        assert list(indexes) == [4, 0, 4, 2]
        assert indexes.count == 4
        assert len(indexes) == 4
        assert indexes.max == 4

    def test_from_array_copies(self):
        """Test from_array copies its input by default."""
        source = np.array([1, 2, 3], dtype=np.int64)
        indexes = IndexCollection.from_array(source)
        source[0] = 9
        assert indexes[0] == 1

    def test_from_array_none(self):
        """Test None is rejected."""
        with pytest.raises(ArgumentNullError):
            IndexCollection.from_array(None)

    def test_from_array_empty(self):
        """Test an empty input is rejected."""
        with pytest.raises(ArgumentError) as info:
            IndexCollection.from_array([])
        assert info.value.param_name == 'indexes'

    def test_from_array_negative(self):
        """Test negative entries are rejected."""
        with pytest.raises(ArgumentError):
            IndexCollection.from_array([0, -1])

    def test_default(self):
        """Test default(last) holds 0..last."""
        assert list(IndexCollection.default(3)) == [0, 1, 2, 3]
        assert IndexCollection.default(0).max == 0

    def test_default_negative(self):
        """Test default rejects a negative last index."""
        with pytest.raises(ArgumentOutOfRangeError):
            IndexCollection.default(-1)

    def test_range(self):
        """Test range is inclusive on both ends."""
        indexes = IndexCollection.range(2, 5)
        assert list(indexes) == [2, 3, 4, 5]
        assert indexes.max == 5

    def test_range_invalid(self):
        """Test range bounds validation."""
        with pytest.raises(ArgumentOutOfRangeError) as info:
            IndexCollection.range(-1, 3)
        assert info.value.param_name == 'first_index'
        with pytest.raises(ArgumentOutOfRangeError) as info:
            IndexCollection.range(4, 3)
        assert info.value.param_name == 'last_index'

    def test_sequence_positive_increment(self):
        """Test an increasing sequence stops at the bound."""
        indexes = IndexCollection.sequence(1, 2, 9)
        assert list(indexes) == [1, 3, 5, 7, 9]
        assert list(IndexCollection.sequence(1, 3, 9)) == [1, 4, 7]
        assert IndexCollection.sequence(1, 3, 9).max == 7

    def test_sequence_negative_increment(self):
        """Test a decreasing sequence stops at the bound."""
        indexes = IndexCollection.sequence(5, -2, 0)
        assert list(indexes) == [5, 3, 1]
        assert indexes.max == 5

    def test_sequence_single(self):
        """Test a sequence whose first index equals the bound."""
        assert list(IndexCollection.sequence(3, 1, 3)) == [3]
        assert list(IndexCollection.sequence(3, -1, 3)) == [3]

    @pytest.mark.parametrize("first, increment, bound", [
        (-1, 1, 3),
        (0, 0, 3),
        (0, 1, -1),
        (4, 1, 3),
        (2, -1, 3),
    ])
    def test_sequence_invalid(self, first, increment, bound):
        """Test invalid sequence arguments."""
        with pytest.raises(ArgumentOutOfRangeError):
            IndexCollection.sequence(first, increment, bound)


class TestIndexCollectionAccess:
    """Test IndexCollection element access."""

    def test_getitem(self):
        """Test positional access."""
        indexes = IndexCollection.from_array([7, 3, 5])
        assert indexes[0] == 7
        assert indexes[2] == 5

    def test_getitem_out_of_range(self):
        """Test positions outside [0, count) are rejected."""
        indexes = IndexCollection.from_array([7, 3, 5])
        with pytest.raises(ArgumentOutOfRangeError):
            indexes[3]
        with pytest.raises(ArgumentOutOfRangeError):
            indexes[-1]

    def test_getitem_collection(self):
        """Test selecting a sub-collection by positions."""
        odd = IndexCollection.sequence(1, 2, 9)
        picked = odd[IndexCollection.from_array([0, 2, 2])]
        assert list(picked) == [1, 5, 5]
        assert picked.max == 5

    def test_getitem_collection_out_of_range(self):
        """Test sub-collection positions are validated."""
        with pytest.raises(ArgumentOutOfRangeError):
            IndexCollection.range(0, 2)[IndexCollection.from_array([3])]

    def test_setitem_updates_max(self):
        """Test assignment keeps max up to date."""
        indexes = IndexCollection.from_array([1, 8, 3])
        indexes[0] = 10
        assert indexes.max == 10
        indexes[0] = 2
        assert indexes.max == 8
        indexes[1] = 0
        assert indexes.max == 3

    def test_setitem_invalid(self):
        """Test negative values and bad positions are rejected."""
        indexes = IndexCollection.from_array([1, 2])
        with pytest.raises(ArgumentOutOfRangeError):
            indexes[0] = -1
        with pytest.raises(ArgumentOutOfRangeError):
            indexes[2] = 1

    def test_index_of_and_contains(self):
        """Test searching."""
        indexes = IndexCollection.from_array([4, 2, 4])
        assert indexes.index_of(4) == 0
        assert indexes.index_of(2) == 1
        assert indexes.index_of(9) == -1
        assert 2 in indexes
        assert not indexes.contains(3)

    def test_copy_to(self):
        """Test copying into a list at an offset."""
        target = [0] * 5
        IndexCollection.from_array([7, 8]).copy_to(target, 2)
        assert target == [0, 0, 7, 8, 0]

    def test_copy_to_invalid(self):
        """Test copy_to validation."""
        indexes = IndexCollection.from_array([7, 8])
        with pytest.raises(ArgumentNullError):
            indexes.copy_to(None, 0)
        with pytest.raises(ArgumentOutOfRangeError):
            indexes.copy_to([0, 0], -1)
        target = [0, 0]
        with pytest.raises(ArgumentError):
            indexes.copy_to(target, 1)
        assert target == [0, 0]

    def test_sort(self):
        """Test in-place sort."""
        indexes = IndexCollection.from_array([3, 1, 2])
        indexes.sort()
        assert list(indexes) == [1, 2, 3]
        assert indexes.max == 3

    def test_to_array_is_copy(self):
        """Test to_array returns an independent int64 copy."""
        indexes = IndexCollection.from_array([1, 2])
        array = indexes.to_array()
        assert array.dtype == np.int64
        array[0] = 5
        assert indexes[0] == 1


class TestIndexCollectionComparison:
    """Test IndexCollection comparison and text."""

    def test_equality_and_hash(self):
        """Test equal collections compare and hash equally."""
        left = IndexCollection.range(0, 2)
        right = IndexCollection.from_array([0, 1, 2])
        assert left == right
        assert hash(left) == hash(right)
        assert left != IndexCollection.from_array([0, 1, 3])

    def test_shorter_sorts_first(self):
        """Test shorter collections come first regardless of values."""
        assert IndexCollection.from_array([9]) < IndexCollection.from_array([0, 0])

    def test_lexicographic_order(self):
        """Test equal-length collections compare entry by entry."""
        small = IndexCollection.from_array([1, 2, 3])
        large = IndexCollection.from_array([1, 3, 0])
        assert small < large
        assert large > small
        assert sorted([large, small]) == [small, large]

    def test_str(self):
        """Test text representation."""
        assert str(IndexCollection.from_array([1, 2, 3])) == "1, 2, 3"
