"""
Tests for hand rank classification and descriptions.
"""

import pytest

from ckcpoker.categories import HandCategory
from ckcpoker.errors import InvalidHandRank
from ckcpoker.hand_rank import HandRank, classify, hand_description


class TestClassify:
    """Test hand rank to category mapping."""

    @pytest.mark.parametrize("value,category", [
        (1, HandCategory.STRAIGHT_FLUSH),
        (10, HandCategory.STRAIGHT_FLUSH),
        (11, HandCategory.FOUR_OF_A_KIND),
        (166, HandCategory.FOUR_OF_A_KIND),
        (167, HandCategory.FULL_HOUSE),
        (322, HandCategory.FULL_HOUSE),
        (323, HandCategory.FLUSH),
        (1599, HandCategory.FLUSH),
        (1600, HandCategory.STRAIGHT),
        (1609, HandCategory.STRAIGHT),
        (1610, HandCategory.THREE_OF_A_KIND),
        (2467, HandCategory.THREE_OF_A_KIND),
        (2468, HandCategory.TWO_PAIR),
        (3325, HandCategory.TWO_PAIR),
        (3326, HandCategory.PAIR),
        (6185, HandCategory.PAIR),
        (6186, HandCategory.HIGH_CARD),
        (7462, HandCategory.HIGH_CARD),
    ])
    def test_boundaries(self, value, category):
        """Test both ends of every category."""
        assert classify(value) == category
        assert HandRank(value).category == category

    def test_monotonic(self):
        """Test categories never get stronger as the rank grows."""
        categories = [classify(value) for value in range(1, 7463)]
        assert categories == sorted(categories)
        assert categories[0] == HandCategory.STRAIGHT_FLUSH
        assert categories[-1] == HandCategory.HIGH_CARD

    @pytest.mark.parametrize("value", [0, -1, 7463, 10000, 1.5, True, "1", None])
    def test_out_of_range(self, value):
        with pytest.raises(InvalidHandRank):
            classify(value)
        with pytest.raises(InvalidHandRank):
            HandRank(value)


class TestHandRank:
    """Test the HandRank value type."""

    def test_ordering(self):
        """Test lower ranks compare as stronger."""
        assert HandRank(1) < HandRank(2)
        assert HandRank(1).is_stronger_than(HandRank(2))
        assert not HandRank(5).is_stronger_than(HandRank(5))
        assert min(HandRank(300), HandRank(20), HandRank(7000)) == HandRank(20)
        assert HandRank(42) == HandRank(42)

    def test_immutable(self):
        rank = HandRank(5)
        with pytest.raises(AttributeError):
            rank.value = 6

    def test_int_conversion(self):
        assert int(HandRank(1609)) == 1609
        assert HandRank(HandRank(3)) == HandRank(3)
        assert str(HandRank(1)) == "1 (Royal Flush)"

    def test_ranks(self):
        """Test canonical rank strings."""
        assert HandRank(1).ranks == "AKQJT"
        assert HandRank(10).ranks == "5432A"
        assert HandRank(11).ranks == "AAAAK"
        assert HandRank(7462).ranks == "75432"


class TestCategory:
    """Test HandCategory."""

    def test_order(self):
        assert HandCategory.STRAIGHT_FLUSH < HandCategory.HIGH_CARD
        assert HandCategory.FLUSH.is_stronger_than(HandCategory.STRAIGHT)
        assert list(HandCategory) == sorted(HandCategory)

    def test_labels(self):
        assert HandCategory.FOUR_OF_A_KIND.label == "Four of a Kind"
        assert HandCategory.HIGH_CARD.label == "High Card"

    def test_flush_categories(self):
        flush = {category for category in HandCategory if category.is_flush_category}
        assert flush == {HandCategory.STRAIGHT_FLUSH, HandCategory.FLUSH}


class TestDescription:
    """Test fine-grained descriptions."""

    @pytest.mark.parametrize("value,description", [
        (1, "Royal Flush"),
        (2, "King-High Straight Flush"),
        (10, "Five-High Straight Flush"),
        (11, "Four Aces"),
        (166, "Four Deuces"),
        (167, "Aces Full of Kings"),
        (322, "Deuces Full of Treys"),
        (323, "Ace-High Flush"),
        (1599, "Seven-High Flush"),
        (1600, "Ace-High Straight"),
        (1609, "Five-High Straight"),
        (1610, "Three Aces"),
        (2468, "Aces and Kings"),
        (3325, "Treys and Deuces"),
        (3326, "Pair of Aces"),
        (6185, "Pair of Deuces"),
        (6186, "Ace-High"),
        (7462, "Seven-High"),
    ])
    def test_descriptions(self, value, description):
        assert hand_description(value) == description
        assert HandRank(value).description == description

    def test_invalid(self):
        with pytest.raises(InvalidHandRank):
            hand_description(0)
