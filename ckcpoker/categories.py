"""Hand categories, strongest first."""

from enum import IntEnum
from typing import Tuple


class HandCategory(IntEnum):
    """
    The nine hand categories.

    Values follow hand-rank order: a stronger category compares lower,
    the same way a stronger hand has a lower hand rank.
    """
    STRAIGHT_FLUSH = 1
    FOUR_OF_A_KIND = 2
    FULL_HOUSE = 3
    FLUSH = 4
    STRAIGHT = 5
    THREE_OF_A_KIND = 6
    TWO_PAIR = 7
    PAIR = 8
    HIGH_CARD = 9

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def bounds(self) -> Tuple[int, int]:
        """First and last hand rank of the category, inclusive."""
        from .tables.builder import category_bounds
        return category_bounds()[self]

    @property
    def is_flush_category(self) -> bool:
        return self in (HandCategory.STRAIGHT_FLUSH, HandCategory.FLUSH)

    def is_stronger_than(self, other: "HandCategory") -> bool:
        return self < other


_LABELS = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.PAIR: "Pair",
    HandCategory.HIGH_CARD: "High Card",
}
