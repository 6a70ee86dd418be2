"""
Hand ranks and their classification.

A hand rank is a number in [1, 7462]: 1 is a royal flush, 7462 is
7-5-4-3-2 offsuit. Lower is stronger. Every category covers a contiguous
range of ranks, so classifying a rank is a range check.
"""

from dataclasses import dataclass
from numbers import Integral

from .categories import HandCategory
from .errors import InvalidHandRank
from .tables.constants import MAX_HAND_RANK, RANK_CHARS

RANK_NAMES = (
    "Deuce", "Trey", "Four", "Five", "Six", "Seven", "Eight",
    "Nine", "Ten", "Jack", "Queen", "King", "Ace",
)
RANK_PLURALS = (
    "Deuces", "Treys", "Fours", "Fives", "Sixes", "Sevens", "Eights",
    "Nines", "Tens", "Jacks", "Queens", "Kings", "Aces",
)


def _check_rank(value) -> int:
    if isinstance(value, HandRank):
        return value.value
    if isinstance(value, bool) or not isinstance(value, Integral) or not 1 <= value <= MAX_HAND_RANK:
        raise InvalidHandRank(f"Hand rank must be in [1, {MAX_HAND_RANK}], got {value!r}")
    return int(value)


@dataclass(frozen=True, order=True)
class HandRank:
    """
    Strength of a five-card hand.

    Ordering is numeric, so ``a < b`` means ``a`` is the stronger hand and
    ``min`` picks the best of several hands.
    """
    value: int

    def __post_init__(self):
        object.__setattr__(self, "value", _check_rank(self.value))

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"{self.value} ({self.description})"

    @property
    def category(self) -> HandCategory:
        return classify(self.value)

    @property
    def description(self) -> str:
        return hand_description(self.value)

    @property
    def ranks(self) -> str:
        """Rank characters of the canonical hand, grouped, like "AAAAK"."""
        return "".join(RANK_CHARS[rank] for rank in _signature(self.value))

    def is_stronger_than(self, other: "HandRank") -> bool:
        return self.value < other.value


def classify(rank) -> HandCategory:
    """
    Category of a hand rank.

    Args:
        rank: HandRank or int in [1, 7462]

    Returns:
        HandCategory whose bounds contain ``rank``
    """
    value = _check_rank(rank)
    for category in HandCategory:
        first, last = category.bounds
        if first <= value <= last:
            return category
    raise InvalidHandRank(f"Hand rank {value} is not covered by any category")


def _signature(value: int):
    from .tables.builder import get_tables
    return [int(rank) for rank in get_tables().signatures[value]]


def hand_description(rank) -> str:
    """
    Fine-grained description of a hand rank.

    Returns strings like "Royal Flush", "Four Aces", "Aces Full of Kings",
    "Jacks and Tens", "Pair of Nines" or "Seven-High".
    """
    value = _check_rank(rank)
    category = classify(value)
    ranks = _signature(value)
    high = ranks[0]

    if category == HandCategory.STRAIGHT_FLUSH:
        if value == 1:
            return "Royal Flush"
        return f"{RANK_NAMES[high]}-High Straight Flush"
    if category == HandCategory.FOUR_OF_A_KIND:
        return f"Four {RANK_PLURALS[high]}"
    if category == HandCategory.FULL_HOUSE:
        return f"{RANK_PLURALS[high]} Full of {RANK_PLURALS[ranks[3]]}"
    if category == HandCategory.FLUSH:
        return f"{RANK_NAMES[high]}-High Flush"
    if category == HandCategory.STRAIGHT:
        return f"{RANK_NAMES[high]}-High Straight"
    if category == HandCategory.THREE_OF_A_KIND:
        return f"Three {RANK_PLURALS[high]}"
    if category == HandCategory.TWO_PAIR:
        return f"{RANK_PLURALS[high]} and {RANK_PLURALS[ranks[2]]}"
    if category == HandCategory.PAIR:
        return f"Pair of {RANK_PLURALS[high]}"
    return f"{RANK_NAMES[high]}-High"
