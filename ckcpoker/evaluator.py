"""
Core poker hand evaluation using Cactus Kev style lookup tables.

Five cards are evaluated with at most two table reads: flushes are looked
up by their rank pattern, every other hand by the product of its rank
primes. Six and seven card hands take the best of their five card subsets.
"""

import itertools
from typing import List, Sequence, Tuple

from .card_ops import and_suit_bits, or_rank_bits, prime_product
from .cards import as_cards, format_card, require_card
from .errors import DuplicateCard, InvalidHandSize
from .hand_rank import HandRank
from .tables.builder import get_tables

MIN_CARDS = 5
MAX_CARDS = 7


def _validate(cards, low: int, high: int) -> List[int]:
    """Check size, encodings and duplicates; return the cards as plain ints."""
    cards = list(cards)
    if not low <= len(cards) <= high:
        expected = str(low) if low == high else f"{low}-{high}"
        raise InvalidHandSize(f"Expected {expected} cards, got {len(cards)}")

    cards = [require_card(card) for card in cards]
    if len(set(cards)) != len(cards):
        seen = set()
        for card in cards:
            if card in seen:
                raise DuplicateCard(f"Duplicate card: {format_card(card)}")
            seen.add(card)
    return cards


def _rank_five(cards: Sequence[int]) -> int:
    tables = get_tables()
    if and_suit_bits(cards):
        return tables.lookup_flush(or_rank_bits(cards))
    return tables.lookup_unique(prime_product(cards))


def evaluate_five(cards: Sequence[int]) -> HandRank:
    """
    Evaluate exactly five encoded cards.

    Args:
        cards: Five distinct encoded cards

    Returns:
        HandRank (lower = stronger)
    """
    cards = _validate(cards, MIN_CARDS, MIN_CARDS)
    return HandRank(_rank_five(cards))


def best_five(cards: Sequence[int]) -> Tuple[HandRank, Tuple[int, ...]]:
    """
    Find the strongest five card subset.

    Args:
        cards: 5 to 7 distinct encoded cards

    Returns:
        Tuple of (hand rank, the five cards making it)
    """
    cards = _validate(cards, MIN_CARDS, MAX_CARDS)

    best_rank = None
    best_hand = None
    for hand in itertools.combinations(cards, MIN_CARDS):
        rank = _rank_five(hand)
        if best_rank is None or rank < best_rank:
            best_rank = rank
            best_hand = hand
    return HandRank(best_rank), best_hand


def evaluate_best(cards: Sequence[int]) -> HandRank:
    """Best hand rank over all five card subsets of 5 to 7 cards."""
    return best_five(cards)[0]


def evaluate_hand(cards) -> HandRank:
    """
    Evaluate a hand given as notation or encoded cards.

    Args:
        cards: "As Kh Qd Jc Ts" style string, or a sequence of 5-7 encoded
            cards and/or notation tokens

    Returns:
        HandRank of the best five cards
    """
    cards = as_cards(cards)
    if len(cards) == MIN_CARDS:
        return evaluate_five(cards)
    return evaluate_best(cards)


def compare_hands(hand_a, hand_b) -> int:
    """
    Compare two hands.

    Returns:
        1 if hand_a wins, -1 if hand_b wins, 0 for a tie
    """
    rank_a = evaluate_hand(hand_a)
    rank_b = evaluate_hand(hand_b)
    if rank_a < rank_b:
        return 1
    if rank_b < rank_a:
        return -1
    return 0
