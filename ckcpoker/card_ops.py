"""
Bitwise operations over groups of encoded cards.

These are the two keys the evaluator looks hands up by:

- flush hands: OR of the 13-bit rank flags
- everything else: product of the rank primes

Both are order independent, so a hand never needs sorting.
"""

from functools import reduce
from operator import and_, mul, or_
from typing import Iterable

from .tables.constants import (
    PRIMES, PRIME_MASK, RANK_FLAG_MASK, RANK_FLAG_SHIFT, SUIT_MASK, UINT32_MASK
)


# ============================================================================
# FLUSH DETECTION
# ============================================================================

def and_suit_bits(cards: Iterable[int]) -> int:
    """AND of the suit fields; non-zero only when every card shares a suit."""
    return reduce(and_, cards, SUIT_MASK) & SUIT_MASK


def is_flush(cards: Iterable[int]) -> bool:
    return and_suit_bits(cards) != 0


def or_rank_bits(cards: Iterable[int]) -> int:
    """OR of the rank flags as a 13-bit pattern (the flush table index)."""
    return (reduce(or_, cards, 0) & RANK_FLAG_MASK) >> RANK_FLAG_SHIFT


# ============================================================================
# PRIME PRODUCT
# ============================================================================

def prime_product(cards: Iterable[int]) -> int:
    """
    Multiply the rank primes of the cards.

    Distinct rank multisets give distinct products, so the product
    identifies a non-flush hand regardless of suits. For five cards it is
    at most 41**4 * 37 and fits in an unsigned 32-bit integer.
    """
    return reduce(mul, (card & PRIME_MASK for card in cards), 1) & UINT32_MASK


def prime_product_from_ranks(ranks: Iterable[int]) -> int:
    """Prime product of a rank multiset given as rank indices."""
    return reduce(mul, (PRIMES[rank] for rank in ranks), 1)


def rank_bits_from_ranks(ranks: Iterable[int]) -> int:
    """13-bit rank pattern of a set of rank indices."""
    return reduce(or_, (1 << rank for rank in ranks), 0)
