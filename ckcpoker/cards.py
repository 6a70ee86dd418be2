"""
Card encoding and conversion utilities for poker hand evaluation.

Cards are plain ints carrying four views of the same card: the rank prime,
the rank index, a one-hot suit and a one-hot rank flag (see
``ckcpoker.tables.constants`` for the bit layout). The encoding is stable
and can be stored or sent as an unsigned 32-bit integer.
"""

import operator
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import InvalidCard, InvalidRank, InvalidSuit, ParseError
from .tables.constants import (
    NUM_RANKS, NUM_SUITS, PRIMES, PRIME_MASK, RANK_CHARS, RANK_FLAG_MASK,
    RANK_FLAG_SHIFT, RANK_MASK, RANK_SHIFT, SUIT_BITS, SUIT_CHARS,
    SUIT_MASK, SUIT_SHIFT, SUIT_SYMBOLS
)

_RANK_TOKENS = {char: index for index, char in enumerate(RANK_CHARS)}
_RANK_TOKENS.update({char.lower(): index for index, char in enumerate(RANK_CHARS)})
_RANK_TOKENS["0"] = RANK_CHARS.index("T")

_SUIT_TOKENS = {}
for _index, _char in enumerate(SUIT_CHARS):
    _SUIT_TOKENS[_char] = _index
    _SUIT_TOKENS[_char.upper()] = _index
for _index, _symbols in enumerate(("♣♧", "♦♢", "♥♡", "♠♤")):
    for _symbol in _symbols:
        _SUIT_TOKENS[_symbol] = _index

_SUIT_INDEX_BY_BIT = {bit: index for index, bit in enumerate(SUIT_BITS)}


def _check_index(value, limit: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < limit


def encode_card(rank: int, suit: int) -> int:
    """
    Pack rank and suit into an encoded card.

    Args:
        rank: 0=2, 1=3, ..., 11=K, 12=A
        suit: 0=clubs, 1=diamonds, 2=hearts, 3=spades

    Returns:
        Encoded card int
    """
    if not _check_index(rank, NUM_RANKS):
        raise InvalidRank(f"Invalid rank: {rank!r}")
    if not _check_index(suit, NUM_SUITS):
        raise InvalidSuit(f"Invalid suit: {suit!r}")
    return (
        (1 << (RANK_FLAG_SHIFT + rank))
        | SUIT_BITS[suit]
        | (rank << RANK_SHIFT)
        | PRIMES[rank]
    )


# All 52 cards, ace of spades first, sorted from highest encoding down
ALL_CARDS: Tuple[int, ...] = tuple(
    encode_card(rank, suit)
    for rank in range(NUM_RANKS - 1, -1, -1)
    for suit in range(NUM_SUITS - 1, -1, -1)
)
_VALID_CARDS = frozenset(ALL_CARDS)


def _as_int(card) -> Optional[int]:
    """Plain int of an integer scalar (int, NumPy or JAX), None for anything else."""
    if isinstance(card, (bool, str)):
        return None
    try:
        return operator.index(card)
    except TypeError:
        return None


def is_valid_card(card) -> bool:
    """True if ``card`` is one of the 52 valid encodings."""
    return _as_int(card) in _VALID_CARDS


def require_card(card) -> int:
    """
    Validate an encoded card.

    Returns:
        The card as a plain int

    Raises:
        InvalidCard: ``card`` is not one of the 52 encodings
    """
    value = _as_int(card)
    if value not in _VALID_CARDS:
        raise InvalidCard(f"Invalid card encoding: {card!r}")
    return value


def card_prime(card: int) -> int:
    return card & PRIME_MASK


def card_rank(card: int) -> int:
    return (card & RANK_MASK) >> RANK_SHIFT


def card_suit_bit(card: int) -> int:
    """4-bit one-hot suit (1=clubs, 2=diamonds, 4=hearts, 8=spades)."""
    return (card & SUIT_MASK) >> SUIT_SHIFT


def card_suit(card: int) -> int:
    suit = _SUIT_INDEX_BY_BIT.get(card & SUIT_MASK)
    if suit is None:
        raise InvalidCard(f"Card has no single suit bit: {card!r}")
    return suit


def card_rank_bit(card: int) -> int:
    """13-bit one-hot rank flag."""
    return (card & RANK_FLAG_MASK) >> RANK_FLAG_SHIFT


def decode_card(card: int) -> Tuple[int, int]:
    """
    Convert an encoded card back to rank and suit.

    Args:
        card: Encoded card

    Returns:
        Tuple of (rank, suit)
    """
    card = require_card(card)
    return card_rank(card), card_suit(card)


def parse_card(card_str: str) -> int:
    """
    Parse card notation to an encoded card.

    Args:
        card_str: Rank then suit, like "As", "td", "2H", "0c" or "K♠"

    Returns:
        Encoded card
    """
    if not isinstance(card_str, str) or len(card_str) != 2:
        raise ParseError(f"Invalid card string: {card_str!r}")

    rank = _RANK_TOKENS.get(card_str[0])
    suit = _SUIT_TOKENS.get(card_str[1])
    if rank is None or suit is None:
        raise ParseError(f"Invalid card string: {card_str!r}")
    return encode_card(rank, suit)


def parse_cards(cards_str: str) -> List[int]:
    """Parse whitespace separated card notation like 'As Kh Qd Jc Ts'."""
    return [parse_card(token) for token in cards_str.split()]


def format_card(card: int, symbols: bool = False) -> str:
    """
    Format an encoded card as human-readable string.

    Args:
        card: Encoded card
        symbols: Use suit symbols instead of letters

    Returns:
        String like "As" (or "A♠")
    """
    rank, suit = decode_card(card)
    suit_chars = SUIT_SYMBOLS if symbols else SUIT_CHARS
    return RANK_CHARS[rank] + suit_chars[suit]


def format_hand(cards: Iterable[int], symbols: bool = False) -> str:
    """Format encoded cards as a string like "As Kh Qd Jc Ts"."""
    return " ".join(format_card(card, symbols) for card in cards)


def shift_suit(card: int) -> int:
    """Move a card one suit down: spades -> hearts -> diamonds -> clubs -> spades."""
    rank, suit = decode_card(card)
    return encode_card(rank, (suit - 1) % NUM_SUITS)


def as_cards(cards) -> List[int]:
    """
    Normalise a hand given as a notation string or a sequence of
    encoded cards and/or notation tokens.
    """
    if isinstance(cards, str):
        return parse_cards(cards)
    return [parse_card(card) if isinstance(card, str) else card for card in cards]


def sorted_cards(cards: Sequence[int]) -> List[int]:
    """Highest rank first; spades before hearts before diamonds before clubs."""
    return sorted(cards, reverse=True)
