"""
Fast poker hand evaluation using precomputed perfect-hash lookup tables.

Cards are 32-bit ints packing a rank prime, rank index, one-hot suit and
one-hot rank flag. Five cards resolve to a hand rank in [1, 7462] (lower
is stronger) with at most two table reads.
"""

import logging

from .cards import (
    ALL_CARDS, decode_card, encode_card, format_card, format_hand, parse_card,
    parse_cards, shift_suit
)
from .categories import HandCategory
from .config import configure, get_config
from .errors import (
    DuplicateCard, InvalidCard, InvalidHandRank, InvalidHandSize, InvalidRank,
    InvalidSuit, ParseError, PokerEvalError, TableCollisionError,
    TableConstructionError
)
from .evaluator import best_five, compare_hands, evaluate_best, evaluate_five, evaluate_hand
from .hand_rank import HandRank, classify, hand_description
from .tables.builder import get_tables

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.setLevel(get_config().log_level)

if get_config().eager_tables:
    get_tables()

__all__ = [
    'ALL_CARDS',
    'encode_card',
    'decode_card',
    'parse_card',
    'parse_cards',
    'format_card',
    'format_hand',
    'shift_suit',
    'HandCategory',
    'HandRank',
    'classify',
    'hand_description',
    'evaluate_five',
    'evaluate_best',
    'best_five',
    'evaluate_hand',
    'compare_hands',
    'get_tables',
    'get_config',
    'configure',
    'PokerEvalError',
    'InvalidRank',
    'InvalidSuit',
    'ParseError',
    'InvalidCard',
    'DuplicateCard',
    'InvalidHandSize',
    'InvalidHandRank',
    'TableConstructionError',
    'TableCollisionError',
]
