"""
Lookup table construction.

Number of distinct hand values::

    Straight Flush     10
    Four of a Kind    156   [13 * 12]
    Full House        156   [13 * 12]
    Flush            1277   [C(13,5) - 10 straight flushes]
    Straight           10
    Three of a Kind   858   [13 * C(12,2)]
    Two Pair          858   [C(13,2) * 11]
    Pair             2860   [13 * C(12,3)]
    High Card        1277   [C(13,5) - 10 straights]
    -------------------------
    TOTAL            7462

Hands are enumerated from the strongest (royal flush, rank 1) to the
weakest (7-5-4-3-2 unsuited, rank 7462). Flush hands are keyed by their
13-bit rank pattern into ``flush``; every other hand by its prime product
through a minimal perfect hash into ``unique_values``.
"""

import itertools
import logging
import threading
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from ..card_ops import prime_product_from_ranks, rank_bits_from_ranks
from ..categories import HandCategory
from ..errors import TableCollisionError, TableConstructionError
from .constants import FLUSH_TABLE_SIZE, MAX_HAND_RANK, NUM_RANKS, STRAIGHT_PATTERNS, STRAIGHT_RANKS
from .perfect_hash import build_perfect_hash, slot_for

logger = logging.getLogger(__name__)

_DESCENDING = tuple(range(NUM_RANKS - 1, -1, -1))


# ============================================================================
# ENUMERATION
# ============================================================================

def _distinct_rank_hands(include_straights: bool) -> Iterator[Tuple[int, ...]]:
    """Five distinct ranks, strongest first; straights filtered out unless asked for."""
    straights = set(STRAIGHT_PATTERNS)
    for ranks in itertools.combinations(_DESCENDING, 5):
        if (rank_bits_from_ranks(ranks) in straights) == include_straights:
            yield ranks


def iter_category_hands(category: HandCategory) -> Iterator[Tuple[int, ...]]:
    """
    Rank tuples of one category, strongest first.

    Each tuple lists the five rank indices grouped the way the hand reads
    (quads then kicker, trips then pair, high pair then low pair then
    kicker, ...).
    """
    if category in (HandCategory.STRAIGHT_FLUSH, HandCategory.STRAIGHT):
        yield from STRAIGHT_RANKS

    elif category == HandCategory.FOUR_OF_A_KIND:
        for quad in _DESCENDING:
            for kicker in _DESCENDING:
                if kicker != quad:
                    yield (quad,) * 4 + (kicker,)

    elif category == HandCategory.FULL_HOUSE:
        for trips in _DESCENDING:
            for pair in _DESCENDING:
                if pair != trips:
                    yield (trips,) * 3 + (pair,) * 2

    elif category in (HandCategory.FLUSH, HandCategory.HIGH_CARD):
        yield from _distinct_rank_hands(include_straights=False)

    elif category == HandCategory.THREE_OF_A_KIND:
        for trips in _DESCENDING:
            kickers = [rank for rank in _DESCENDING if rank != trips]
            for first, second in itertools.combinations(kickers, 2):
                yield (trips,) * 3 + (first, second)

    elif category == HandCategory.TWO_PAIR:
        for high, low in itertools.combinations(_DESCENDING, 2):
            for kicker in _DESCENDING:
                if kicker not in (high, low):
                    yield (high, high, low, low, kicker)

    elif category == HandCategory.PAIR:
        for pair in _DESCENDING:
            kickers = [rank for rank in _DESCENDING if rank != pair]
            for combo in itertools.combinations(kickers, 3):
                yield (pair, pair) + combo

    else:
        raise ValueError(f"Unknown category: {category!r}")


def iter_hand_ranks() -> Iterator[Tuple[int, HandCategory, Tuple[int, ...]]]:
    """Yield (hand_rank, category, ranks) for every distinct hand value, rank 1 first."""
    hand_rank = 1
    for category in HandCategory:
        for ranks in iter_category_hands(category):
            yield hand_rank, category, ranks
            hand_rank += 1


@lru_cache(maxsize=None)
def category_bounds() -> Dict[HandCategory, Tuple[int, int]]:
    """First and last hand rank of every category, as produced by the enumeration."""
    bounds = {}
    first = 1
    for category in HandCategory:
        count = sum(1 for _ in iter_category_hands(category))
        bounds[category] = (first, first + count - 1)
        first += count
    return bounds


# ============================================================================
# TABLES
# ============================================================================

def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class LookupTables:
    """
    Immutable evaluation tables.

    Attributes:
        flush: uint16[8192], hand rank by 13-bit rank pattern (0 = no such flush)
        unique_values: uint16[n], hand rank by perfect-hash slot
        unique_keys: uint32[n], prime product stored in each slot
        displacements: int32[n], perfect-hash index table
        signatures: uint8[7463, 5], rank indices of the canonical hand for each rank
        bounds: category -> (first, last) hand rank
    """
    flush: np.ndarray
    unique_values: np.ndarray
    unique_keys: np.ndarray
    displacements: np.ndarray
    signatures: np.ndarray
    bounds: Dict[HandCategory, Tuple[int, int]]
    _device: dict = field(default_factory=dict, repr=False, compare=False)

    def lookup_flush(self, rank_bits: int) -> int:
        return int(self.flush[int(rank_bits)])

    def lookup_unique(self, product: int) -> int:
        """Hand rank for a non-flush prime product, 0 if no hand has that product."""
        product = int(product)
        slot = slot_for(self.displacements, product)
        if int(self.unique_keys[slot]) != product:
            return 0
        return int(self.unique_values[slot])

    def device_arrays(self):
        """The tables as ``jnp`` arrays, converted once and cached."""
        if not self._device:
            import jax.numpy as jnp
            self._device.update(
                flush=jnp.asarray(self.flush, dtype=jnp.uint16),
                unique_values=jnp.asarray(self.unique_values, dtype=jnp.uint16),
                unique_keys=jnp.asarray(self.unique_keys, dtype=jnp.uint32),
                displacements=jnp.asarray(self.displacements, dtype=jnp.int32),
            )
        return self._device


def build_tables(max_displacement: int = 1_000_000) -> LookupTables:
    """
    Enumerate every hand value and build the lookup tables.

    Raises:
        TableCollisionError: two hands produced the same key or table entry
    """
    start = time.time()
    logger.info("Building hand rank lookup tables...")

    flush = np.zeros(FLUSH_TABLE_SIZE, dtype=np.uint16)
    signatures = np.zeros((MAX_HAND_RANK + 1, 5), dtype=np.uint8)
    unique: Dict[int, int] = {}
    counts = {category: 0 for category in HandCategory}

    last_rank = 0
    for hand_rank, category, ranks in iter_hand_ranks():
        signatures[hand_rank] = ranks
        counts[category] += 1
        last_rank = hand_rank

        if category.is_flush_category:
            key = rank_bits_from_ranks(ranks)
            if flush[key]:
                _fail(f"Flush pattern {key:#015b} assigned twice ({flush[key]} and {hand_rank})")
            flush[key] = hand_rank
        else:
            key = prime_product_from_ranks(ranks)
            if key in unique:
                _fail(f"Prime product {key} assigned twice ({unique[key]} and {hand_rank})")
            unique[key] = hand_rank

    if last_rank != MAX_HAND_RANK:
        _fail(f"Enumeration produced {last_rank} hand values, expected {MAX_HAND_RANK}")
    for category, count in counts.items():
        logger.debug("%s: %d hand values", category.label, count)

    keys = list(unique)
    try:
        displacements, slot_keys = build_perfect_hash(keys, max_displacement)
    except TableCollisionError as e:
        logger.critical("Perfect hash construction failed: %s", e)
        raise

    tables = LookupTables(
        flush=_frozen(flush),
        unique_values=_frozen(np.array([unique[key] for key in slot_keys], dtype=np.uint16)),
        unique_keys=_frozen(np.array(slot_keys, dtype=np.uint32)),
        displacements=_frozen(np.array(displacements, dtype=np.int32)),
        signatures=_frozen(signatures),
        bounds=category_bounds(),
    )
    verify_tables(tables)

    logger.info(
        "Lookup tables built in %.3fs: %d flush entries, %d unique entries",
        time.time() - start, int(np.count_nonzero(flush)), len(keys),
    )
    return tables


def verify_tables(tables: LookupTables) -> None:
    """
    Check that every hand value is reachable exactly once.

    Raises:
        TableCollisionError: a key does not hash back to its own slot
        TableConstructionError: shapes or contents are wrong
    """
    if tables.flush.shape != (FLUSH_TABLE_SIZE,):
        _fail(f"Flush table has shape {tables.flush.shape}", TableConstructionError)
    size = tables.unique_values.shape[0]
    if tables.unique_keys.shape != (size,) or tables.displacements.shape != (size,):
        _fail("Unique table arrays differ in length", TableConstructionError)
    if tables.signatures.shape != (MAX_HAND_RANK + 1, 5):
        _fail(f"Signature table has shape {tables.signatures.shape}", TableConstructionError)
    if int(tables.signatures[1:].max()) >= NUM_RANKS:
        _fail("Signature table holds rank indices outside 0-12", TableConstructionError)

    seen = np.concatenate([tables.flush[tables.flush != 0], tables.unique_values])
    expected = np.arange(1, MAX_HAND_RANK + 1)
    if seen.shape != expected.shape or not np.array_equal(np.sort(seen), expected):
        _fail("Tables do not hold every hand rank exactly once", TableConstructionError)

    for slot in range(size):
        key = int(tables.unique_keys[slot])
        if slot_for(tables.displacements, key) != slot:
            _fail(f"Prime product {key} does not hash to its slot {slot}")


def _fail(message: str, error=TableCollisionError):
    logger.critical(message)
    raise error(message)


# ============================================================================
# SHARED INSTANCE
# ============================================================================

_tables: Optional[LookupTables] = None
_lock = threading.Lock()


def get_tables() -> LookupTables:
    """
    Process-wide lookup tables, built (or loaded from the configured
    archive) on first use.
    """
    global _tables
    if _tables is None:
        with _lock:
            if _tables is None:
                from ..config import get_config
                config = get_config()
                if config.table_path:
                    from .generate import load_tables
                    _tables = load_tables(config.table_path)
                else:
                    _tables = build_tables(config.max_displacement)
    return _tables
