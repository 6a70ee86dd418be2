"""
JAX batch evaluator.

Evaluates arrays of hands with the same flush table and perfect hash as
``ckcpoker.evaluator``, written in ``jax.numpy`` uint32 arithmetic so the
lookups can be jitted and vmapped. Inputs are assumed to be valid hands of
distinct cards; an impossible hand evaluates to 0 instead of raising.
"""

import itertools
from typing import Optional

import jax
import jax.numpy as jnp
import numpy as np

from .cards import as_cards
from .errors import InvalidHandSize
from .tables.builder import LookupTables, get_tables
from .tables.constants import (
    FNV_OFFSET_BASIS, FNV_PRIME, PRIME_MASK, RANK_FLAG_SHIFT, SUIT_MASK
)


def _fnv_hash(seed: jnp.ndarray, key: jnp.ndarray) -> jnp.ndarray:
    """32-bit FNV-1a of ``key``, uint32 wraparound does the masking."""
    h = jnp.uint32(FNV_OFFSET_BASIS) ^ seed.astype(jnp.uint32)
    for shift in (0, 8, 16, 24):
        byte = (key >> jnp.uint32(shift)) & jnp.uint32(0xFF)
        h = (h ^ byte) * jnp.uint32(FNV_PRIME)
    return h


def _evaluate_five(cards, flush, unique_values, unique_keys, displacements):
    """Hand rank of one (5,) uint32 hand."""
    cards = cards.astype(jnp.uint32)
    size = jnp.uint32(displacements.shape[0])

    suits = jnp.uint32(SUIT_MASK)
    bits = jnp.uint32(0)
    product = jnp.uint32(1)
    for i in range(5):
        suits = suits & cards[i]
        bits = bits | cards[i]
        product = product * (cards[i] & jnp.uint32(PRIME_MASK))

    # Flush lookup
    pattern = (bits >> jnp.uint32(RANK_FLAG_SHIFT)) & jnp.uint32(0x1FFF)
    flush_rank = flush[pattern.astype(jnp.int32)]

    # Perfect hash lookup
    bucket = (_fnv_hash(jnp.uint32(0), product) % size).astype(jnp.int32)
    d = displacements[bucket]
    hashed = (_fnv_hash(jnp.maximum(d, 0), product) % size).astype(jnp.int32)
    slot = jnp.where(d < 0, -d - 1, hashed)
    unique_rank = jnp.where(unique_keys[slot] == product, unique_values[slot], 0)

    return jnp.where(suits != 0, flush_rank, unique_rank).astype(jnp.uint16)


def _subsets(num_cards: int) -> np.ndarray:
    return np.array(list(itertools.combinations(range(num_cards), 5)), dtype=np.int32)


@jax.jit
def _evaluate_five_batch(cards, flush, unique_values, unique_keys, displacements):
    return jax.vmap(_evaluate_five, in_axes=(0, None, None, None, None))(
        cards, flush, unique_values, unique_keys, displacements
    )


@jax.jit
def _evaluate_best_batch(cards, flush, unique_values, unique_keys, displacements):
    subsets = jnp.asarray(_subsets(cards.shape[1]))

    def best(hand):
        ranks = jax.vmap(_evaluate_five, in_axes=(0, None, None, None, None))(
            hand[subsets], flush, unique_values, unique_keys, displacements
        )
        return jnp.min(ranks)

    return jax.vmap(best)(cards)


def _prepare(cards, low: int, high: int) -> jnp.ndarray:
    cards = jnp.asarray(cards, dtype=jnp.uint32)
    if cards.ndim != 2 or not low <= cards.shape[1] <= high:
        raise InvalidHandSize(f"Expected an (N, {low}-{high}) array of cards, got shape {cards.shape}")
    return cards


def evaluate_batch(cards, tables: Optional[LookupTables] = None) -> jnp.ndarray:
    """
    Evaluate a batch of five card hands.

    Args:
        cards: (N, 5) array of encoded cards
        tables: Lookup tables, the shared instance by default

    Returns:
        (N,) uint16 array of hand ranks
    """
    cards = _prepare(cards, 5, 5)
    arrays = (tables if tables is not None else get_tables()).device_arrays()
    return _evaluate_five_batch(
        cards, arrays["flush"], arrays["unique_values"], arrays["unique_keys"], arrays["displacements"]
    )


def evaluate_best_batch(cards, tables: Optional[LookupTables] = None) -> jnp.ndarray:
    """
    Best five card hand rank for a batch of 5-7 card hands.

    Args:
        cards: (N, 6) or (N, 7) array of encoded cards
        tables: Lookup tables, the shared instance by default

    Returns:
        (N,) uint16 array of hand ranks
    """
    cards = _prepare(cards, 5, 7)
    arrays = (tables if tables is not None else get_tables()).device_arrays()
    return _evaluate_best_batch(
        cards, arrays["flush"], arrays["unique_values"], arrays["unique_keys"], arrays["displacements"]
    )


def cards_to_array(hands) -> jnp.ndarray:
    """
    Convert hands to a card array.

    Args:
        hands: Sequence of hands, each a notation string or a sequence of
            encoded cards/notation tokens; all hands must have the same size

    Returns:
        (N, n) uint32 array
    """
    rows = [as_cards(hand) for hand in hands]
    sizes = {len(row) for row in rows}
    if len(sizes) > 1:
        raise InvalidHandSize(f"Hands have different sizes: {sorted(sizes)}")
    return jnp.asarray(np.array(rows, dtype=np.uint32))
