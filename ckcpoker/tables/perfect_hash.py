"""
Minimal perfect hash over the non-flush prime products.

Hash-and-displace construction: keys are split into buckets by a first
hash, then each bucket gets a displacement (the seed of a second hash)
that lands all of its keys in free slots. Single-key buckets are pointed
at a free slot directly with a negative displacement. The result is a
table of ``n`` displacements for ``n`` keys and a lookup of two hashes
and two array reads.
"""

import logging
from typing import List, Sequence, Tuple

from ..errors import TableCollisionError
from .constants import FNV_OFFSET_BASIS, FNV_PRIME, UINT32_MASK

logger = logging.getLogger(__name__)


def fnv_hash(seed: int, key: int) -> int:
    """32-bit FNV-1a over the four little-endian bytes of ``key``."""
    seed, key = int(seed), int(key)
    h = (FNV_OFFSET_BASIS ^ seed) & UINT32_MASK
    for shift in (0, 8, 16, 24):
        h = ((h ^ ((key >> shift) & 0xFF)) * FNV_PRIME) & UINT32_MASK
    return h


def slot_for(displacements: Sequence[int], key: int) -> int:
    """Slot index of ``key``. Only meaningful for keys the table was built from."""
    size = len(displacements)
    d = int(displacements[fnv_hash(0, key) % size])
    if d < 0:
        return -d - 1
    return fnv_hash(d, key) % size


def build_perfect_hash(keys: Sequence[int], max_displacement: int = 1_000_000) -> Tuple[List[int], List[int]]:
    """
    Build a minimal perfect hash for ``keys``.

    Args:
        keys: Distinct unsigned 32-bit keys
        max_displacement: Upper bound on the displacement search per bucket

    Returns:
        Tuple of (displacements, slot_keys): the index table, and the key
        stored in each slot
    """
    size = len(keys)
    if size == 0:
        raise TableCollisionError("Cannot build a perfect hash over no keys")
    if len(set(keys)) != size:
        raise TableCollisionError("Duplicate keys in perfect hash input")

    buckets: List[List[int]] = [[] for _ in range(size)]
    for key in keys:
        buckets[fnv_hash(0, key) % size].append(key)

    displacements = [0] * size
    slots: List[int] = [None] * size
    order = sorted(range(size), key=lambda b: len(buckets[b]), reverse=True)

    position = 0
    max_used = 0
    for position, bucket_index in enumerate(order):
        bucket = buckets[bucket_index]
        if len(bucket) <= 1:
            break

        d = 1
        placed: List[int] = []
        item = 0
        while item < len(bucket):
            slot = fnv_hash(d, bucket[item]) % size
            if slots[slot] is not None or slot in placed:
                d += 1
                if d > max_displacement:
                    raise TableCollisionError(
                        f"No displacement up to {max_displacement} places bucket "
                        f"{bucket_index} ({len(bucket)} keys)"
                    )
                item = 0
                placed = []
            else:
                placed.append(slot)
                item += 1

        displacements[bucket_index] = d
        max_used = max(max_used, d)
        for key, slot in zip(bucket, placed):
            slots[slot] = key
    else:
        position = size

    free = [slot for slot in range(size) if slots[slot] is None]
    for bucket_index in order[position:]:
        bucket = buckets[bucket_index]
        if not bucket:
            break
        slot = free.pop()
        displacements[bucket_index] = -slot - 1
        slots[slot] = bucket[0]

    logger.debug(
        "Perfect hash over %d keys: %d multi-key buckets, largest displacement %d",
        size, position, max_used,
    )
    return displacements, slots
