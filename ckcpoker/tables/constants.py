"""
Bit layout and enumeration constants shared by the card encoder and the
lookup-table builder.

Card layout (32 bits)::

    +--------+--------+--------+--------+
    |xxxbbbbb|bbbbbbbb|SHDCrrrr|xxpppppp|
    +--------+--------+--------+--------+

    p = prime of rank (deuce=2, trey=3, four=5, ..., ace=41)
    r = rank index (deuce=0, trey=1, ..., ace=12)
    SHDC = one-hot suit, spades in the top bit
    b = one-hot rank flag
"""

NUM_RANKS = 13
NUM_SUITS = 4

RANK_CHARS = "23456789TJQKA"
SUIT_CHARS = "cdhs"
SUIT_SYMBOLS = "♣♦♥♠"

# Prime for each rank index (2=0, 3=1, ..., A=12)
PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)

PRIME_MASK = 0x3F
RANK_SHIFT = 8
RANK_MASK = 0xF00
SUIT_SHIFT = 12
SUIT_MASK = 0xF000
RANK_FLAG_SHIFT = 16
RANK_FLAG_MASK = 0x1FFF0000

# Suit index -> one-hot suit field (clubs=0, diamonds=1, hearts=2, spades=3)
SUIT_BITS = (0x1000, 0x2000, 0x4000, 0x8000)

# The ten straights as 13-bit rank patterns, ace-high first, wheel last
STRAIGHT_PATTERNS = (
    0b1111100000000,  # A K Q J T
    0b0111110000000,  # K Q J T 9
    0b0011111000000,  # Q J T 9 8
    0b0001111100000,  # J T 9 8 7
    0b0000111110000,  # T 9 8 7 6
    0b0000011111000,  # 9 8 7 6 5
    0b0000001111100,  # 8 7 6 5 4
    0b0000000111110,  # 7 6 5 4 3
    0b0000000011111,  # 6 5 4 3 2
    0b1000000001111,  # 5 4 3 2 A (wheel)
)

# Rank indices of each straight in presentation order (high card first)
STRAIGHT_RANKS = tuple(
    tuple(range(high, high - 5, -1)) for high in range(12, 3, -1)
) + ((3, 2, 1, 0, 12),)

FLUSH_TABLE_SIZE = 1 << NUM_RANKS
MAX_HAND_RANK = 7462

# Perfect hash parameters (32-bit FNV-1a)
FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
UINT32_MASK = 0xFFFFFFFF
