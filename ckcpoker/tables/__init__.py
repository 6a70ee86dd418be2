"""
Perfect-hash lookup tables mapping five cards to a hand rank.

``constants`` holds the card bit layout, ``builder`` enumerates hands and
builds the tables, ``perfect_hash`` compresses the non-flush keys and
``generate`` writes and loads pre-built archives.
"""
