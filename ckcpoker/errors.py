"""Exceptions raised by the card encoder, evaluator and table builder."""


class PokerEvalError(ValueError):
    """Base class for errors caused by invalid caller input."""


class InvalidRank(PokerEvalError):
    pass


class InvalidSuit(PokerEvalError):
    pass


class ParseError(PokerEvalError):
    """Card notation did not match a known rank/suit token."""


class InvalidCard(PokerEvalError):
    """An integer is not a valid card encoding."""


class DuplicateCard(PokerEvalError):
    pass


class InvalidHandSize(PokerEvalError):
    pass


class InvalidHandRank(PokerEvalError):
    """Hand rank outside [1, 7462]."""


class TableConstructionError(RuntimeError):
    """Lookup tables could not be built or loaded. Not recoverable."""


class TableCollisionError(TableConstructionError):
    """Two hands mapped to the same table entry while building the tables."""
