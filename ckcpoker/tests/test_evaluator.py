"""
Comprehensive unit tests for poker hand evaluation.

Tests all hand types, edge cases, and evaluation accuracy.
"""

import itertools
import random
import warnings

import numpy as np
import pytest

from ckcpoker.cards import ALL_CARDS, encode_card, parse_cards
from ckcpoker.categories import HandCategory
from ckcpoker.errors import DuplicateCard, InvalidCard, InvalidHandSize
from ckcpoker.evaluator import best_five, compare_hands, evaluate_best, evaluate_five, evaluate_hand
from ckcpoker.hand_rank import HandRank, classify
from ckcpoker.jax_evaluator import cards_to_array
from ckcpoker.tables.builder import get_tables, iter_hand_ranks
from ckcpoker.tables.constants import MAX_HAND_RANK


def canonical_hand(category, ranks):
    """Cards for a rank signature: suits by occurrence, one suit for flushes."""
    if category.is_flush_category:
        return [encode_card(rank, 3) for rank in ranks]
    seen = {}
    cards = []
    for rank in ranks:
        suit = seen.get(rank, 0)
        seen[rank] = suit + 1
        cards.append(encode_card(rank, suit))
    if len(set(ranks)) == 5:
        # Five distinct ranks all got suit 0, break the flush
        cards[-1] = encode_card(ranks[-1], 1)
    return cards


class TestHandEvaluation:
    """Test basic hand evaluation functionality."""

    def test_royal_flush(self):
        """Test royal flush evaluation."""
        rank = evaluate_five(parse_cards("AS KS QS JS TS"))
        assert rank == HandRank(1)
        assert rank.category == HandCategory.STRAIGHT_FLUSH
        assert rank.description == "Royal Flush"

    def test_royal_flush_every_suit(self):
        """Test rank 1 for each suit's royal flush."""
        for suit in "cdhs":
            hand = [rank + suit for rank in "AKQJT"]
            assert evaluate_five(parse_cards(" ".join(hand))).value == 1

    def test_straight_flush(self):
        """Test straight flush evaluation."""
        # 5-high straight flush
        rank = evaluate_five(parse_cards("5h 4h 3h 2h Ah"))
        assert rank.value == 10
        assert rank.description == "Five-High Straight Flush"

        # 9-high straight flush
        rank = evaluate_five(parse_cards("9s 8s 7s 6s 5s"))
        assert rank.category == HandCategory.STRAIGHT_FLUSH
        assert rank.description == "Nine-High Straight Flush"

    def test_four_of_a_kind(self):
        """Test four of a kind evaluation."""
        rank = evaluate_five(parse_cards("As Ah Ad Ac Kh"))
        assert rank.value == 11
        assert rank.description == "Four Aces"

        # Lower quads
        low = evaluate_five(parse_cards("2H 2D 2C 2S 3H"))
        assert low.category == HandCategory.FOUR_OF_A_KIND
        assert 11 <= low.value <= 166
        assert low.value == 166

    def test_quads_beat_full_house(self):
        """Test the weakest quads beat a strong full house."""
        quads = evaluate_five(parse_cards("2H 2D 2C 2S 3H"))
        boat = evaluate_five(parse_cards("KH KD KC QS QH"))
        assert boat.category == HandCategory.FULL_HOUSE
        assert 167 <= boat.value <= 322
        assert quads < boat
        assert boat.description == "Kings Full of Queens"

    def test_flush(self):
        """Test flush evaluation."""
        rank = evaluate_five(parse_cards("Ah Jh 8h 4h 2h"))
        assert rank.category == HandCategory.FLUSH
        assert rank.description == "Ace-High Flush"
        # Weakest flush
        assert evaluate_five(parse_cards("7c 5c 4c 3c 2c")).value == 1599

    def test_straight(self):
        """Test straight evaluation including the wheel."""
        broadway = evaluate_five(parse_cards("As Kh Qd Jc Ts"))
        assert broadway.value == 1600
        wheel = evaluate_five(parse_cards("5s 4h 3d 2c Ah"))
        assert wheel.value == 1609
        assert wheel.description == "Five-High Straight"
        assert broadway < wheel

    def test_three_of_a_kind(self):
        rank = evaluate_five(parse_cards("Qs Qh Qd 9c 2s"))
        assert rank.category == HandCategory.THREE_OF_A_KIND
        assert rank.description == "Three Queens"

    def test_two_pair(self):
        rank = evaluate_five(parse_cards("Js Jh Tc Td 4s"))
        assert rank.category == HandCategory.TWO_PAIR
        assert rank.description == "Jacks and Tens"
        assert rank.ranks == "JJTT4"

    def test_pair(self):
        rank = evaluate_five(parse_cards("9s 9h Ac 7d 4s"))
        assert rank.category == HandCategory.PAIR
        assert rank.description == "Pair of Nines"

    def test_high_card(self):
        """Test the weakest hand."""
        rank = evaluate_five(parse_cards("7H 5D 4C 3S 2H"))
        assert rank.value == MAX_HAND_RANK
        assert rank.category == HandCategory.HIGH_CARD
        assert rank.description == "Seven-High"

    def test_flush_beats_non_flush(self):
        """Test flushes beat every non-flush hand below a full house."""
        flush = evaluate_five(parse_cards("7c 5c 4c 3c 2c"))
        for text in ("As Kh Qd Jc Ts", "As Ah Ad Kc Qs", "As Ah Kd Kc Qs", "As Kh Qd Jc 9s"):
            assert flush < evaluate_five(parse_cards(text))

    def test_order_independent(self):
        """Test card order does not matter."""
        cards = parse_cards("Kh Kd 7c 7s 2h")
        expected = evaluate_five(cards)
        for perm in itertools.permutations(cards):
            assert evaluate_five(perm) == expected


class TestCanonicalHands:
    """Test every hand rank against its canonical hand."""

    def test_every_rank_round_trips(self):
        """Test each hand rank's canonical hand evaluates back to it."""
        for hand_rank, category, ranks in iter_hand_ranks():
            rank = evaluate_five(canonical_hand(category, ranks))
            assert rank.value == hand_rank
            assert classify(rank) == category

    def test_signatures_match(self):
        """Test the signature table holds the enumeration's ranks."""
        signatures = get_tables().signatures
        for hand_rank, _, ranks in iter_hand_ranks():
            assert tuple(int(rank) for rank in signatures[hand_rank]) == ranks


class TestBestOfSubsets:
    """Test 6 and 7 card evaluation."""

    def test_seven_cards(self):
        """Test best hand from seven cards."""
        rank, hand = best_five(parse_cards("As Ks Qs Js Ts 2h 3d"))
        assert rank.value == 1
        assert sorted(hand) == sorted(parse_cards("As Ks Qs Js Ts"))

    def test_six_cards(self):
        rank = evaluate_best(parse_cards("9h 9d 9c 4s 4h 2c"))
        assert rank.description == "Nines Full of Fours"

    def test_five_cards(self):
        """Test best of five equals direct evaluation."""
        cards = parse_cards("Js Jh Tc Td 4s")
        assert evaluate_best(cards) == evaluate_five(cards)

    def test_matches_explicit_subsets(self):
        """Test best-of-7 equals the minimum over the 21 subsets."""
        rng = random.Random(7)
        for _ in range(300):
            cards = rng.sample(ALL_CARDS, 7)
            expected = min(evaluate_five(hand) for hand in itertools.combinations(cards, 5))
            assert evaluate_best(cards) == expected

    def test_evaluate_hand_dispatch(self):
        """Test string and sequence inputs of 5-7 cards."""
        assert evaluate_hand("As Ks Qs Js Ts").value == 1
        assert evaluate_hand("2c As Ks Qs Js Ts").value == 1
        assert evaluate_hand(["As", "Ks", "Qs", "Js", "Ts", "2c", "3c"]).value == 1
        assert evaluate_hand(parse_cards("7H 5D 4C 3S 2H")).value == MAX_HAND_RANK


class TestCompareHands:
    """Test head to head comparison."""

    def test_winner(self):
        assert compare_hands("As Ah Ad Ac Kh", "Ks Kh Kd Kc Ah") == 1
        assert compare_hands("7H 5D 4C 3S 2H", "8H 5D 4C 3S 2H") == -1

    def test_tie(self):
        """Test hands that differ only by suit tie."""
        assert compare_hands("As Kh Qd Jc 9s", "Ac Kd Qh Js 9c") == 0

    def test_board(self):
        """Test two holdings sharing a board."""
        board = "Td 9d 8c 2s 2h"
        assert compare_hands("Jd 7d " + board, "Ah Ac " + board) == 1


class TestValidation:
    """Test input validation."""

    @pytest.mark.parametrize("text", ["As Ks Qs Js", "As", ""])
    def test_too_few_cards(self, text):
        with pytest.raises(InvalidHandSize):
            evaluate_best(parse_cards(text))

    def test_too_many_cards(self):
        with pytest.raises(InvalidHandSize):
            evaluate_best(parse_cards("As Ks Qs Js Ts 9s 8s 7s"))

    def test_five_requires_five(self):
        """Test evaluate_five rejects 6 cards."""
        with pytest.raises(InvalidHandSize):
            evaluate_five(parse_cards("As Ks Qs Js Ts 9s"))

    def test_duplicate_card(self):
        with pytest.raises(DuplicateCard):
            evaluate_five(parse_cards("As As Qs Js Ts"))
        with pytest.raises(DuplicateCard):
            evaluate_best(parse_cards("As Ks Qs Js Ts 2c 2c"))

    def test_invalid_card(self):
        cards = parse_cards("As Ks Qs Js")
        with pytest.raises(InvalidCard):
            evaluate_five(cards + [12345])
        with pytest.raises(InvalidCard):
            evaluate_five(cards + [-1])


class TestArrayInputs:
    """Test hands given as NumPy and JAX array rows."""

    def test_numpy_row(self):
        """Test NumPy uint32 cards evaluate without overflow warnings."""
        row = np.array(parse_cards("As Kh Qd Jc 9s"), dtype=np.uint32)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert evaluate_five(row) == evaluate_five(parse_cards("As Kh Qd Jc 9s"))
            assert evaluate_five(list(row)).category == HandCategory.HIGH_CARD
            assert evaluate_best(np.array(parse_cards("Kh Kd 7c 7s 2h 3c 9d"), dtype=np.uint32)).description == "Kings and Sevens"

    def test_jax_row(self):
        """Test a row of the batch card array evaluates like its ints."""
        hands = cards_to_array(["As Ks Qs Js Ts", "Kh Kd 7c 7s 2h"])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert evaluate_five(hands[0]).value == 1
            assert evaluate_five(hands[1]) == evaluate_five(parse_cards("Kh Kd 7c 7s 2h"))
            rank, hand = best_five(hands[1])
        assert all(type(card) is int for card in hand)

    def test_invalid_array_values(self):
        """Test array values that are not cards are still rejected."""
        row = np.array(parse_cards("As Ks Qs Js") + [12345], dtype=np.uint32)
        with pytest.raises(InvalidCard):
            evaluate_five(row)
        with pytest.raises(InvalidCard):
            evaluate_five(parse_cards("As Ks Qs Js") + [1.5])
