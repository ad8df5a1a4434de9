"""Tests for run construction, scoring and mutation."""

import pytest

from burraco_engine.cards import JOKER, Card, parse_cards
from burraco_engine.runs import (
    AppendSide,
    IllegalRunError,
    Run,
    RunType,
    build_group_run,
    build_run,
    build_sequence_run,
)


def seq(expr: str) -> Run:
    return build_sequence_run(parse_cards(expr))


def group(expr: str) -> Run:
    return build_group_run(parse_cards(expr))


class TestSequenceBuilding:
    @pytest.mark.parametrize(
        "expr",
        [
            "♣3,♣4,♣5",
            "♣3,JK,♣5",
            "JK,♣4,♣5",
            "♣3,♣4,JK",
            "♦6,♣2,♦8",
            "♣2,♣3,♣4",
            "♣Q,♣K,♣A",
            "♣A,♣2,♣3",
            "♣2,♣2,♣3",
            "♣3,♣4,♣5,♣2",
            "♣2,♣3,♣4,JK",
            "JK,♣2,♣3",
            "JK,♣2,♣3,♣4",
            "♣Q,♣K,♣A,♣2",
            "♣K,♣A,♣2",
            "♣A,♣2,♣3,JK",
            "♠2,♠3,♠4,♠5,♠6,♠7,♠8,♠9,♠10,♠J,♠Q,♠K,♠A",
        ],
    )
    def test_valid_sequences(self, expr):
        run = seq(expr)
        assert run.run_type == RunType.SEQUENCE
        assert list(run.cards) == parse_cards(expr)

    @pytest.mark.parametrize(
        "expr",
        [
            "♣3,♣4",
            "JK,♣2,♥2",
            "JK,♣2,♣5",
            "♣2,♣5,♣6,JK",
            "JK,JK,♣5",
            "♣3,♦4,♣5",
            "♣3,♣5,♣6",
            "♣5,♣4,♣3",
            "♣3,JK,♣5,♣2",
            "♣Q,♣K,♣A,JK",
            "♣K,♣A,♣3",
        ],
    )
    def test_invalid_sequences(self, expr):
        with pytest.raises(IllegalRunError):
            seq(expr)

    def test_illegal_run_error_is_value_error(self):
        with pytest.raises(ValueError):
            seq("♣3,♣4")

    def test_revalidation_reproduces_run(self):
        run = seq("♣3,JK,♣5,♣6")
        assert build_sequence_run(run.cards) == run


class TestGroupBuilding:
    def test_valid_group(self):
        run = group("♣5,♦5,♥5")
        assert run.run_type == RunType.GROUP
        assert len(run) == 3

    def test_group_canonical_order_puts_wildcards_last(self):
        run = group("JK,♥5,♣5")
        assert run.cards == tuple(parse_cards("♣5,♥5,JK"))

    def test_group_of_twos_is_natural(self):
        run = group("♥2,♣2,♦2")
        assert run.cards == tuple(parse_cards("♣2,♦2,♥2"))

    @pytest.mark.parametrize(
        "expr",
        [
            "♣5,♦5",
            "♣5,♦6,♥5",
            "♣5,♣5,♥5",
            "JK,♣2,♣5",
            "JK,JK,♣5",
        ],
    )
    def test_invalid_groups(self, expr):
        with pytest.raises(IllegalRunError):
            group(expr)

    def test_revalidation_reproduces_run(self):
        run = group("♠9,JK,♦9")
        assert build_group_run(run.cards) == run
        assert build_run(run.cards, RunType.GROUP) == run


class TestScoring:
    def test_cards_score(self):
        assert seq("♣3,♣4,♣5").score == 15
        assert seq("♣5,JK,♣7").score == 40
        assert group("♣A,♦A,♥A").score == 45

    @pytest.mark.parametrize(
        "expr,bonus",
        [
            ("♠3,♠4,♠5", 0),
            ("JK,♠4,♠5,♠6,♠7,♠8,♠9", 100),
            ("♠3,♠4,♠5,♠6,♠7,♠8,♠9", 200),
            ("♠3,♠4,♠5,♠6,♠7,♠8,♠9,JK", 150),
            ("JK,♠4,♠5,♠6,♠7,♠8,♠9,♠10", 150),
            ("♠3,♠4,♠5,♠2,♠7,♠8,♠9", 100),
            ("♠2,♠3,♠4,♠5,♠6,♠7,♠8,♠9,♠10,♠J,♠Q,♠K,♠A", 300),
            ("♠A,♠2,♠3,♠4,♠5,♠6,♠7,♠8,♠9,♠10,♠J,♠Q,♠K", 300),
        ],
    )
    def test_sequence_burraco_value(self, expr, bonus):
        assert seq(expr).burraco_value == bonus

    def test_burraco_flag(self):
        assert not seq("♠3,♠4,♠5,♠6,♠7,♠8").is_burraco
        assert seq("♠3,♠4,♠5,♠6,♠7,♠8,♠9").is_burraco

    def test_score_includes_bonus(self):
        run = seq("♠3,♠4,♠5,♠6,♠7,♠8,♠9")
        assert run.score == 200 + run.cards_score

    def test_string(self):
        assert str(seq("♣3,♣4,♣5")) == "Sequence: ♣3,♣4,♣5 (15 p)"


class TestAppend:
    def test_append_top(self):
        run = seq("♣3,♣4,♣5").append(parse_cards("♣6"), AppendSide.TOP)
        assert run.cards == tuple(parse_cards("♣3,♣4,♣5,♣6"))

    def test_append_bottom(self):
        run = seq("♣3,♣4,♣5").append(parse_cards("♣2"), AppendSide.BOTTOM)
        assert run.cards == tuple(parse_cards("♣2,♣3,♣4,♣5"))

    def test_append_wildcard_on_top(self):
        run = seq("♣3,♣4,♣5").append([JOKER], AppendSide.TOP)
        assert run.wildcard_positions == [3]

    def test_append_two_after_ace(self):
        run = seq("♣Q,♣K,♣A").append(parse_cards("♣2"), AppendSide.TOP)
        assert run.cards == tuple(parse_cards("♣Q,♣K,♣A,♣2"))

    def test_append_invalid(self):
        with pytest.raises(IllegalRunError):
            seq("♣3,♣4,♣5").append(parse_cards("♣7"), AppendSide.TOP)

    def test_append_keeps_original(self):
        run = seq("♣3,♣4,♣5")
        run.append(parse_cards("♣6"), AppendSide.TOP)
        assert len(run) == 3

    def test_append_to_group(self):
        run = group("♣5,♦5,♥5").append(parse_cards("♠5"), AppendSide.TOP)
        assert run.cards == tuple(parse_cards("♣5,♦5,♥5,♠5"))

    def test_append_duplicate_suit_to_group(self):
        with pytest.raises(IllegalRunError):
            group("♣5,♦5,♥5").append(parse_cards("♣5"), AppendSide.TOP)


class TestReplaceWildcard:
    def test_replace_moves_wildcard_to_front(self):
        run = seq("♣3,JK,♣5").replace_wildcard(1, Card.parse("♣4"))
        assert run.cards == tuple(parse_cards("JK,♣3,♣4,♣5"))

    def test_replace_with_wrong_card(self):
        with pytest.raises(IllegalRunError):
            seq("♣3,JK,♣5").replace_wildcard(1, Card.parse("♣6"))

    def test_replace_bad_position(self):
        with pytest.raises(IllegalRunError):
            seq("♣3,JK,♣5").replace_wildcard(3, Card.parse("♣4"))

    def test_replace_in_group_fails(self):
        with pytest.raises(IllegalRunError):
            group("♣5,♦5,JK").replace_wildcard(2, Card.parse("♥5"))


class TestMoveCard:
    def test_move_wildcard_to_front(self):
        run = seq("♣3,♣4,♣5,♣2").move_card(3, 0)
        assert run.cards == tuple(parse_cards("♣2,♣3,♣4,♣5"))

    @pytest.mark.parametrize("from_idx,to_idx", [(0, 0), (0, 1), (1, 2), (-1, 0), (0, 4)])
    def test_invalid_indices(self, from_idx, to_idx):
        with pytest.raises(IllegalRunError):
            seq("♣3,♣4,♣5,♣2").move_card(from_idx, to_idx)

    def test_move_producing_invalid_run(self):
        with pytest.raises(IllegalRunError):
            seq("JK,♥3,♥4").move_card(0, 2)

    def test_move_in_group_fails(self):
        with pytest.raises(IllegalRunError):
            group("♣5,♦5,JK").move_card(2, 0)
