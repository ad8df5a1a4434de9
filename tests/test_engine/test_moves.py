"""Tests for move types."""

from burraco_engine.cards import Card, parse_cards
from burraco_engine.moves import (
    AppendBottom,
    AppendTop,
    DiscardAction,
    DrawAction,
    DrawOpen,
    DrawPile,
    MoveCard,
    MoveType,
    Noop,
    PlayAction,
    ReplaceWildcard,
    StartRun,
)
from burraco_engine.runs import build_sequence_run


class TestMoveTypes:
    def test_draw_actions(self):
        assert isinstance(DrawPile(), DrawAction)
        assert isinstance(DrawOpen(), DrawAction)
        assert DrawPile().move_type == MoveType.DRAW_PILE
        assert DrawOpen().move_type == MoveType.DRAW_OPEN

    def test_play_actions(self):
        run = build_sequence_run(parse_cards("♣3,♣4,♣5"))
        cards = tuple(parse_cards("♣6"))
        for action, move_type in [
            (StartRun(run), MoveType.START_RUN),
            (AppendTop(0, cards), MoveType.APPEND_TOP),
            (AppendBottom(0, cards), MoveType.APPEND_BOTTOM),
            (ReplaceWildcard(0, 1, Card.parse("♣4")), MoveType.REPLACE_WILDCARD),
            (MoveCard(0, 3, 0), MoveType.MOVE_CARD),
            (Noop(), MoveType.NOOP),
        ]:
            assert isinstance(action, PlayAction)
            assert action.move_type == move_type

    def test_discard_is_not_play_action(self):
        action = DiscardAction(Card.parse("♣5"))
        assert not isinstance(action, PlayAction)
        assert action.move_type == MoveType.DISCARD


class TestMoveValues:
    def test_equality_and_hash(self):
        assert Noop() == Noop()
        assert DrawPile() != DrawOpen()
        cards = tuple(parse_cards("♣6"))
        assert AppendTop(0, cards) == AppendTop(0, cards)
        assert AppendTop(0, cards) != AppendBottom(0, cards)
        assert len({AppendTop(0, cards), AppendTop(0, cards), Noop()}) == 2

    def test_start_run_equality_uses_cards(self):
        run_a = build_sequence_run(parse_cards("♣3,♣4,♣5"))
        run_b = build_sequence_run(parse_cards("♣3,♣4,♣5"))
        assert StartRun(run_a) == StartRun(run_b)


class TestMoveStrings:
    def test_descriptions(self):
        run = build_sequence_run(parse_cards("♣5,JK,♣7"))
        assert str(DrawPile()) == "Draw from hidden pile"
        assert str(DrawOpen()) == "Collect open pile"
        assert str(StartRun(run)) == "Start run - ♣5,JK,♣7"
        assert str(AppendTop(1, tuple(parse_cards("♣8")))) == "Append top, to 1 - ♣8"
        assert str(AppendBottom(0, tuple(parse_cards("♣4")))) == "Append bottom, to 0 - ♣4"
        assert str(Noop()) == "Play nothing"
        assert str(DiscardAction(Card.parse("♥10"))) == "Discard ♥10"
