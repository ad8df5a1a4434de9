"""Tests for legal move generation."""

from burraco_engine.cards import parse_cards
from burraco_engine.move_generator import enumerate_play_actions, generate_legal_moves
from burraco_engine.moves import (
    AppendBottom,
    AppendTop,
    DiscardAction,
    DrawOpen,
    DrawPile,
    MoveCard,
    Noop,
    ReplaceWildcard,
    StartRun,
)
from burraco_engine.runs import RunType, build_group_run, build_sequence_run
from burraco_engine.state import GamePhase, create_initial_state


def seq(expr: str):
    return build_sequence_run(parse_cards(expr))


def started_runs(actions):
    return {tuple(a.run.cards) for a, _ in actions if isinstance(a, StartRun)}


class TestEnumeratePlayActions:
    def test_noop_first_and_unique(self):
        actions = enumerate_play_actions([], parse_cards("♣3,♣4,♣5,♦5,♥5"))
        assert actions[0] == (Noop(), 0)
        assert sum(1 for a, _ in actions if isinstance(a, Noop)) == 1

    def test_empty_hand_only_noop(self):
        assert enumerate_play_actions([], []) == [(Noop(), 0)]

    def test_start_runs_from_hand(self):
        hand = parse_cards("JK,♣2,♣5,♣7,♣9,♣K,♦6,♦8,♦9,♥10,♠6,♠K")
        runs = started_runs(enumerate_play_actions([], hand, 0))
        for expr in [
            "♣5,JK,♣7",
            "♣5,♣2,♣7",
            "♣7,JK,♣9",
            "♣7,♣2,♣9",
            "♦6,♣2,♦8",
            "♦6,JK,♦8",
            "JK,♦8,♦9",
            "♣2,♦8,♦9",
            "♦8,♦9,JK",
            "♦8,♦9,♣2",
        ]:
            assert tuple(parse_cards(expr)) in runs

    def test_start_run_delta_is_run_score(self):
        actions = enumerate_play_actions([], parse_cards("JK,♣5,♣7"))
        deltas = {tuple(a.run.cards): d for a, d in actions if isinstance(a, StartRun)}
        assert deltas[tuple(parse_cards("♣5,JK,♣7"))] == 40

    def test_start_group(self):
        actions = enumerate_play_actions([], parse_cards("♣5,♦5,♥5"))
        groups = [a.run for a, _ in actions if isinstance(a, StartRun)]
        assert len(groups) == 1
        assert groups[0].run_type == RunType.GROUP

    def test_duplicate_cards_do_not_duplicate_actions(self):
        actions = enumerate_play_actions([], parse_cards("♣3,♣4,♣5,♣5"))
        started = [a for a, _ in actions if isinstance(a, StartRun)]
        assert len(started) == len(set(started))

    def test_appends(self):
        runs = [seq("♣3,♣4,♣5")]
        actions = enumerate_play_actions(runs, parse_cards("♣2,♣6"))
        found = {a for a, _ in actions}
        assert AppendTop(0, tuple(parse_cards("♣6"))) in found
        assert AppendBottom(0, tuple(parse_cards("♣2"))) in found
        assert AppendBottom(0, tuple(parse_cards("♣6"))) not in found

    def test_append_delta(self):
        runs = [seq("♣3,♣4,♣5")]
        actions = dict(enumerate_play_actions(runs, parse_cards("♣6")))
        assert actions[AppendTop(0, tuple(parse_cards("♣6")))] == 5

    def test_replace_wildcard(self):
        runs = [seq("♣3,JK,♣5")]
        actions = dict(enumerate_play_actions(runs, parse_cards("♣4")))
        action = ReplaceWildcard(0, 1, parse_cards("♣4")[0])
        assert action in actions
        assert actions[action] == 5

    def test_no_replace_in_groups(self):
        runs = [build_group_run(parse_cards("♣5,♦5,JK"))]
        actions = enumerate_play_actions(runs, parse_cards("♥5"))
        assert not any(isinstance(a, ReplaceWildcard) for a, _ in actions)

    def test_moves_need_budget(self):
        runs = [seq("♣3,♣4,♣5,♣2")]
        without = enumerate_play_actions(runs, [], 0)
        with_budget = enumerate_play_actions(runs, [], 1)
        assert not any(isinstance(a, MoveCard) for a, _ in without)
        assert MoveCard(0, 3, 0) in {a for a, _ in with_budget}

    def test_unplayable_card_gives_only_noop(self):
        runs = [seq("JK,♥3,♥4")]
        actions = enumerate_play_actions(runs, parse_cards("♣5"), 1)
        assert actions == [(Noop(), 0)]

    def test_inputs_not_modified(self):
        runs = [seq("♣3,♣4,♣5")]
        hand = parse_cards("♣6,♣7,♦7,♥7")
        enumerate_play_actions(runs, hand, 1)
        assert hand == parse_cards("♣6,♣7,♦7,♥7")
        assert runs == [seq("♣3,♣4,♣5")]


class TestGenerateLegalMoves:
    def test_draw_phase(self):
        state = create_initial_state(seed=42)
        assert generate_legal_moves(state) == [DrawPile(), DrawOpen()]

    def test_play_phase_starts_with_noop(self):
        state = create_initial_state(seed=42)
        state.phase = GamePhase.PLAY
        moves = generate_legal_moves(state)
        assert moves[0] == Noop()

    def test_discard_phase(self):
        state = create_initial_state(seed=42)
        state.phase = GamePhase.DISCARD
        moves = generate_legal_moves(state)
        hand = state.current_player.hand
        assert all(isinstance(m, DiscardAction) for m in moves)
        assert {m.card for m in moves} == set(hand)
        assert len(moves) == len(set(hand))

    def test_finished(self):
        state = create_initial_state(seed=42)
        state.phase = GamePhase.FINISHED
        assert generate_legal_moves(state) == []
