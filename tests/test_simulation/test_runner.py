"""Tests for the match runner."""

import json

import pytest

from simulation.runner import (
    GameRunner,
    MatchConfig,
    run_batch,
    save_game_log,
    win_counts,
)
from strategies import DumbStrategy, GreedyStrategy, HeuristicStrategy, RandomStrategy


def four_seats():
    return [HeuristicStrategy(), GreedyStrategy(), DumbStrategy(), RandomStrategy(seed=1)]


class TestGameRunner:
    def test_game_finishes_with_winner(self):
        runner = GameRunner(four_seats(), log_moves=False)
        result, log = runner.run_game(seed=42)
        assert log is None
        assert result.winner in (0, 1)
        assert len(result.final_scores) == 2
        assert result.move_count > 0
        assert result.player_strategies == ["Heuristic", "Greedy", "Dumb", "Random"]

    def test_winner_has_best_score(self):
        runner = GameRunner(four_seats(), log_moves=False)
        result, _ = runner.run_game(seed=7)
        assert result.final_scores[result.winner] == max(result.final_scores)

    def test_game_log(self):
        runner = GameRunner(four_seats(), log_moves=True)
        result, log = runner.run_game(seed=3, first_player=0)
        assert log is not None
        assert log.result is result
        assert len(log.moves) == result.move_count
        assert log.moves[0].player == 0
        assert log.moves[0].move_type in ("DRAW_PILE", "DRAW_OPEN")
        assert log.initial_state["player_turn"] == 0

    def test_two_players(self):
        runner = GameRunner(
            [GreedyStrategy(), HeuristicStrategy()],
            num_teams=2,
            num_team_players=1,
            log_moves=False,
        )
        result, _ = runner.run_game(seed=11)
        assert result.winner in (0, 1)

    def test_max_rounds_aborts(self):
        runner = GameRunner(four_seats(), max_rounds=1, log_moves=False)
        result, _ = runner.run_game(seed=5)
        assert result.winner is None
        assert result.rounds == 1

    def test_wrong_number_of_strategies(self):
        with pytest.raises(ValueError):
            GameRunner([DumbStrategy()])

    def test_hooks_called(self):
        class Recording(DumbStrategy):
            def __init__(self):
                self.started = None
                self.ended = False

            def on_game_start(self, state, player_index):
                self.started = player_index

            def on_game_end(self, state, winner):
                self.ended = True

        seats = [Recording() for _ in range(4)]
        GameRunner(seats, log_moves=False).run_game(seed=1)
        assert [s.started for s in seats] == [0, 1, 2, 3]
        assert all(s.ended for s in seats)


class TestBatch:
    def test_run_batch(self):
        results = run_batch([DumbStrategy(), GreedyStrategy()] * 2, num_games=3, start_seed=10)
        assert len(results) == 3
        assert [r.seed for r in results] == [10, 11, 12]

    def test_win_counts(self):
        results = run_batch([DumbStrategy(), GreedyStrategy()] * 2, num_games=3)
        counts = win_counts(results, num_teams=2)
        assert sum(counts.values()) == 3
        assert set(counts) == {0, 1, None}


class TestSaveGameLog:
    def test_writes_json(self, tmp_path):
        runner = GameRunner(four_seats(), log_moves=True)
        result, log = runner.run_game(seed=2)
        path = save_game_log(log, base_dir=str(tmp_path))

        assert path.exists()
        assert path.parent.name == log.timestamp[:10]
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["game_id"] == result.game_id
        assert data["result"]["winner"] == result.winner
        assert len(data["moves"]) == result.move_count


class TestMatchConfig:
    def test_round_trip(self):
        config = MatchConfig(strategies=["dumb", "greedy"], num_team_players=1, seed=4)
        assert MatchConfig.from_dict(config.to_dict()) == config

    def test_single_name_fills_all_seats(self):
        strategies = MatchConfig(strategies=["greedy"]).build_strategies()
        assert len(strategies) == 4
        assert all(isinstance(s, GreedyStrategy) for s in strategies)

    def test_wrong_seat_count(self):
        with pytest.raises(ValueError):
            MatchConfig(strategies=["dumb", "greedy", "random"]).build_strategies()

    def test_build_runner(self):
        runner = MatchConfig(strategies=["heuristic"], max_rounds=50, log_moves=False).build_runner()
        result, log = runner.run_game(seed=8)
        assert log is None
        assert result.rounds <= 50
