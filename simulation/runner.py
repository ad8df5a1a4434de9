"""Game runner for Burraco simulations."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

from burraco_engine.executor import execute_move
from burraco_engine.move_generator import enumerate_play_actions
from burraco_engine.moves import MoveCard
from burraco_engine.state import GamePhase, create_initial_state

if TYPE_CHECKING:
    from burraco_engine.moves import Move
    from burraco_engine.state import MatchState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    winner: int | None  # Winning team, None if aborted
    rounds: int
    final_scores: list[int]
    player_strategies: list[str]
    seed: int | None
    duration_ms: float
    move_count: int


@dataclass
class MoveRecord:
    """Record of a single move."""

    round: int
    player: int
    team: int
    move: str
    move_type: str
    state_after: dict


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: list[str]
    initial_state: dict
    moves: list[MoveRecord] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs Burraco matches with one strategy per seat."""

    def __init__(
        self,
        strategies: Sequence[Strategy],
        num_teams: int = 2,
        num_team_players: int = 2,
        max_rounds: int = 500,
        log_moves: bool = True,
    ):
        """Initialize the game runner.

        Args:
            strategies: One strategy per seat, in seat order (T0P0, T1P0, ...).
            num_teams: Number of teams.
            num_team_players: Players per team.
            max_rounds: Rounds after which the match is aborted without winner.
            log_moves: Whether to log individual moves.
        """
        if len(strategies) != num_teams * num_team_players:
            raise ValueError(
                f"Need {num_teams * num_team_players} strategies, got {len(strategies)}"
            )
        self.strategies = list(strategies)
        self.num_teams = num_teams
        self.num_team_players = num_team_players
        self.max_rounds = max_rounds
        self.log_moves = log_moves

    def run_game(
        self, seed: int | None = None, first_player: int | None = None
    ) -> tuple[GameResult, GameLog | None]:
        """Run a single match.

        Args:
            seed: Random seed for reproducibility.
            first_player: Optional starting seat.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())

        state = create_initial_state(
            num_teams=self.num_teams,
            num_team_players=self.num_team_players,
            seed=seed,
            first_player=first_player,
        )
        total_cards = state.cards_total()
        names = [s.name for s in self.strategies]

        for i, strategy in enumerate(self.strategies):
            strategy.on_game_start(state, i)

        game_log = None
        if self.log_moves:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=names,
                initial_state=state.to_dict(),
            )

        logger.debug(f"Game {game_id} started, seed={seed}, players={names}")
        move_count = 0

        def apply(move: Move) -> None:
            nonlocal move_count
            player = state.player_turn
            team = state.current_team_idx
            execute_move(state, move)
            move_count += 1
            assert state.cards_total() == total_cards, (
                f"Card count changed to {state.cards_total()} after {move}"
            )
            if game_log:
                game_log.moves.append(
                    MoveRecord(
                        round=state.round,
                        player=player,
                        team=team,
                        move=str(move),
                        move_type=move.move_type.name,
                        state_after=state.to_dict(),
                    )
                )

        while not state.is_finished:
            if state.round >= self.max_rounds:
                logger.warning(f"Game {game_id} aborted after {state.round} rounds")
                break
            self._play_turn(state, self.strategies[state.player_turn], apply)

        duration_ms = (time.perf_counter() - start_time) * 1000

        result = GameResult(
            game_id=game_id,
            winner=state.winner,
            rounds=state.round,
            final_scores=state.scoreboard(),
            player_strategies=names,
            seed=seed,
            duration_ms=duration_ms,
            move_count=move_count,
        )

        if game_log:
            game_log.result = result

        logger.info(
            f"Game {game_id} finished: winner={state.winner}, "
            f"scores={result.final_scores}, rounds={state.round}"
        )

        for strategy in self.strategies:
            strategy.on_game_end(state, state.winner)

        return result, game_log

    def _play_turn(self, state: MatchState, strategy: Strategy, apply) -> None:
        """Draw, play until the strategy stops, then discard."""
        apply(strategy.select_draw(state))
        if state.phase != GamePhase.PLAY:
            return

        # Each run on the table may be rearranged once per turn
        moves_allowed = len(state.current_team.played_runs)
        while state.phase == GamePhase.PLAY:
            actions = enumerate_play_actions(
                state.current_team.played_runs,
                state.current_player.hand,
                moves_allowed,
            )
            action = strategy.select_play(actions, state)
            apply(action)
            if isinstance(action, MoveCard):
                moves_allowed -= 1

        if state.phase == GamePhase.DISCARD:
            apply(strategy.select_discard(list(state.current_player.hand), state))


def save_game_log(log: GameLog, base_dir: str = "logs/games") -> Path:
    """Save a game log to disk.

    Args:
        log: Game log to save.
        base_dir: Base directory for logs.

    Returns:
        Path to the saved file.
    """
    date_str = log.timestamp[:10]  # YYYY-MM-DD
    dir_path = Path(base_dir) / date_str
    dir_path.mkdir(parents=True, exist_ok=True)

    file_path = dir_path / f"game_{log.game_id}.json"

    data = {
        "game_id": log.game_id,
        "timestamp": log.timestamp,
        "seed": log.seed,
        "player_strategies": log.player_strategies,
        "initial_state": log.initial_state,
        "moves": [
            {
                "round": m.round,
                "player": m.player,
                "team": m.team,
                "move": m.move,
                "move_type": m.move_type,
                "state_after": m.state_after,
            }
            for m in log.moves
        ],
        "result": {
            "winner": log.result.winner,
            "rounds": log.result.rounds,
            "final_scores": log.result.final_scores,
            "duration_ms": log.result.duration_ms,
            "move_count": log.result.move_count,
        }
        if log.result
        else None,
    }

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    return file_path


def run_batch(
    strategies: Sequence[Strategy],
    num_games: int,
    start_seed: int = 0,
    num_teams: int = 2,
    num_team_players: int = 2,
    log_moves: bool = False,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        strategies: One strategy per seat.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        num_teams: Number of teams.
        num_team_players: Players per team.
        log_moves: Whether to log moves (slower).

    Returns:
        List of game results.
    """
    runner = GameRunner(
        strategies,
        num_teams=num_teams,
        num_team_players=num_team_players,
        log_moves=log_moves,
    )
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(seed=start_seed + i)
        results.append(result)

    return results


def win_counts(results: Sequence[GameResult], num_teams: int = 2) -> dict[int | None, int]:
    """Count wins per team; aborted games are counted under None."""
    counts: dict[int | None, int] = {team: 0 for team in range(num_teams)}
    counts[None] = 0
    for result in results:
        counts[result.winner] = counts.get(result.winner, 0) + 1
    return counts


@dataclass
class MatchConfig:
    """Configuration for a simulated match."""

    strategies: list[str]
    num_teams: int = 2
    num_team_players: int = 2
    seed: int | None = None
    max_rounds: int = 500
    log_moves: bool = True

    def build_strategies(self) -> list[Strategy]:
        """Instantiate the configured strategies, one per seat."""
        from strategies import create_strategy

        expected = self.num_teams * self.num_team_players
        names = self.strategies
        if len(names) == 1:
            names = names * expected
        if len(names) != expected:
            raise ValueError(f"Need 1 or {expected} strategy names, got {len(names)}")
        return [
            create_strategy(name, seed=None if self.seed is None else self.seed + i)
            for i, name in enumerate(names)
        ]

    def build_runner(self) -> GameRunner:
        return GameRunner(
            self.build_strategies(),
            num_teams=self.num_teams,
            num_team_players=self.num_team_players,
            max_rounds=self.max_rounds,
            log_moves=self.log_moves,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategies": list(self.strategies),
            "num_teams": self.num_teams,
            "num_team_players": self.num_team_players,
            "seed": self.seed,
            "max_rounds": self.max_rounds,
            "log_moves": self.log_moves,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchConfig":
        return cls(
            strategies=list(data["strategies"]),
            num_teams=data.get("num_teams", 2),
            num_team_players=data.get("num_team_players", 2),
            seed=data.get("seed"),
            max_rounds=data.get("max_rounds", 500),
            log_moves=data.get("log_moves", True),
        )
