"""Game session management for the web API."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from burraco_engine.executor import execute_move
from burraco_engine.move_generator import enumerate_play_actions, generate_legal_moves
from burraco_engine.moves import (
    AppendBottom,
    AppendTop,
    DiscardAction,
    MoveCard,
    ReplaceWildcard,
    StartRun,
)
from burraco_engine.state import GamePhase, create_initial_state
from strategies import create_strategy

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.moves import Move
    from burraco_engine.runs import Run
    from burraco_engine.state import MatchState
    from strategies.base import Strategy


class PlayerType(str, Enum):
    """Type of player."""
    HUMAN = "human"
    AI = "ai"


@dataclass
class SeatConfig:
    """Configuration for one seat in a game session."""
    player_type: PlayerType
    strategy_name: str | None = None  # None for the human seat


@dataclass
class GameSession:
    """An active game session."""

    id: str
    seats: list[SeatConfig]
    state: MatchState
    strategies: list[Strategy | None]
    created_at: datetime
    moves_allowed: int = 0  # MoveCard budget left in the current turn
    move_history: list[dict] = field(default_factory=list)

    @property
    def acting_seat(self) -> int:
        return self.state.player_turn

    @property
    def human_seat(self) -> int | None:
        for i, seat in enumerate(self.seats):
            if seat.player_type == PlayerType.HUMAN:
                return i
        return None

    @property
    def is_human_turn(self) -> bool:
        """Whether the human seat needs to act."""
        if self.state.is_finished:
            return False
        return self.seats[self.acting_seat].player_type == PlayerType.HUMAN

    @property
    def legal_moves(self) -> list[Move]:
        """Get legal moves for current state."""
        return generate_legal_moves(self.state, self.moves_allowed)

    def choose_ai_move(self) -> Move:
        """Ask the acting seat's strategy for its next move."""
        strategy = self.strategies[self.acting_seat]
        if strategy is None:
            raise ValueError(f"Seat {self.acting_seat} has no strategy")

        state = self.state
        match state.phase:
            case GamePhase.DRAW:
                return strategy.select_draw(state)
            case GamePhase.PLAY:
                actions = enumerate_play_actions(
                    state.current_team.played_runs,
                    state.current_player.hand,
                    self.moves_allowed,
                )
                return strategy.select_play(actions, state)
            case GamePhase.DISCARD:
                return strategy.select_discard(list(state.current_player.hand), state)
        raise ValueError("Game is already over")

    def execute_move(self, move: Move) -> MatchState:
        """Execute a move and update state.

        Raises:
            IllegalMoveError: If the move is not legal; the state is unchanged.
        """
        seat = self.acting_seat
        team_idx, team_player = self.state.current_team_player
        phase_before = self.state.phase
        execute_move(self.state, move)

        if phase_before == GamePhase.DRAW and self.state.phase == GamePhase.PLAY:
            self.moves_allowed = len(self.state.current_team.played_runs)
        elif isinstance(move, MoveCard):
            self.moves_allowed -= 1

        self.move_history.append({
            "round": self.state.round,
            "seat": seat,
            "team": team_idx,
            "team_player": team_player,
            "move": str(move),
            "move_type": move.move_type.name,
            "timestamp": datetime.now().isoformat(),
            "scoreboard": self.state.scoreboard(),
        })

        if self.state.is_finished:
            logger.info(f"Session {self.id} finished, winner team {self.state.winner}")
            for strategy in self.strategies:
                if strategy:
                    strategy.on_game_end(self.state, self.state.winner)
        return self.state

    def to_client_state(self, viewer: int | None = None) -> dict:
        """Convert match state to client-friendly format.

        Args:
            viewer: Seat whose hand is visible. None shows every hand.
        """
        state = self.state
        team_idx, team_player = state.current_team_player

        def seat_of(team: int, player: int) -> int:
            return state.player_team_idxs.index((team, player))

        return {
            "game_id": self.id,
            "phase": state.phase.name,
            "round": state.round,
            "acting_seat": self.acting_seat,
            "current_team": team_idx,
            "current_team_player": team_player,
            "human_seat": self.human_seat,
            "draw_pile_count": len(state.draw_pile),
            "open_pile": [_card_to_dict(c) for c in state.open_pile],
            "pots_left": int(bool(state.pot1)) + int(bool(state.pot2)),
            "scoreboard": state.scoreboard(),
            "winner": state.winner,
            "teams": [
                {
                    "index": t,
                    "has_reached_pot": team.has_reached_pot,
                    "has_used_pot": team.has_used_pot,
                    "runs": [_run_to_dict(r) for r in team.played_runs],
                    "players": [
                        {
                            "seat": seat_of(t, p),
                            "strategy": self.seats[seat_of(t, p)].strategy_name,
                            "hand": (
                                [_card_to_dict(c) for c in player.hand]
                                if viewer is None or seat_of(t, p) == viewer
                                else [{"hidden": True} for _ in player.hand]
                            ),
                            "hand_count": len(player.hand),
                        }
                        for p, player in enumerate(team.players)
                    ],
                }
                for t, team in enumerate(state.teams)
            ],
        }

    def moves_to_client(self, moves: list[Move]) -> list[dict]:
        """Convert moves to client-friendly format."""
        return [_move_to_dict(i, m) for i, m in enumerate(moves)]


def _card_to_dict(card: Card) -> dict:
    """Convert a Card to a dictionary."""
    return {
        "rank": card.rank.value,
        "rank_symbol": card.rank.symbol,
        "rank_name": card.rank.name,
        "suit": card.suit.value,
        "suit_symbol": card.suit.symbol,
        "suit_name": card.suit.name,
        "display": str(card),
        "point_value": card.point_value,
        "is_wildcard": card.is_wildcard,
    }


def _run_to_dict(run: Run) -> dict:
    return {
        "type": run.run_type.name,
        "cards": [_card_to_dict(c) for c in run.cards],
        "score": run.score,
        "is_burraco": run.is_burraco,
    }


def _move_to_dict(index: int, move: Move) -> dict:
    """Convert a Move to a dictionary."""
    base = {
        "index": index,
        "type": move.move_type.name,
        "description": str(move),
    }

    match move:
        case StartRun(run=run):
            base["run"] = _run_to_dict(run)
        case AppendTop(run_idx=run_idx, cards=cards) | AppendBottom(run_idx=run_idx, cards=cards):
            base["run_idx"] = run_idx
            base["cards"] = [_card_to_dict(c) for c in cards]
        case ReplaceWildcard(run_idx=run_idx, position=position, card=card):
            base["run_idx"] = run_idx
            base["position"] = position
            base["card"] = _card_to_dict(card)
        case MoveCard(run_idx=run_idx, from_idx=from_idx, to_idx=to_idx):
            base["run_idx"] = run_idx
            base["from_idx"] = from_idx
            base["to_idx"] = to_idx
        case DiscardAction(card=card):
            base["card"] = _card_to_dict(card)

    return base


class GameSessionManager:
    """Manages all active game sessions."""

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}

    def create_session(
        self,
        seats: list[SeatConfig],
        num_teams: int = 2,
        num_team_players: int = 2,
        seed: int | None = None,
        first_player: int | None = None,
    ) -> GameSession:
        """Create a new game session.

        Raises:
            ValueError: If the seats do not match the table size, more than one
                seat is human, or a strategy name is unknown.
        """
        num_seats = num_teams * num_team_players
        if len(seats) != num_seats:
            raise ValueError(f"Need {num_seats} seats, got {len(seats)}")
        if sum(1 for s in seats if s.player_type == PlayerType.HUMAN) > 1:
            raise ValueError("At most one seat can be human")

        strategies: list[Strategy | None] = []
        for i, seat in enumerate(seats):
            if seat.player_type == PlayerType.AI:
                if not seat.strategy_name:
                    raise ValueError(f"Seat {i} needs a strategy")
                strategies.append(
                    create_strategy(seat.strategy_name, seed=None if seed is None else seed + i)
                )
            else:
                strategies.append(None)

        state = create_initial_state(
            num_teams=num_teams,
            num_team_players=num_team_players,
            seed=seed,
            first_player=first_player,
        )

        session = GameSession(
            id=str(uuid.uuid4()),
            seats=list(seats),
            state=state,
            strategies=strategies,
            created_at=datetime.now(),
        )

        for i, strategy in enumerate(strategies):
            if strategy:
                strategy.on_game_start(state, i)

        self._sessions[session.id] = session
        logger.info(f"Created session {session.id} with {num_seats} seats, seed={seed}")
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        return [
            {
                "id": s.id,
                "created_at": s.created_at.isoformat(),
                "round": s.state.round,
                "phase": s.state.phase.name,
                "is_finished": s.state.is_finished,
                "winner": s.state.winner,
                "seats": [
                    {"type": seat.player_type.value, "strategy": seat.strategy_name}
                    for seat in s.seats
                ],
            }
            for s in self._sessions.values()
        ]

    async def run_ai_turn(self, session: GameSession) -> Move | None:
        """Run one AI step if an AI seat has to act.

        Returns the move made, or None if it is not an AI's turn.
        """
        if session.state.is_finished or session.is_human_turn:
            return None

        seat = session.acting_seat
        strategy = session.strategies[seat]
        if strategy is None:
            return None

        logger.info(
            f"AI turn: seat={seat}, strategy={strategy.name}, "
            f"phase={session.state.phase.name}"
        )
        start_time = time.time()

        try:
            loop = asyncio.get_running_loop()
            move = await loop.run_in_executor(None, session.choose_ai_move)
            logger.info(f"AI selected move in {time.time() - start_time:.2f}s: {move}")
        except Exception as e:
            logger.error(f"Strategy error on seat {seat}: {e}")
            move = session.legal_moves[0]

        session.execute_move(move)
        return move

    async def run_ai_turns_until_human(self, session: GameSession) -> list[Move]:
        """Run AI steps until it's the human's turn or the game ends."""
        results = []
        while not session.state.is_finished and not session.is_human_turn:
            move = await self.run_ai_turn(session)
            if move is None:
                break
            results.append(move)
            # Yield to the event loop between steps
            await asyncio.sleep(0)
        return results


# Global session manager instance
session_manager = GameSessionManager()
