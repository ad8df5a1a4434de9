"""Game API routes."""

from __future__ import annotations

import json
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from burraco_engine.executor import IllegalMoveError
from strategies import AVAILABLE_STRATEGIES
from web.api.session_manager import (
    GameSession,
    PlayerType,
    SeatConfig,
    session_manager,
)

router = APIRouter(tags=["games"])


# Request/Response models
class SeatRequest(BaseModel):
    """Seat configuration for game creation."""

    player_type: PlayerType = Field(PlayerType.AI, description="'human' or 'ai'")
    strategy: str | None = Field(None, description="Strategy name for AI seats")


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    num_teams: int = Field(2, ge=1, le=4, description="Number of teams")
    num_team_players: int = Field(2, ge=1, le=2, description="Players per team")
    seats: list[SeatRequest] | None = Field(
        None,
        description="One entry per seat (T0P0, T1P0, ...). "
        "Defaults to a human on seat 0 and heuristic AIs elsewhere.",
    )
    seed: int | None = Field(None, description="Random seed for reproducibility")
    first_player: int | None = Field(None, description="Starting seat")
    watch_mode: bool = Field(False, description="If True, don't auto-run AI turns")


class MoveRequest(BaseModel):
    """Request to make a move."""

    move_index: int = Field(..., description="Index of the move in legal_moves list")


class StrategyInfo(BaseModel):
    """Information about an available strategy."""

    name: str
    description: str


def _get_session_or_404(game_id: str) -> GameSession:
    session = session_manager.get_session(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _session_payload(session: GameSession, viewer: int | None) -> dict:
    if viewer is None:
        viewer = session.human_seat
    return {
        "state": session.to_client_state(viewer=viewer),
        "legal_moves": session.moves_to_client(session.legal_moves),
        "is_human_turn": session.is_human_turn,
    }


# REST Endpoints


@router.get("/strategies", response_model=list[StrategyInfo])
async def list_strategies():
    """List available AI strategies."""
    return [
        StrategyInfo(name=name, description=desc)
        for name, desc in AVAILABLE_STRATEGIES.items()
    ]


@router.post("/games", response_model=dict)
async def create_game(request: CreateGameRequest):
    """Create a new game session."""
    num_seats = request.num_teams * request.num_team_players
    if request.seats is None:
        seats = [SeatConfig(PlayerType.HUMAN)] + [
            SeatConfig(PlayerType.AI, "heuristic") for _ in range(num_seats - 1)
        ]
    else:
        seats = [SeatConfig(s.player_type, s.strategy) for s in request.seats]

    try:
        session = session_manager.create_session(
            seats,
            num_teams=request.num_teams,
            num_team_players=request.num_team_players,
            seed=request.seed,
            first_player=request.first_player,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # If AI goes first, run AI turns until the human has to act
    if not request.watch_mode and not session.is_human_turn:
        await session_manager.run_ai_turns_until_human(session)

    return {"game_id": session.id, **_session_payload(session, None)}


@router.get("/games", response_model=list[dict])
async def list_games():
    """List all active game sessions."""
    return session_manager.list_sessions()


@router.get("/games/{game_id}")
async def get_game(game_id: str, viewer: int | None = None):
    """Get current state of a game."""
    session = _get_session_or_404(game_id)
    return {
        **_session_payload(session, viewer),
        "move_history": session.move_history,
    }


@router.get("/games/{game_id}/moves")
async def get_legal_moves(game_id: str):
    """Get legal moves for current game state."""
    session = _get_session_or_404(game_id)
    return {"moves": session.moves_to_client(session.legal_moves)}


@router.post("/games/{game_id}/move")
async def make_move(game_id: str, request: MoveRequest):
    """Make a move for the human seat."""
    session = _get_session_or_404(game_id)

    if session.state.is_finished:
        raise HTTPException(status_code=400, detail="Game is already over")

    if not session.is_human_turn:
        raise HTTPException(status_code=400, detail="Not your turn")

    legal_moves = session.legal_moves
    if request.move_index < 0 or request.move_index >= len(legal_moves):
        raise HTTPException(status_code=400, detail="Invalid move index")

    try:
        session.execute_move(legal_moves[request.move_index])
    except IllegalMoveError as e:
        raise HTTPException(status_code=400, detail=f"Move execution failed: {e}")

    # Run AI turns after human move
    if not session.state.is_finished and not session.is_human_turn:
        await session_manager.run_ai_turns_until_human(session)

    return {
        **_session_payload(session, None),
        "move_history": session.move_history,
    }


@router.post("/games/{game_id}/advance")
async def advance_game(game_id: str):
    """Run a single AI step (for watch mode)."""
    session = _get_session_or_404(game_id)

    if session.state.is_finished:
        raise HTTPException(status_code=400, detail="Game is already over")
    if session.is_human_turn:
        raise HTTPException(status_code=400, detail="Waiting for the human seat")

    move = await session_manager.run_ai_turn(session)
    return {
        "move": str(move) if move else None,
        **_session_payload(session, None),
    }


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if session_manager.delete_session(game_id):
        return {"deleted": True}
    raise HTTPException(status_code=404, detail="Game not found")


@router.get("/replays")
async def list_replays(limit: int = 50):
    """List saved simulation logs."""
    logs_dir = Path("logs/games")
    if not logs_dir.exists():
        return {"replays": []}

    replays = []
    for date_dir in sorted(logs_dir.iterdir(), reverse=True):
        if not date_dir.is_dir():
            continue
        for game_file in sorted(date_dir.glob("game_*.json"), reverse=True):
            if len(replays) >= limit:
                break
            with open(game_file, encoding="utf-8") as f:
                data = json.load(f)
            replays.append({
                "game_id": data.get("game_id"),
                "timestamp": data.get("timestamp"),
                "player_strategies": data.get("player_strategies"),
                "result": data.get("result"),
                "path": str(game_file),
            })

    return {"replays": replays}


@router.get("/replays/{game_id}")
async def get_replay(game_id: str):
    """Get a saved simulation log."""
    logs_dir = Path("logs/games")
    if not logs_dir.exists():
        raise HTTPException(status_code=404, detail="Replay not found")

    for date_dir in logs_dir.iterdir():
        if not date_dir.is_dir():
            continue
        game_file = date_dir / f"game_{game_id}.json"
        if game_file.exists():
            with open(game_file, encoding="utf-8") as f:
                return json.load(f)

    raise HTTPException(status_code=404, detail="Replay not found")
