"""Burraco card game engine."""

from burraco_engine.cards import Card, Rank, Suit, JOKER, format_cards, parse_cards
from burraco_engine.runs import AppendSide, IllegalRunError, Run, RunType
from burraco_engine.state import GamePhase, MatchState, Player, Team, create_initial_state
from burraco_engine.moves import (
    AppendBottom,
    AppendTop,
    DiscardAction,
    DrawAction,
    DrawOpen,
    DrawPile,
    Move,
    MoveCard,
    Noop,
    PlayAction,
    ReplaceWildcard,
    StartRun,
)
from burraco_engine.executor import IllegalMoveError, discard, draw, execute_move, play
from burraco_engine.move_generator import enumerate_play_actions, generate_legal_moves

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "JOKER",
    "format_cards",
    "parse_cards",
    "AppendSide",
    "IllegalRunError",
    "Run",
    "RunType",
    "GamePhase",
    "MatchState",
    "Player",
    "Team",
    "create_initial_state",
    "Move",
    "DrawAction",
    "DrawPile",
    "DrawOpen",
    "PlayAction",
    "StartRun",
    "AppendTop",
    "AppendBottom",
    "ReplaceWildcard",
    "MoveCard",
    "Noop",
    "DiscardAction",
    "IllegalMoveError",
    "draw",
    "play",
    "discard",
    "execute_move",
    "enumerate_play_actions",
    "generate_legal_moves",
]
