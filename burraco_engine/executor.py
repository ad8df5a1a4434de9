"""Move execution for Burraco.

Every transition validates the whole move before touching the state, so a
rejected move leaves the match exactly as it was.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Callable, Iterable

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
from burraco_engine.runs import AppendSide, IllegalRunError, Run, RunType
from burraco_engine.state import GamePhase, MatchState

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.state import Player, Team

logger = logging.getLogger(__name__)


class IllegalMoveError(Exception):
    """Raised when an illegal move is attempted."""

    pass


class WrongPhaseError(IllegalMoveError):
    """The move does not belong to the current phase."""


class CardsNotInHandError(IllegalMoveError):
    """The move uses cards the active player does not hold."""


class RunIndexError(IllegalMoveError):
    """The move refers to a run the team has not played."""


def execute_move(state: MatchState, move: Move) -> None:
    """Apply any move to the state in place.

    Args:
        state: Current match state.
        move: Move to execute.

    Raises:
        IllegalMoveError: If the move is not legal. The state is unchanged.
    """
    match move:
        case DrawAction():
            draw(state, move)
        case PlayAction():
            play(state, move)
        case DiscardAction():
            discard(state, move)
        case _:
            raise IllegalMoveError(f"Unknown move type: {type(move)}")


def draw(state: MatchState, action: DrawAction) -> None:
    """Draw phase: take the open pile or the top card of the closed pile.

    The match ends as soon as the closed pile is empty.
    """
    _require_phase(state, GamePhase.DRAW, action)
    player = state.current_player

    match action:
        case DrawOpen():
            taken = list(state.open_pile)
            state.open_pile.clear()
        case DrawPile():
            if not state.draw_pile:
                raise IllegalMoveError("Draw pile is empty")
            taken = [state.draw_pile.pop()]
        case _:
            raise IllegalMoveError(f"Unknown draw action: {type(action)}")

    player.hand.extend(taken)
    player.hand.sort()

    if not state.draw_pile:
        logger.debug("Draw pile exhausted")
        _finish(state)
    else:
        state.phase = GamePhase.PLAY


def play(state: MatchState, action: PlayAction) -> None:
    """Play phase: apply one meld action, or end the phase with Noop."""
    _require_phase(state, GamePhase.PLAY, action)
    team = state.current_team
    player = state.current_player

    match action:
        case Noop():
            state.phase = GamePhase.DISCARD
            return
        case StartRun(run=run):
            _require_in_hand(run.cards, player)
            _remove_from_hand(player, run.cards)
            team.played_runs.append(run)
        case AppendTop(run_idx=run_idx, cards=cards):
            _require_in_hand(cards, player)
            run = _get_run(team, run_idx)
            new_run = _rebuild(run.append, cards, AppendSide.TOP)
            _remove_from_hand(player, cards)
            team.played_runs[run_idx] = new_run
        case AppendBottom(run_idx=run_idx, cards=cards):
            _require_in_hand(cards, player)
            run = _get_run(team, run_idx)
            new_run = _rebuild(run.append, cards, AppendSide.BOTTOM)
            _remove_from_hand(player, cards)
            team.played_runs[run_idx] = new_run
        case ReplaceWildcard(run_idx=run_idx, position=position, card=card):
            _require_in_hand((card,), player)
            run = _get_run(team, run_idx)
            new_run = _rebuild(run.replace_wildcard, position, card)
            _remove_from_hand(player, (card,))
            team.played_runs[run_idx] = new_run
        case MoveCard(run_idx=run_idx, from_idx=from_idx, to_idx=to_idx):
            run = _get_run(team, run_idx)
            team.played_runs[run_idx] = _rebuild(run.move_card, from_idx, to_idx)
        case _:
            raise IllegalMoveError(f"Unknown play action: {type(action)}")

    team.played_runs.sort(key=lambda r: (r.run_type != RunType.SEQUENCE, len(r.cards)))

    if not player.hand:
        # The pot taken here can only be played from the next turn on
        _resolve_pot(state, flying=False)


def discard(state: MatchState, action: DiscardAction) -> None:
    """Discard phase: put a card on the open pile and pass the turn."""
    _require_phase(state, GamePhase.DISCARD, action)
    player = state.current_player

    if action.card not in player.hand:
        raise CardsNotInHandError(f"Cannot discard card not in hand: {action.card}")

    player.hand.remove(action.card)
    state.open_pile.append(action.card)

    if not player.hand:
        _resolve_pot(state, flying=True)
        return

    state.phase = GamePhase.DRAW
    _advance_turn(state)


def _require_phase(state: MatchState, phase: GamePhase, move: Move) -> None:
    if state.phase != phase:
        raise WrongPhaseError(f"{move} invalid when phase is: {state.phase.name}")


def _require_in_hand(cards: Iterable[Card], player: Player) -> None:
    needed = Counter(cards)
    held = Counter(player.hand)
    missing = [card for card, count in needed.items() if held[card] < count]
    if missing:
        raise CardsNotInHandError(
            f"Cannot place cards not in hand: {', '.join(str(c) for c in missing)}"
        )


def _remove_from_hand(player: Player, cards: Iterable[Card]) -> None:
    for card in cards:
        assert card in player.hand, f"{card} vanished from hand after validation"
        player.hand.remove(card)


def _get_run(team: Team, run_idx: int) -> Run:
    if not 0 <= run_idx < len(team.played_runs):
        raise RunIndexError(f"Non-existing run index: {run_idx}")
    return team.played_runs[run_idx]


def _rebuild(method: Callable[..., Run], *args) -> Run:
    try:
        return method(*args)
    except IllegalRunError as e:
        raise IllegalMoveError(str(e)) from e


def _resolve_pot(state: MatchState, flying: bool) -> None:
    """Handle the active player running out of cards.

    A team that has not taken a pot yet takes pot1, or pot2 when pot1 is
    gone. Otherwise the match is over.
    """
    team = state.current_team
    player = state.current_player

    if not team.has_reached_pot:
        pot = state.pot1 if state.pot1 else state.pot2
        if pot:
            player.hand.extend(pot)
            pot.clear()
            player.hand.sort()
            team.has_reached_pot = True
            logger.debug(
                f"Team {state.current_team_idx} takes a pot "
                f"({'flying' if flying else 'after play'})"
            )
            # Flying pot: same player continues with a new draw
            state.phase = GamePhase.DRAW if flying else GamePhase.DISCARD
            return
    else:
        team.has_used_pot = True

    _finish(state)


def _advance_turn(state: MatchState) -> None:
    state.player_turn = (state.player_turn + 1) % state.num_players
    if state.player_turn == state.first_player:
        state.round += 1


def _finish(state: MatchState) -> None:
    state.winner = state.winning_team()
    state.phase = GamePhase.FINISHED
    logger.info(f"Match finished, winner team {state.winner}, scores {state.scoreboard()}")
