"""Legal move generation for Burraco."""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING, Sequence

from burraco_engine.cards import Card, Rank
from burraco_engine.moves import (
    AppendBottom,
    AppendTop,
    DiscardAction,
    DrawOpen,
    DrawPile,
    Move,
    MoveCard,
    Noop,
    PlayAction,
    ReplaceWildcard,
    StartRun,
)
from burraco_engine.runs import (
    AppendSide,
    IllegalRunError,
    Run,
    RunType,
    build_group_run,
    build_sequence_run,
)
from burraco_engine.state import GamePhase

if TYPE_CHECKING:
    from burraco_engine.state import MatchState


def enumerate_play_actions(
    team_runs: Sequence[Run],
    hand: Sequence[Card],
    moves_allowed: int = 0,
) -> list[tuple[PlayAction, int]]:
    """Enumerate every legal play action with its score delta.

    Args:
        team_runs: Runs already played by the acting team.
        hand: Cards in the acting player's hand.
        moves_allowed: Remaining budget of MoveCard actions this turn.

    Returns:
        ``(action, score_delta)`` pairs, starting with ``(Noop(), 0)``.
        Neither the hand nor the runs are modified.
    """
    actions: list[tuple[PlayAction, int]] = [(Noop(), 0)]
    actions.extend(_start_sequence_actions(hand))
    actions.extend(_start_group_actions(hand))
    actions.extend(_append_actions(team_runs, hand))
    actions.extend(_replace_wildcard_actions(team_runs, hand))
    if moves_allowed > 0:
        actions.extend(_move_card_actions(team_runs))

    # Equal cards in hand produce the same action more than once
    unique: dict[PlayAction, int] = {}
    for action, delta in actions:
        unique.setdefault(action, delta)
    return list(unique.items())


def _start_sequence_actions(hand: Sequence[Card]) -> list[tuple[PlayAction, int]]:
    actions: list[tuple[PlayAction, int]] = []
    size = len(hand)
    for i in range(size):
        card1 = hand[i]
        for j in range(size):
            if i == j:
                continue
            card2 = hand[j]

            if not card1.is_wildcard and not card2.is_wildcard:
                if card1.suit != card2.suit:
                    continue
                if card1.rank is not Rank.ACE and card1.rank.index != card2.rank.index - 1:
                    continue

            for k in range(size):
                if k == i or k == j:
                    continue
                try:
                    run = build_sequence_run((card1, card2, hand[k]))
                except IllegalRunError:
                    continue
                actions.append((StartRun(run), run.score))
    return actions


def _start_group_actions(hand: Sequence[Card]) -> list[tuple[PlayAction, int]]:
    actions: list[tuple[PlayAction, int]] = []
    # Groups are canonicalized on construction, so card order is irrelevant
    for triple in combinations(hand, 3):
        if len({c.rank for c in triple if not c.is_wildcard}) > 1:
            continue
        try:
            run = build_group_run(triple)
        except IllegalRunError:
            continue
        actions.append((StartRun(run), run.score))
    return actions


def _append_actions(
    team_runs: Sequence[Run], hand: Sequence[Card]
) -> list[tuple[PlayAction, int]]:
    actions: list[tuple[PlayAction, int]] = []
    for card in hand:
        cards = (card,)
        for run_idx, run in enumerate(team_runs):
            for side, action_type in (
                (AppendSide.TOP, AppendTop),
                (AppendSide.BOTTOM, AppendBottom),
            ):
                try:
                    new_run = run.append(cards, side)
                except IllegalRunError:
                    continue
                actions.append((action_type(run_idx, cards), new_run.score - run.score))
    return actions


def _replace_wildcard_actions(
    team_runs: Sequence[Run], hand: Sequence[Card]
) -> list[tuple[PlayAction, int]]:
    actions: list[tuple[PlayAction, int]] = []
    for run_idx, run in enumerate(team_runs):
        if run.run_type == RunType.GROUP:
            continue
        for card in hand:
            if card.is_joker:
                continue
            for position in run.wildcard_positions:
                try:
                    new_run = run.replace_wildcard(position, card)
                except IllegalRunError:
                    continue
                actions.append(
                    (ReplaceWildcard(run_idx, position, card), new_run.score - run.score)
                )
    return actions


def _move_card_actions(team_runs: Sequence[Run]) -> list[tuple[PlayAction, int]]:
    actions: list[tuple[PlayAction, int]] = []
    for run_idx, run in enumerate(team_runs):
        if run.run_type == RunType.GROUP:
            continue
        size = len(run.cards)
        for from_idx, card in enumerate(run.cards):
            if not card.is_wildcard and card.rank is not Rank.ACE:
                continue
            for to_idx in range(size):
                if to_idx == from_idx:
                    continue
                try:
                    new_run = run.move_card(from_idx, to_idx)
                except IllegalRunError:
                    continue
                actions.append(
                    (MoveCard(run_idx, from_idx, to_idx), new_run.score - run.score)
                )
    return actions


def generate_legal_moves(state: MatchState, moves_allowed: int = 0) -> list[Move]:
    """Generate all legal moves for the current player and phase.

    Args:
        state: Current match state.
        moves_allowed: Remaining MoveCard budget for the play phase.

    Returns:
        List of all legal moves, empty once the match is finished.
    """
    match state.phase:
        case GamePhase.DRAW:
            return [DrawPile(), DrawOpen()]
        case GamePhase.PLAY:
            return [
                action
                for action, _ in enumerate_play_actions(
                    state.current_team.played_runs,
                    state.current_player.hand,
                    moves_allowed,
                )
            ]
        case GamePhase.DISCARD:
            return [DiscardAction(card) for card in dict.fromkeys(state.current_player.hand)]
        case GamePhase.FINISHED:
            return []

    return []
