"""Heuristic strategy built on a fixed preference over action kinds.

Priorities:
1. Replace wildcards in own runs (frees the wildcard for later)
2. Start sequences, then groups
3. Extend existing runs
4. Stop playing (Noop)
5. Move cards inside runs only as a last resort

Draws the open pile when one of its cards enables new actions, and
discards cards that do not help the next team extend its runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from burraco_engine.move_generator import enumerate_play_actions
from burraco_engine.moves import (
    AppendBottom,
    AppendTop,
    DiscardAction,
    DrawOpen,
    MoveCard,
    Noop,
    ReplaceWildcard,
    StartRun,
)
from burraco_engine.runs import RunType
from strategies.base import Strategy, alternating_draw

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.moves import DrawAction, PlayAction
    from burraco_engine.state import MatchState


class HeuristicStrategy(Strategy):
    """Strategy ranking play actions by kind, then by score delta."""

    @property
    def name(self) -> str:
        return "Heuristic"

    def select_draw(self, state: MatchState) -> DrawAction:
        """Take the open pile if any of its cards adds a play option."""
        runs = state.current_team.played_runs
        hand = list(state.current_player.hand)
        actions_now = len(enumerate_play_actions(runs, hand))

        for card in state.open_pile:
            if len(enumerate_play_actions(runs, hand + [card])) > actions_now:
                return DrawOpen()

        return alternating_draw(state)

    def select_play(
        self, actions: list[tuple[PlayAction, int]], state: MatchState
    ) -> PlayAction:
        if not actions:
            raise ValueError("No play actions available")
        ranked = sorted(actions, key=lambda pair: (self._preference(pair[0]), pair[1]))
        return ranked[0][0]

    def select_discard(self, hand: Sequence[Card], state: MatchState) -> DiscardAction:
        """Discard the first card that gives the next team nothing to play."""
        if not hand:
            raise ValueError("Cannot discard from an empty hand")

        next_team = (state.current_team_idx + 1) % state.num_teams
        other_runs = state.teams[next_team].played_runs
        baseline = len(enumerate_play_actions(other_runs, []))

        for card in hand:
            if len(enumerate_play_actions(other_runs, [card])) == baseline:
                return DiscardAction(card)

        return DiscardAction(hand[0])

    def _preference(self, action: PlayAction) -> int:
        """Rank an action kind (lower is better)."""
        match action:
            case ReplaceWildcard():
                return 0
            case StartRun(run=run) if run.run_type == RunType.SEQUENCE:
                return 10
            case StartRun():
                return 15
            case AppendTop() | AppendBottom():
                return 20
            case Noop():
                return 30
            case MoveCard():
                return 999
        return 500
