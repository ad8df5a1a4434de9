"""Greedy strategy maximizing the immediate score delta."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from burraco_engine.moves import DiscardAction
from strategies.base import Strategy, alternating_draw

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.moves import DrawAction, PlayAction
    from burraco_engine.state import MatchState


class GreedyStrategy(Strategy):
    """Always plays the action with the highest score delta.

    Ties go to the earliest enumerated action, so Noop is only chosen when
    nothing scores more than zero.
    """

    @property
    def name(self) -> str:
        return "Greedy"

    def select_draw(self, state: MatchState) -> DrawAction:
        return alternating_draw(state)

    def select_play(
        self, actions: list[tuple[PlayAction, int]], state: MatchState
    ) -> PlayAction:
        if not actions:
            raise ValueError("No play actions available")
        best_action, best_delta = actions[0]
        for action, delta in actions[1:]:
            if delta > best_delta:
                best_action, best_delta = action, delta
        return best_action

    def select_discard(self, hand: Sequence[Card], state: MatchState) -> DiscardAction:
        if not hand:
            raise ValueError("Cannot discard from an empty hand")
        return DiscardAction(hand[0])
