"""Deterministic strategy that always takes the simplest choice."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from burraco_engine.moves import DiscardAction
from strategies.base import Strategy, alternating_draw

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.moves import DrawAction, PlayAction
    from burraco_engine.state import MatchState


class DumbStrategy(Strategy):
    """Plays the last enumerated action and discards the first card in hand."""

    @property
    def name(self) -> str:
        return "Dumb"

    def select_draw(self, state: MatchState) -> DrawAction:
        return alternating_draw(state)

    def select_play(
        self, actions: list[tuple[PlayAction, int]], state: MatchState
    ) -> PlayAction:
        if not actions:
            raise ValueError("No play actions available")
        return actions[-1][0]

    def select_discard(self, hand: Sequence[Card], state: MatchState) -> DiscardAction:
        if not hand:
            raise ValueError("Cannot discard from an empty hand")
        return DiscardAction(hand[0])
