"""Random strategy for baseline testing."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Sequence

from burraco_engine.moves import DiscardAction, DrawOpen, DrawPile
from strategies.base import Strategy

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.moves import DrawAction, PlayAction
    from burraco_engine.state import MatchState


class RandomStrategy(Strategy):
    """Strategy that chooses uniformly at random.

    Play actions are drawn from everything except Noop, so the player keeps
    melding while it can. Useful as a baseline and for smoke testing.
    """

    def __init__(self, seed: int | None = None):
        """Initialize the random strategy.

        Args:
            seed: Optional random seed for reproducibility.
        """
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "Random"

    def select_draw(self, state: MatchState) -> DrawAction:
        if self._rng.random() < 0.5:
            return DrawPile()
        return DrawOpen()

    def select_play(
        self, actions: list[tuple[PlayAction, int]], state: MatchState
    ) -> PlayAction:
        if not actions:
            raise ValueError("No play actions available")
        if len(actions) == 1:
            return actions[0][0]
        return self._rng.choice(actions[1:])[0]

    def select_discard(self, hand: Sequence[Card], state: MatchState) -> DiscardAction:
        if not hand:
            raise ValueError("Cannot discard from an empty hand")
        return DiscardAction(self._rng.choice(list(hand)))
