"""Base strategy interface for Burraco players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

from burraco_engine.moves import DrawAction, DrawOpen, DrawPile

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.moves import DiscardAction, PlayAction
    from burraco_engine.state import MatchState


class Strategy(ABC):
    """Abstract base class for player strategies.

    The engine supplies the choices; a strategy only picks one of them.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def select_draw(self, state: MatchState) -> DrawAction:
        """Choose where to draw from.

        Args:
            state: Current match state, in the DRAW phase.

        Returns:
            DrawPile or DrawOpen.
        """
        ...

    @abstractmethod
    def select_play(
        self, actions: list[tuple[PlayAction, int]], state: MatchState
    ) -> PlayAction:
        """Choose a play action.

        Args:
            actions: Enumerated ``(action, score_delta)`` pairs; the first one
                is always Noop.
            state: Current match state, in the PLAY phase.

        Returns:
            One of the given actions.
        """
        ...

    @abstractmethod
    def select_discard(self, hand: Sequence[Card], state: MatchState) -> DiscardAction:
        """Choose a card to discard.

        Args:
            hand: The acting player's hand (never empty).
            state: Current match state, in the DISCARD phase.

        Returns:
            A discard of one of the hand cards.
        """
        ...

    def on_game_start(self, state: MatchState, player_index: int) -> None:
        """Called when a match starts.

        Override to initialize per-game state.

        Args:
            state: Initial match state.
            player_index: Which seat this strategy controls.
        """
        pass

    def on_game_end(self, state: MatchState, winner: int | None) -> None:
        """Called when a match ends.

        Args:
            state: Final match state.
            winner: Winning team, or None if the match was aborted.
        """
        pass


def alternating_draw(state: MatchState) -> DrawAction:
    """Draw from the closed pile on even rounds and the open pile on odd ones."""
    if state.round % 2 == 0:
        return DrawPile()
    return DrawOpen()
