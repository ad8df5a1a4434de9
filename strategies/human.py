"""Human player for the command-line interface."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Sequence

from burraco_engine.cards import format_cards
from burraco_engine.cli import format_play_actions, format_state
from burraco_engine.moves import DiscardAction, DrawOpen, DrawPile
from strategies.base import Strategy

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.moves import DrawAction, PlayAction
    from burraco_engine.state import MatchState


def _prompt_index(prompt: str, count: int) -> int:
    """Read a 1-based choice from stdin, returning a 0-based index."""
    while True:
        choice = input(prompt).strip()
        if choice.lower() == "q":
            print("Goodbye!")
            sys.exit(0)
        try:
            idx = int(choice) - 1
        except ValueError:
            print("Please enter a valid number or 'q' to quit")
            continue
        if 0 <= idx < count:
            return idx
        print(f"Please enter a number 1-{count}")


class CliStrategy(Strategy):
    """Human player reading choices from stdin."""

    @property
    def name(self) -> str:
        return "Human"

    def select_draw(self, state: MatchState) -> DrawAction:
        print(format_state(state, viewer=state.player_turn))
        print("\n  1. Draw from hidden pile\n  2. Collect open pile")
        idx = _prompt_index("\nDraw from: ", 2)
        return DrawPile() if idx == 0 else DrawOpen()

    def select_play(
        self, actions: list[tuple[PlayAction, int]], state: MatchState
    ) -> PlayAction:
        print(f"\nHand: {format_cards(state.current_player.hand)}")
        print(format_play_actions(actions))
        idx = _prompt_index("\nYour action: ", len(actions))
        return actions[idx][0]

    def select_discard(self, hand: Sequence[Card], state: MatchState) -> DiscardAction:
        print("\nDiscard one card:")
        for i, card in enumerate(hand):
            print(f"  {i + 1}. {card}")
        idx = _prompt_index("\nDiscard: ", len(hand))
        return DiscardAction(hand[idx])

