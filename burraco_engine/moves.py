"""Action types for Burraco.

A turn is made of one draw action, any number of play actions ending with
:class:`Noop`, and one discard action.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from burraco_engine.cards import format_cards

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.runs import Run


class MoveType(IntEnum):
    """Type of move."""

    DRAW_PILE = auto()  # Take the top card of the closed pile
    DRAW_OPEN = auto()  # Take the whole open pile
    START_RUN = auto()
    APPEND_TOP = auto()
    APPEND_BOTTOM = auto()
    REPLACE_WILDCARD = auto()
    MOVE_CARD = auto()
    NOOP = auto()  # End the play phase
    DISCARD = auto()


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all moves."""

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this move."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable move description."""
        ...


@dataclass(frozen=True, slots=True)
class DrawAction(Move):
    """Base class for the draw phase."""


@dataclass(frozen=True, slots=True)
class PlayAction(Move):
    """Base class for the play phase."""


@dataclass(frozen=True, slots=True)
class DrawPile(DrawAction):
    """Draw one card from the closed pile."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.DRAW_PILE

    def __str__(self) -> str:
        return "Draw from hidden pile"


@dataclass(frozen=True, slots=True)
class DrawOpen(DrawAction):
    """Collect the entire open pile."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.DRAW_OPEN

    def __str__(self) -> str:
        return "Collect open pile"


@dataclass(frozen=True, slots=True)
class StartRun(PlayAction):
    """Lay down a new run from hand."""

    run: Run

    @property
    def move_type(self) -> MoveType:
        return MoveType.START_RUN

    def __str__(self) -> str:
        return f"Start run - {format_cards(self.run.cards)}"


@dataclass(frozen=True, slots=True)
class AppendTop(PlayAction):
    """Attach cards after the last card of a team run."""

    run_idx: int
    cards: tuple[Card, ...]

    @property
    def move_type(self) -> MoveType:
        return MoveType.APPEND_TOP

    def __str__(self) -> str:
        return f"Append top, to {self.run_idx} - {format_cards(self.cards)}"


@dataclass(frozen=True, slots=True)
class AppendBottom(PlayAction):
    """Attach cards before the first card of a team run."""

    run_idx: int
    cards: tuple[Card, ...]

    @property
    def move_type(self) -> MoveType:
        return MoveType.APPEND_BOTTOM

    def __str__(self) -> str:
        return f"Append bottom, to {self.run_idx} - {format_cards(self.cards)}"


@dataclass(frozen=True, slots=True)
class ReplaceWildcard(PlayAction):
    """Put a hand card in place of a wildcard in a team run."""

    run_idx: int
    position: int
    card: Card

    @property
    def move_type(self) -> MoveType:
        return MoveType.REPLACE_WILDCARD

    def __str__(self) -> str:
        return (
            f"Replace wildcard, for {self.run_idx}: with {self.card} "
            f"- position {self.position}"
        )


@dataclass(frozen=True, slots=True)
class MoveCard(PlayAction):
    """Reposition a wildcard or Ace inside a team sequence."""

    run_idx: int
    from_idx: int
    to_idx: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.MOVE_CARD

    def __str__(self) -> str:
        return f"Move card, with {self.run_idx} - from {self.from_idx} to {self.to_idx}"


@dataclass(frozen=True, slots=True)
class Noop(PlayAction):
    """Stop playing and go on to discard."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.NOOP

    def __str__(self) -> str:
        return "Play nothing"


@dataclass(frozen=True, slots=True)
class DiscardAction(Move):
    """Discard a card face-up onto the open pile."""

    card: Card

    @property
    def move_type(self) -> MoveType:
        return MoveType.DISCARD

    def __str__(self) -> str:
        return f"Discard {self.card}"
