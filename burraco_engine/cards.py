"""Card, Suit, and Rank models for Burraco."""

from __future__ import annotations

import random
from enum import IntEnum
from functools import total_ordering
from typing import ClassVar, Iterable


class Suit(IntEnum):
    """Card suits in hand sorting order.

    JOKERS is a pseudo-suit carried only by the Joker rank.
    """

    JOKERS = 0
    CLUBS = 1
    DIAMONDS = 2
    HEARTS = 3
    SPADES = 4

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return {
            Suit.JOKERS: "",
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }[self]


SUITS: tuple[Suit, ...] = (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)


class Rank(IntEnum):
    """Card ranks, valued by their position in a sequence (Two=2 through Ace=14).

    The Joker carries a sentinel that is never adjacent to any other rank.
    """

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    JOKER = -2

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self is Rank.JOKER:
            return "JK"
        elif self.value <= 10:
            return str(self.value)
        elif self is Rank.ACE:
            return "A"
        else:
            return self.name[0]

    @property
    def index(self) -> int:
        """Position of the rank in a sequence."""
        return int(self.value)

    @property
    def point_value(self) -> int:
        """Points this rank is worth in a meld or in hand."""
        index = self.index
        if 3 <= index <= 7:
            return 5
        if 8 <= index <= 13:
            return 10
        if index == 14:
            return 15
        if index == 2:
            return 20
        return 30

    @property
    def is_wildcard(self) -> bool:
        """Whether this rank can stand in for another one (Two or Joker)."""
        return self is Rank.TWO or self is Rank.JOKER

    def next(self) -> Rank:
        """Successor rank in a sequence. Ace wraps around to Two."""
        if self is Rank.JOKER:
            raise ValueError("no defined next rank for Joker")
        if self is Rank.ACE:
            return Rank.TWO
        return Rank(self.value + 1)

    def prev(self) -> Rank | None:
        """Predecessor rank in a sequence, None for Ace and Joker.

        Two is preceded by the Ace, mirroring :meth:`next`.
        """
        if self is Rank.ACE or self is Rank.JOKER:
            return None
        if self is Rank.TWO:
            return Rank.ACE
        return Rank(self.value - 1)


SUIT_RANKS: tuple[Rank, ...] = tuple(r for r in Rank if r is not Rank.JOKER)

_SYMBOL_TO_SUIT = {suit.symbol: suit for suit in SUITS}
_SYMBOL_TO_RANK = {rank.symbol: rank for rank in SUIT_RANKS}


@total_ordering
class Card:
    """A playing card.

    Cards are immutable, interned and ordered the way hands are sorted:
    first by suit (jokers first), then by rank index. Two decks are in play,
    so equal cards appear more than once in a match.
    """

    __slots__ = ("_rank", "_suit")

    _instances: ClassVar[dict[tuple[Rank, Suit], Card]] = {}

    def __new__(cls, rank: Rank, suit: Suit) -> Card:
        if (rank is Rank.JOKER) != (suit is Suit.JOKERS):
            raise ValueError(f"Invalid card: {rank.name} of {suit.name}")
        key = (rank, suit)
        if key not in cls._instances:
            instance = object.__new__(cls)
            instance._rank = rank
            instance._suit = suit
            cls._instances[key] = instance
        return cls._instances[key]

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def point_value(self) -> int:
        return self._rank.point_value

    @property
    def is_joker(self) -> bool:
        return self._rank is Rank.JOKER

    @property
    def is_wildcard(self) -> bool:
        """Whether the card may be used as a wildcard (Two or Joker)."""
        return self._rank.is_wildcard

    @property
    def sort_key(self) -> tuple[int, int]:
        return (int(self._suit), self._rank.index)

    @classmethod
    def parse(cls, token: str) -> Card:
        """Parse a card token such as ``♣5``, ``♥10`` or ``JK``."""
        token = token.strip()
        if token == "JK":
            return JOKER
        suit = _SYMBOL_TO_SUIT.get(token[:1])
        if suit is None:
            raise ValueError(f"Unknown suit in card: {token!r}")
        rank = _SYMBOL_TO_RANK.get(token[1:])
        if rank is None:
            raise ValueError(f"Unknown rank in card: {token!r}")
        return cls(rank, suit)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._rank == other._rank and self._suit == other._suit

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __reduce__(self) -> tuple:
        """Support pickling for multiprocessing."""
        return (Card, (self._rank, self._suit))

    def __repr__(self) -> str:
        return f"Card({self._rank.name}, {self._suit.name})"

    def __str__(self) -> str:
        if self.is_joker:
            return self._rank.symbol
        return f"{self._suit.symbol}{self._rank.symbol}"


JOKER = Card(Rank.JOKER, Suit.JOKERS)


def parse_cards(expr: str) -> list[Card]:
    """Parse a comma-separated card list, e.g. ``"♣5,JK,♣7"``."""
    if not expr.strip():
        return []
    return [Card.parse(part) for part in expr.split(",")]


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards in the notation accepted by :func:`parse_cards`."""
    return ",".join(str(card) for card in cards)


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    """Return cards in hand order (suit, then rank index)."""
    return sorted(cards, key=lambda c: c.sort_key)


def cards_value(cards: Iterable[Card]) -> int:
    """Sum of the point values of the given cards."""
    return sum(card.point_value for card in cards)


def create_deck(num_decks: int = 2, jokers_per_deck: int = 3) -> list[Card]:
    """Create the Burraco deck: two standard decks with three jokers each."""
    deck: list[Card] = []
    for _ in range(num_decks):
        deck.extend(Card(rank, suit) for suit in SUITS for rank in SUIT_RANKS)
        deck.extend(JOKER for _ in range(jokers_per_deck))
    return deck


def shuffle_deck(deck: list[Card], seed: int | None = None) -> list[Card]:
    """Return a shuffled copy of the deck."""
    rng = random.Random(seed)
    shuffled = deck.copy()
    rng.shuffle(shuffled)
    return shuffled
