"""Meld ("run") construction, validation and scoring for Burraco.

A :class:`Run` can only exist in a valid state: its constructor runs the
full legality check for its type, and every mutation builds a fresh
candidate card list and constructs a new Run from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Iterable

from burraco_engine.cards import Card, Rank, Suit, cards_value, format_cards

MIN_RUN_LENGTH = 3
BURRACO_LENGTH = 7
FULL_SEQUENCE_LENGTH = 13


class IllegalRunError(ValueError):
    """Raised when a card list does not form a legal run."""

    pass


class RunType(IntEnum):
    """Kind of meld."""

    SEQUENCE = auto()  # Same suit, consecutive ranks
    GROUP = auto()  # Same rank, distinct suits


class AppendSide(IntEnum):
    """End of a run that new cards are attached to."""

    TOP = auto()  # After the last card
    BOTTOM = auto()  # Before the first card


@dataclass(frozen=True, slots=True)
class Run:
    """A validated meld.

    Attributes:
        cards: Cards in meld order. Groups are stored canonicalized
            (wildcards last).
        run_type: Sequence or Group.

    Raises:
        IllegalRunError: If the cards do not form a legal run of this type.
    """

    cards: tuple[Card, ...]
    run_type: RunType

    def __post_init__(self) -> None:
        cards = tuple(self.cards)
        if self.run_type == RunType.SEQUENCE:
            _validate_sequence(cards)
        else:
            cards = _validate_group(cards)
        object.__setattr__(self, "cards", cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        kind = "Sequence" if self.run_type == RunType.SEQUENCE else "Group"
        return f"{kind}: {format_cards(self.cards)} ({self.score} p)"

    @property
    def is_sequence(self) -> bool:
        return self.run_type == RunType.SEQUENCE

    @property
    def is_burraco(self) -> bool:
        return len(self.cards) >= BURRACO_LENGTH

    @property
    def wildcard_positions(self) -> list[int]:
        """Positions holding a Two or a Joker."""
        return [i for i, card in enumerate(self.cards) if card.is_wildcard]

    @property
    def burraco_value(self) -> int:
        """Bonus for a run of seven or more cards."""
        if not self.is_burraco:
            return 0
        if self.run_type == RunType.GROUP:
            return 100
        return _sequence_burraco_value(self.cards)

    @property
    def cards_score(self) -> int:
        return cards_value(self.cards)

    @property
    def score(self) -> int:
        return self.burraco_value + self.cards_score

    def append(self, cards: Iterable[Card], side: AppendSide) -> Run:
        """Return a new run with cards attached at the given end."""
        if side == AppendSide.TOP:
            new_cards = self.cards + tuple(cards)
        else:
            new_cards = tuple(cards) + self.cards
        return Run(new_cards, self.run_type)

    def replace_wildcard(self, at: int, card: Card) -> Run:
        """Put ``card`` in place of the wildcard at ``at``.

        The displaced card is moved to the front of the run and may be used
        again there, as long as the result is still a legal sequence.
        """
        if self.run_type == RunType.GROUP:
            raise IllegalRunError("No point in replacing wildcard in group, use append")
        if not 0 <= at < len(self.cards):
            raise IllegalRunError(f"Cannot replace at invalid position: {at}")

        new_cards = list(self.cards)
        displaced = new_cards[at]
        new_cards[at] = card
        new_cards.insert(0, displaced)
        return Run(tuple(new_cards), RunType.SEQUENCE)

    def move_card(self, from_idx: int, to_idx: int) -> Run:
        """Move the card at ``from_idx`` so that it is inserted before ``to_idx``.

        Intended for wildcards and Aces. Moving to the same slot or the slot
        right after it leaves the run unchanged and is rejected.
        """
        if self.run_type == RunType.GROUP:
            raise IllegalRunError("No point in moving card in group")
        size = len(self.cards)
        if (
            not 0 <= from_idx < size
            or not 0 <= to_idx < size
            or from_idx == to_idx
            or to_idx == from_idx + 1
        ):
            raise IllegalRunError(f"Cannot move from {from_idx} to {to_idx}")

        new_cards = list(self.cards)
        new_cards.insert(to_idx, new_cards[from_idx])
        remove_idx = from_idx + 1 if to_idx < from_idx else from_idx
        del new_cards[remove_idx]
        return Run(tuple(new_cards), RunType.SEQUENCE)


def build_sequence_run(cards: Iterable[Card]) -> Run:
    """Build a sequence run, raising IllegalRunError if invalid."""
    return Run(tuple(cards), RunType.SEQUENCE)


def build_group_run(cards: Iterable[Card]) -> Run:
    """Build a group run, raising IllegalRunError if invalid."""
    return Run(tuple(cards), RunType.GROUP)


def build_run(cards: Iterable[Card], run_type: RunType) -> Run:
    return Run(tuple(cards), run_type)


def _validate_sequence(cards: tuple[Card, ...]) -> None:
    if len(cards) < MIN_RUN_LENGTH:
        raise IllegalRunError("Need at least 3 cards to create a sequence run")

    anchor = next((c.suit for c in cards if not c.is_wildcard), None)
    if anchor is None:
        raise IllegalRunError("Need at least some non wild cards for sequence run")

    # Same-suit Twos are counted below, only where they stand in for another rank
    other_twos = sum(1 for c in cards if c.rank is Rank.TWO and c.suit is not anchor)
    jokers = sum(1 for c in cards if c.is_joker)
    if other_twos + jokers > 1:
        raise IllegalRunError("Too many wildcards in sequence run")

    wildcard: tuple[int, Rank] | None = None  # (position, rank it stands for)

    for i, card in enumerate(cards):
        prev_card = cards[i - 1] if i > 0 else None
        next_card = cards[i + 1] if i < len(cards) - 1 else None

        replacement = _wildcard_replacement(prev_card, card, next_card, anchor)

        if replacement is not None:
            if wildcard is not None:
                raise IllegalRunError("You have already used a wildcard in this run")
            wildcard = (i, replacement)

            if prev_card is not None and prev_card.rank is Rank.ACE and next_card is None:
                raise IllegalRunError("Cannot extend from Ace with wildcard")
            continue

        if card.suit is not anchor:
            raise IllegalRunError(f"Mismatched suit in sequence run: {card}")

        if prev_card is None:
            continue

        if wildcard is not None and wildcard[0] == i - 1:
            prev_rank = wildcard[1]
        else:
            prev_rank = prev_card.rank

        if prev_rank is Rank.ACE:
            valid = card.rank is Rank.TWO
        else:
            valid = prev_rank.index + 1 == card.rank.index

        if not valid:
            raise IllegalRunError(f"Invalid sequence: {prev_card} to {card}")


def _wildcard_replacement(
    prev_card: Card | None, card: Card, next_card: Card | None, anchor: Suit
) -> Rank | None:
    """Rank a card stands for when used as a wildcard, None if used naturally."""
    anchor_two = card.rank is Rank.TWO and card.suit is anchor

    # Two played as itself, after the Ace of its suit
    if (
        anchor_two
        and prev_card is not None
        and prev_card.rank is Rank.ACE
        and prev_card.suit is anchor
    ):
        return None

    if anchor_two and next_card is not None:
        # Two played as itself, before a 3 of the same suit
        if next_card.rank is Rank.THREE and next_card.suit is anchor:
            return None
        # Leading same-suit Two before the natural Two stands for the Ace
        if prev_card is None and next_card.rank is Rank.TWO and next_card.suit is anchor:
            return Rank.ACE
        # Two played as itself, followed by a wildcard standing for the 3
        if next_card.is_wildcard:
            return None

    if not card.is_wildcard:
        return None

    if prev_card is not None:
        if prev_card.is_joker:
            raise IllegalRunError("You have already used a wildcard in this run")
        return prev_card.rank.next()

    if next_card is not None:
        return next_card.rank.prev()

    return None


def _group_sort_key(card: Card) -> tuple[bool, tuple[int, int]]:
    return (card.is_wildcard, card.sort_key)


def _validate_group(cards: tuple[Card, ...]) -> tuple[Card, ...]:
    if len(cards) < MIN_RUN_LENGTH:
        raise IllegalRunError("Need at least 3 cards to create a group run")

    ordered = tuple(sorted(cards, key=_group_sort_key))
    anchor = next((c.rank for c in ordered if not c.is_wildcard), Rank.TWO)

    wildcards_used = 0
    suits_seen: set[Suit] = set()
    for pos, card in enumerate(ordered):
        if card.rank is not anchor and not card.is_wildcard:
            raise IllegalRunError(
                f"Mismatched rank in group run (pos {pos}): {card}, expected {anchor.symbol}"
            )

        if card.is_joker or (card.rank is Rank.TWO and anchor is not Rank.TWO):
            if wildcards_used > 0:
                raise IllegalRunError(
                    f"Too many wildcards in group run (pos {pos}): {card}"
                )
            wildcards_used += 1
        elif card.suit in suits_seen:
            raise IllegalRunError(f"Duplicate suit in group run (pos {pos}): {card}")
        else:
            suits_seen.add(card.suit)

    return ordered


def _sequence_burraco_value(cards: tuple[Card, ...]) -> int:
    """Bonus for a sequence burraco, based on its longest clean stretch.

    A transition between neighbours is clean when both share a suit and the
    first is not a Two, or it is a Two followed by its own 3. A Two as the
    last card is always dirty.
    """
    size = len(cards)
    clean_count = 0
    max_clean_count = 0
    last_was_clean = False

    for i in range(1, size):
        prev_card = cards[i - 1]
        card = cards[i]

        clean = False
        if prev_card.suit is card.suit:
            if prev_card.rank is Rank.TWO:
                clean = card.rank is Rank.THREE
            else:
                clean = True

        if i == size - 1:
            if card.rank is Rank.TWO:
                clean = False
            if last_was_clean and clean:
                clean_count += 1  # the last card itself

        if clean:
            clean_count += 1
        else:
            if last_was_clean:
                clean_count += 1
            max_clean_count = max(max_clean_count, clean_count)
            clean_count = 0

        last_was_clean = clean

    max_clean_count = max(max_clean_count, clean_count)

    if clean_count == size:
        return 300 if size == FULL_SEQUENCE_LENGTH else 200
    if max_clean_count >= BURRACO_LENGTH and max_clean_count == size - 1:
        return 150
    return 100
