"""Match state models for Burraco."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Any

from burraco_engine.cards import cards_value, create_deck, format_cards, shuffle_deck

if TYPE_CHECKING:
    from burraco_engine.cards import Card
    from burraco_engine.runs import Run

HAND_SIZE = 11
POT_SIZE = 11
NO_POT_PENALTY = -100


class GamePhase(IntEnum):
    """Current phase of the active player's turn."""

    DRAW = auto()  # Take the open pile or one card from the closed pile
    PLAY = auto()  # Lay down or extend runs until Noop
    DISCARD = auto()  # Put one card on the open pile
    FINISHED = auto()  # Match has ended, winner is set


@dataclass
class Player:
    """A seat at the table.

    Attributes:
        hand: Cards in hand, kept sorted.
    """

    hand: list[Card] = field(default_factory=list)


@dataclass
class Team:
    """A team and the runs it has played.

    Attributes:
        players: Players of the team in seat order.
        played_runs: Runs on the table, sorted sequences first, then by size.
        has_reached_pot: Whether a player of the team has taken a pot.
        has_used_pot: Whether the claimed pot has been played out.
    """

    players: list[Player]
    played_runs: list[Run] = field(default_factory=list)
    has_reached_pot: bool = False
    has_used_pot: bool = False

    def score(self) -> int:
        """Team score: pot penalty, run scores, and hand card values."""
        # Cards left in hand are added, not deducted
        pot_deduction = 0 if self.has_reached_pot else NO_POT_PENALTY
        runs_score = sum(run.score for run in self.played_runs)
        hand_score = sum(cards_value(player.hand) for player in self.players)
        return pot_deduction + runs_score + hand_score


@dataclass
class MatchState:
    """Complete mutable match state.

    Attributes:
        num_teams: Number of teams.
        num_team_players: Players per team.
        draw_pile: Closed pile, top card last.
        open_pile: Open (discard) pile, top card last.
        pot1: First pot.
        pot2: Second pot.
        teams: Teams in index order.
        player_turn: Absolute index of the active player.
        first_player: Absolute index of the player who started the match.
        player_team_idxs: Absolute player index -> (team, in-team player).
        round: Number of completed rounds.
        phase: Current phase.
        winner: Winning team once the match is finished.
    """

    num_teams: int
    num_team_players: int
    draw_pile: list[Card]
    open_pile: list[Card]
    pot1: list[Card]
    pot2: list[Card]
    teams: list[Team]
    player_turn: int
    first_player: int
    player_team_idxs: list[tuple[int, int]]
    round: int = 0
    phase: GamePhase = GamePhase.DRAW
    winner: int | None = None

    @property
    def num_players(self) -> int:
        return len(self.player_team_idxs)

    @property
    def current_team_player(self) -> tuple[int, int]:
        """(team, in-team player) of the active player."""
        return self.player_team_idxs[self.player_turn]

    @property
    def current_team_idx(self) -> int:
        return self.current_team_player[0]

    @property
    def current_team(self) -> Team:
        return self.teams[self.current_team_idx]

    @property
    def current_player(self) -> Player:
        team, player = self.current_team_player
        return self.teams[team].players[player]

    @property
    def is_finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    def cards_total(self) -> int:
        """Number of cards across piles, pots, hands and runs."""
        team_cards = sum(
            sum(len(run.cards) for run in team.played_runs)
            + sum(len(player.hand) for player in team.players)
            for team in self.teams
        )
        pile_cards = (
            len(self.draw_pile) + len(self.open_pile) + len(self.pot1) + len(self.pot2)
        )
        return team_cards + pile_cards

    def scoreboard(self) -> list[int]:
        """Score of every team, in team order."""
        return [team.score() for team in self.teams]

    def winning_team(self) -> int:
        """Team with the highest score; the first one wins ties."""
        scores = self.scoreboard()
        return scores.index(max(scores))

    def to_dict(self) -> dict[str, Any]:
        """Full snapshot for logging and display."""
        team, player = self.current_team_player
        return {
            "phase": self.phase.name,
            "round": self.round,
            "player_turn": self.player_turn,
            "first_player": self.first_player,
            "current_team": team,
            "current_team_player": player,
            "draw_pile_size": len(self.draw_pile),
            "open_pile": format_cards(self.open_pile),
            "pot1_size": len(self.pot1),
            "pot2_size": len(self.pot2),
            "teams": [
                {
                    "hands": [format_cards(p.hand) for p in t.players],
                    "runs": [
                        {
                            "type": r.run_type.name,
                            "cards": format_cards(r.cards),
                            "score": r.score,
                        }
                        for r in t.played_runs
                    ],
                    "has_reached_pot": t.has_reached_pot,
                    "has_used_pot": t.has_used_pot,
                }
                for t in self.teams
            ],
            "scoreboard": self.scoreboard(),
            "winner": self.winner,
        }


def _drain_back(cards: list[Card], count: int) -> list[Card]:
    """Remove and return the last ``count`` cards."""
    taken = cards[len(cards) - count :]
    del cards[len(cards) - count :]
    return taken


def create_initial_state(
    num_teams: int = 2,
    num_team_players: int = 2,
    seed: int | None = None,
    deck: list[Card] | None = None,
    first_player: int | None = None,
) -> MatchState:
    """Create a fully dealt match.

    Args:
        num_teams: Number of teams.
        num_team_players: Players per team.
        seed: Random seed for shuffling and the starting player.
        deck: Optional pre-ordered deck, dealt from the end. If None, builds
            and shuffles the standard 110-card deck.
        first_player: Optional starting player index. If None, one is drawn
            at random.

    Returns:
        Initial match state in the DRAW phase.
    """
    if num_teams < 1 or num_team_players < 1:
        raise ValueError("Need at least one team with one player")

    if deck is None:
        deck = shuffle_deck(create_deck(), seed)
    deck = list(deck)

    needed = 2 * POT_SIZE + num_teams * num_team_players * HAND_SIZE + 2
    if len(deck) < needed:
        raise ValueError(f"Deck of {len(deck)} cards is too small, need {needed}")

    pot1 = _drain_back(deck, POT_SIZE)
    pot2 = _drain_back(deck, POT_SIZE)

    teams = []
    for _ in range(num_teams):
        players = [
            Player(hand=sorted(_drain_back(deck, HAND_SIZE)))
            for _ in range(num_team_players)
        ]
        teams.append(Team(players=players))

    player_team_idxs = [
        (team, player) for player in range(num_team_players) for team in range(num_teams)
    ]

    if first_player is None:
        first_player = random.Random(seed).randrange(len(player_team_idxs))
    elif not 0 <= first_player < len(player_team_idxs):
        raise ValueError(f"Invalid first player: {first_player}")

    open_pile = _drain_back(deck, 1)

    return MatchState(
        num_teams=num_teams,
        num_team_players=num_team_players,
        draw_pile=deck,
        open_pile=open_pile,
        pot1=pot1,
        pot2=pot2,
        teams=teams,
        player_turn=first_player,
        first_player=first_player,
        player_team_idxs=player_team_idxs,
    )
