"""Tests for match state."""

import pytest

from burraco_engine.cards import create_deck, parse_cards
from burraco_engine.runs import build_sequence_run
from burraco_engine.state import (
    HAND_SIZE,
    POT_SIZE,
    GamePhase,
    MatchState,
    Player,
    Team,
    create_initial_state,
)


class TestInitialState:
    def test_deal_sizes(self):
        state = create_initial_state(seed=42)
        assert len(state.pot1) == POT_SIZE
        assert len(state.pot2) == POT_SIZE
        assert len(state.open_pile) == 1
        for team in state.teams:
            for player in team.players:
                assert len(player.hand) == HAND_SIZE
        assert len(state.draw_pile) == 110 - 2 * POT_SIZE - 4 * HAND_SIZE - 1

    def test_card_conservation(self):
        state = create_initial_state(seed=3)
        assert state.cards_total() == 110

    def test_hands_sorted(self):
        state = create_initial_state(seed=42)
        for team in state.teams:
            for player in team.players:
                assert player.hand == sorted(player.hand)

    def test_seat_order(self):
        state = create_initial_state(num_teams=2, num_team_players=2, seed=1)
        assert state.player_team_idxs == [(0, 0), (1, 0), (0, 1), (1, 1)]

    def test_three_teams(self):
        state = create_initial_state(num_teams=3, num_team_players=1, seed=1)
        assert state.player_team_idxs == [(0, 0), (1, 0), (2, 0)]
        assert state.cards_total() == 110

    def test_initial_phase_and_turn(self):
        state = create_initial_state(seed=42, first_player=2)
        assert state.phase == GamePhase.DRAW
        assert state.round == 0
        assert state.player_turn == 2
        assert state.first_player == 2
        assert state.current_team_player == (0, 1)
        assert state.winner is None

    def test_seeded_deal_is_reproducible(self):
        a = create_initial_state(seed=11)
        b = create_initial_state(seed=11)
        assert a.to_dict() == b.to_dict()

    def test_deck_dealt_from_the_end(self):
        deck = create_deck()
        state = create_initial_state(deck=deck, first_player=0)
        assert state.pot1 == deck[-POT_SIZE:]
        assert state.pot2 == deck[-2 * POT_SIZE : -POT_SIZE]

    def test_invalid_first_player(self):
        with pytest.raises(ValueError):
            create_initial_state(seed=1, first_player=4)

    def test_deck_too_small(self):
        with pytest.raises(ValueError):
            create_initial_state(deck=create_deck()[:50])


def make_state(hand0, hand1, runs0=(), reached_pot=(False, False)) -> MatchState:
    teams = [
        Team(
            players=[Player(hand=parse_cards(hand0))],
            played_runs=[build_sequence_run(parse_cards(r)) for r in runs0],
            has_reached_pot=reached_pot[0],
        ),
        Team(players=[Player(hand=parse_cards(hand1))], has_reached_pot=reached_pot[1]),
    ]
    return MatchState(
        num_teams=2,
        num_team_players=1,
        draw_pile=parse_cards("♥9,♥10"),
        open_pile=parse_cards("♦4"),
        pot1=[],
        pot2=[],
        teams=teams,
        player_turn=0,
        first_player=0,
        player_team_idxs=[(0, 0), (1, 0)],
    )


class TestScoreboard:
    def test_scores(self):
        state = make_state("♣K", "♥3", runs0=["♣3,♣4,♣5"])
        # Team 0: -100 + 15 + 10, team 1: -100 + 5
        assert state.scoreboard() == [-75, -95]

    def test_pot_removes_penalty(self):
        state = make_state("♣K", "♥3", reached_pot=(True, False))
        assert state.scoreboard() == [10, -95]

    def test_burraco_counts(self):
        state = make_state("", "", runs0=["♠3,♠4,♠5,♠6,♠7,♠8,♠9"])
        assert state.scoreboard()[0] == -100 + 200 + 45

    def test_winning_team_first_on_tie(self):
        state = make_state("♣K", "♥K")
        assert state.winning_team() == 0

    def test_winning_team(self):
        state = make_state("♣3", "♥K")
        assert state.winning_team() == 1


class TestQueries:
    def test_current_accessors(self):
        state = make_state("♣K", "♥3")
        state.player_turn = 1
        assert state.current_team_idx == 1
        assert state.current_team is state.teams[1]
        assert state.current_player is state.teams[1].players[0]

    def test_cards_total(self):
        state = make_state("♣K", "♥3", runs0=["♣3,♣4,♣5"])
        assert state.cards_total() == 1 + 1 + 3 + 2 + 1

    def test_to_dict(self):
        state = make_state("♣K", "♥3", runs0=["♣3,♣4,♣5"])
        data = state.to_dict()
        assert data["phase"] == "DRAW"
        assert data["open_pile"] == "♦4"
        assert data["teams"][0]["runs"][0]["cards"] == "♣3,♣4,♣5"
        assert data["teams"][0]["hands"] == ["♣K"]
        assert data["scoreboard"] == state.scoreboard()
