"""Command-line interface for Burraco."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

from burraco_engine.cards import format_cards

if TYPE_CHECKING:
    from burraco_engine.moves import PlayAction
    from burraco_engine.state import MatchState
    from strategies.base import Strategy


def format_state(state: MatchState, viewer: int | None = None) -> str:
    """Format match state for display.

    Args:
        state: Match state.
        viewer: Seat whose hand is shown. None shows every hand.
    """
    lines = []

    lines.append("=" * 60)
    team_idx, team_player = state.current_team_player
    lines.append(
        f"Round {state.round} | Phase: {state.phase.name} | "
        f"Turn: team {team_idx}, player {team_player}"
    )
    lines.append("=" * 60)

    scores = state.scoreboard()
    for t, team in enumerate(state.teams):
        pot = "pot taken" if team.has_reached_pot else "no pot"
        lines.append(f"\nTeam {t} ({scores[t]} points, {pot})")
        lines.append("-" * 40)

        for p, player in enumerate(team.players):
            seat = state.player_team_idxs.index((t, p))
            prefix = "→ " if seat == state.player_turn else "  "
            if viewer is None or seat == viewer:
                hand_str = format_cards(player.hand) or "(empty)"
                lines.append(f"{prefix}Player {p} hand: {hand_str}")
            else:
                lines.append(f"{prefix}Player {p} hand: [{len(player.hand)} cards]")

        for i, run in enumerate(team.played_runs):
            lines.append(f"  {i}: {run}")

    lines.append(
        f"\nDraw pile: {len(state.draw_pile)} cards | "
        f"Pots left: {int(bool(state.pot1)) + int(bool(state.pot2))}"
    )
    lines.append(f"Open pile: {format_cards(state.open_pile) or '(empty)'}")

    if state.is_finished:
        lines.append("\n" + "=" * 60)
        lines.append(f"GAME OVER - Team {state.winner} wins! Scores: {scores}")
        lines.append("=" * 60)

    return "\n".join(lines)


def format_play_actions(actions: list[tuple[PlayAction, int]]) -> str:
    """Format available play actions for display."""
    lines = ["Available actions:"]
    for i, (action, delta) in enumerate(actions):
        lines.append(f"  {i + 1}. {action} ({delta:+d})")
    return "\n".join(lines)


def play_interactive(
    seed: int | None = None,
    num_teams: int = 2,
    num_team_players: int = 2,
    opponent: str = "heuristic",
) -> None:
    """Play an interactive match as seat 0 against AI seats."""
    from simulation.runner import GameRunner
    from strategies import create_strategy
    from strategies.human import CliStrategy

    num_seats = num_teams * num_team_players
    strategies: list[Strategy] = [CliStrategy()]
    strategies.extend(
        create_strategy(opponent, seed=None if seed is None else seed + i)
        for i in range(1, num_seats)
    )

    print("\nWelcome to Burraco!")
    print("You are team 0, player 0. Type the number of a choice.")
    print("Type 'q' to quit.\n")

    runner = GameRunner(
        strategies,
        num_teams=num_teams,
        num_team_players=num_team_players,
        log_moves=False,
    )
    result, _ = runner.run_game(seed=seed)

    print(f"\nFinal scores: {result.final_scores}")
    if result.winner is None:
        print("Match aborted without a winner")
    else:
        print(f"Team {result.winner} wins after {result.rounds} rounds")


def simulate(
    strategy_names: list[str],
    num_games: int = 10,
    seed: int = 0,
    num_teams: int = 2,
    num_team_players: int = 2,
    log_dir: str | None = None,
) -> None:
    """Run simulated matches between strategies and print a summary."""
    from simulation.runner import MatchConfig, save_game_log, win_counts

    config = MatchConfig(
        strategies=strategy_names,
        num_teams=num_teams,
        num_team_players=num_team_players,
        seed=seed,
        log_moves=log_dir is not None,
    )
    runner = config.build_runner()

    print(f"\nRunning {num_games} games: {', '.join(s.name for s in runner.strategies)}")

    results = []
    for i in range(num_games):
        result, log = runner.run_game(seed=seed + i)
        results.append(result)
        if log is not None:
            save_game_log(log, base_dir=log_dir)

    if not results:
        print("No games played")
        return

    counts = win_counts(results, num_teams)
    avg_rounds = sum(r.rounds for r in results) / len(results)
    avg_duration = sum(r.duration_ms for r in results) / len(results)

    print("\nResults:")
    for team in range(num_teams):
        print(f"  Team {team} wins: {counts[team]} ({100 * counts[team] / num_games:.1f}%)")
    print(f"  Aborted: {counts[None]}")
    print(f"  Average rounds: {avg_rounds:.1f}")
    print(f"  Average duration: {avg_duration:.2f}ms")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Burraco card game simulator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Play against AI")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument("--teams", type=int, default=2, help="Number of teams")
    play_parser.add_argument("--players", type=int, default=2, help="Players per team")
    play_parser.add_argument(
        "--opponent", default="heuristic", help="Strategy for the other seats"
    )

    sim_parser = subparsers.add_parser("simulate", help="Run AI vs AI matches")
    sim_parser.add_argument(
        "--strategies",
        nargs="+",
        default=["heuristic"],
        help="Strategy per seat, or one for all seats",
    )
    sim_parser.add_argument("--games", type=int, default=10, help="Number of games")
    sim_parser.add_argument("--seed", type=int, default=0, help="Starting seed")
    sim_parser.add_argument("--teams", type=int, default=2, help="Number of teams")
    sim_parser.add_argument("--players", type=int, default=2, help="Players per team")
    sim_parser.add_argument("--log-dir", help="Directory for JSON game logs")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play_interactive(
            seed=args.seed,
            num_teams=args.teams,
            num_team_players=args.players,
            opponent=args.opponent,
        )
    elif args.command == "simulate":
        simulate(
            args.strategies,
            num_games=args.games,
            seed=args.seed,
            num_teams=args.teams,
            num_team_players=args.players,
            log_dir=args.log_dir,
        )
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
