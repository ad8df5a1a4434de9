"""Match simulation and batch running."""

from simulation.runner import (
    GameResult,
    GameLog,
    GameRunner,
    MatchConfig,
    MoveRecord,
    save_game_log,
    run_batch,
    win_counts,
)

__all__ = [
    "GameResult",
    "GameLog",
    "GameRunner",
    "MatchConfig",
    "MoveRecord",
    "save_game_log",
    "run_batch",
    "win_counts",
]
