"""Game orchestration."""

from unorules.orchestration.game_runner import GameResult, GameRunner
from unorules.orchestration.session import GameSession, MoveOutcome, SessionRegistry
from unorules.orchestration.tournament import run_tournament

__all__ = [
    "GameResult",
    "GameRunner",
    "GameSession",
    "MoveOutcome",
    "SessionRegistry",
    "run_tournament",
]
