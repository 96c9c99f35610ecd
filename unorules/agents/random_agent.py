"""Random agent - picks any legal move, preferring plays."""

import random
from typing import Optional

from unorules.engine import ChallengeUno, Move, PlayCard, PlayerView


class RandomAgent:
    def __init__(self, name: str = "random", seed: Optional[int] = None):
        self._name = name
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return self._name

    def get_move(self, player_view: PlayerView, legal_moves: list[Move], player_id: str) -> Move | None:
        if not legal_moves:
            return None
        # Prefer playing over drawing to make game progress
        plays = [m for m in legal_moves if isinstance(m, PlayCard)]
        if plays:
            return self._rng.choice(plays)
        return self._rng.choice(legal_moves)

    def get_interjection(self, player_view: PlayerView, player_id: str) -> Move | None:
        targets = player_view.uno_challenge_targets()
        return ChallengeUno(target_player_id=targets[0]) if targets else None
