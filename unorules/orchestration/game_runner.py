"""Single game runner."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unorules.engine import (
    ChallengeUno,
    DrawCard,
    GamePhase,
    GameState,
    Move,
    PassTurn,
    PlayerView,
    execute_move,
    get_legal_moves,
    initialize_game,
    uno_challenge_targets,
)

if TYPE_CHECKING:
    from unorules.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_turns: int
    player_ids: tuple[str, ...]
    final_state: GameState


def _fallback(legal: list[Move]) -> Move:
    return next((m for m in legal if isinstance(m, (DrawCard, PassTurn))), legal[0])


class GameRunner:
    """Runs a single UNO game to completion."""

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        allow_stacking: bool = True,
        max_turns: int = 1000,
    ):
        self._agents = agents
        self._seed = seed
        self._allow_stacking = allow_stacking
        self._max_turns = max_turns

    def _interjections(self, state: GameState, rng: random.Random) -> GameState:
        """Let players who are not on turn call out a missed UNO."""
        for pid, agent in self._agents.items():
            if pid == state.current_player.id or not uno_challenge_targets(state, pid):
                continue
            move = agent.get_interjection(PlayerView.from_state(state, pid), pid)
            if not isinstance(move, ChallengeUno):
                continue
            logger.debug("%s calls out %s", pid, move.target_player_id)
            state = execute_move(state, move, rng=rng)
        return state

    def run(self) -> GameResult:
        """Run the game and return the result."""
        player_ids = list(self._agents.keys())
        rng = random.Random(self._seed)
        state = initialize_game(player_ids, allow_stacking=self._allow_stacking, rng=rng)
        num_turns = 0

        while state.game_phase == GamePhase.PLAYING and num_turns < self._max_turns:
            state = self._interjections(state, rng)
            pid = state.current_player.id
            legal = get_legal_moves(state)

            player_view = PlayerView.from_state(state, pid)
            move = self._agents[pid].get_move(player_view, legal, pid)
            if move is None:
                move = _fallback(legal)

            new_state = execute_move(state, move, rng=rng)
            if new_state is state:
                logger.warning("%s proposed an illegal move (%s); drawing instead", pid, move.kind.value)
                new_state = execute_move(state, _fallback(legal), rng=rng)
            state = new_state
            num_turns += 1

        if state.game_phase != GamePhase.GAME_OVER:
            logger.info("Game stopped after %d turns without a winner", num_turns)

        return GameResult(
            winner=state.winner_id,
            num_turns=num_turns,
            player_ids=tuple(player_ids),
            final_state=state,
        )
