"""Agent protocol - interface that bots and human agents implement."""

from typing import Protocol

from unorules.engine import Move, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents.

    Agents only propose moves; the engine decides whether they are legal.
    """

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_move(
        self,
        player_view: PlayerView,
        legal_moves: list[Move],
        player_id: str,
    ) -> Move | None:
        """Choose a move on this agent's turn.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_moves: List of valid moves to choose from.
            player_id: This agent's player ID.

        Returns:
            One of the legal moves, or None to draw (or pass after drawing).
        """
        ...

    def get_interjection(self, player_view: PlayerView, player_id: str) -> Move | None:
        """Optionally call out another player for not calling UNO."""
        ...
