"""Heuristic agent - a simple rule-of-thumb bot.

Priorities: action cards, then the highest number card, then wilds.
It keeps its Wild Draw Four while it still holds the color in play, so it
only bluffs when it has nothing else.
"""

from collections import Counter

from unorules.engine import (
    ACTION_KINDS,
    PLAYABLE_COLORS,
    Card,
    CardColor,
    CardKind,
    ChallengeUno,
    DrawCard,
    Move,
    PassTurn,
    PlayCard,
    PlayerView,
)


def _best_color(hand: list[Card]) -> CardColor:
    """Color held most often, ties going to the earlier color in PLAYABLE_COLORS."""
    counts = Counter(c.color for c in hand if not c.is_wild)
    return max(PLAYABLE_COLORS, key=lambda color: counts[color])


class HeuristicAgent:
    """Bot that plays the first sensible card."""

    def __init__(self, name: str = "heuristic"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_move(
        self,
        player_view: PlayerView,
        legal_moves: list[Move],
        player_id: str,
    ) -> Move | None:
        if not legal_moves:
            return None

        hand = player_view.my_hand
        playable: list[Card] = []
        for move in legal_moves:
            if isinstance(move, PlayCard) and move.card not in playable:
                playable.append(move.card)

        if not playable:
            return next(
                (m for m in legal_moves if isinstance(m, (DrawCard, PassTurn))),
                legal_moves[0],
            )

        called_uno = len(hand) == 2
        has_matching_color = any(c.color == player_view.current_color for c in hand)

        candidates = playable
        if has_matching_color:
            candidates = [c for c in playable if c.kind != CardKind.WILD_DRAW_FOUR] or playable

        actions = [c for c in candidates if c.kind in ACTION_KINDS]
        if actions:
            return PlayCard(card=actions[0], called_uno=called_uno)

        numbers = sorted(
            (c for c in candidates if c.kind == CardKind.NUMBER),
            key=lambda c: c.value,
            reverse=True,
        )
        if numbers:
            return PlayCard(card=numbers[0], called_uno=called_uno)

        return PlayCard(
            card=candidates[0],
            chosen_color=_best_color(hand),
            called_uno=called_uno,
        )

    def get_interjection(self, player_view: PlayerView, player_id: str) -> Move | None:
        targets = player_view.uno_challenge_targets()
        return ChallengeUno(target_player_id=targets[0]) if targets else None
