"""Builders for hand-crafted game states."""

from __future__ import annotations

from typing import Optional, Sequence

from unorules.engine import (
    Card,
    CardColor,
    CardKind,
    GameState,
    PlayDirection,
    Player,
    Settings,
    TurnPhase,
)


def num(color: CardColor, value: int, id: Optional[str] = None) -> Card:
    if id is None:
        return Card(CardKind.NUMBER, color, value)
    return Card(CardKind.NUMBER, color, value, id=id)


def action(kind: CardKind, color: CardColor, id: Optional[str] = None) -> Card:
    if id is None:
        return Card(kind, color)
    return Card(kind, color, id=id)


def wild(kind: CardKind = CardKind.WILD, id: Optional[str] = None) -> Card:
    if id is None:
        return Card(kind, CardColor.NONE)
    return Card(kind, CardColor.NONE, id=id)


def make_state(
    hands: Sequence[Sequence[Card]],
    top: Card,
    *,
    current: int = 0,
    current_color: Optional[CardColor] = None,
    draw_pile: Sequence[Card] = (),
    pending: int = 0,
    allow_stacking: bool = True,
    direction: PlayDirection = PlayDirection.CLOCKWISE,
    previous_color: Optional[CardColor] = None,
    turn_phase: TurnPhase = TurnPhase.NORMAL,
    drawn_card: Optional[Card] = None,
) -> GameState:
    players = tuple(
        Player(id=f"p{i + 1}", name=f"Player p{i + 1}", hand=tuple(hand))
        for i, hand in enumerate(hands)
    )
    return GameState(
        players=players,
        current_player_index=current,
        play_direction=direction,
        draw_pile=tuple(draw_pile),
        discard_pile=(top,),
        current_color=current_color or top.color,
        current_card=top,
        previous_color=previous_color,
        pending_draw_count=pending,
        turn_phase=turn_phase,
        drawn_card=drawn_card,
        settings=Settings(allow_stacking=allow_stacking),
    )


def filler(n: int, color: CardColor = CardColor.YELLOW) -> list[Card]:
    """``n`` number cards used to pad hands and piles."""
    return [num(color, i % 10) for i in range(n)]
