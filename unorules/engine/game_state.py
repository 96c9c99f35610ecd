"""Game state for UNO."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from unorules.engine.card import Card, CardColor


class PlayDirection(str, Enum):
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"


class GamePhase(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class TurnPhase(str, Enum):
    """NORMAL, or AFTER_DRAW once the current player drew a playable card."""

    NORMAL = "normal"
    AFTER_DRAW = "after_draw"


@dataclass(frozen=True)
class Settings:
    """Rule options fixed at game start."""

    allow_stacking: bool = True


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    hand: Tuple[Card, ...] = ()
    has_called_uno: bool = False
    is_safe: bool = False  # reserved

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "hand": [c.to_dict() for c in self.hand],
            "hasCalledUno": self.has_called_uno,
            "isSafe": self.is_safe,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            id=data["id"],
            name=data["name"],
            hand=tuple(Card.from_dict(c) for c in data["hand"]),
            has_called_uno=data.get("hasCalledUno", False),
            is_safe=data.get("isSafe", False),
        )


def _card_or_none(data: Optional[Dict[str, Any]]) -> Optional[Card]:
    return Card.from_dict(data) if data is not None else None


@dataclass(frozen=True)
class GameState:
    """Immutable UNO game state.

    Every field is public and serializable. ``current_card`` caches the top
    of ``discard_pile``. ``previous_color`` is only set while a Wild Draw
    Four is on top, to judge a challenge against it.
    """

    players: Tuple[Player, ...]
    current_player_index: int
    play_direction: PlayDirection
    draw_pile: Tuple[Card, ...]  # top is last
    discard_pile: Tuple[Card, ...]  # top is last
    current_color: CardColor
    current_card: Optional[Card]
    previous_color: Optional[CardColor] = None
    pending_draw_count: int = 0
    game_phase: GamePhase = GamePhase.PLAYING
    winner_id: Optional[str] = None
    turn_phase: TurnPhase = TurnPhase.NORMAL
    drawn_card: Optional[Card] = None
    settings: Settings = field(default_factory=Settings)
    history: Tuple[str, ...] = ()  # Log of events

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def player_index(self, player_id: str) -> Optional[int]:
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return None

    def card_count(self) -> int:
        """Total cards across both piles and all hands."""
        return (
            len(self.draw_pile)
            + len(self.discard_pile)
            + sum(len(p.hand) for p in self.players)
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dict in the shape clients exchange."""
        return {
            "players": [p.to_dict() for p in self.players],
            "currentPlayerIndex": self.current_player_index,
            "playDirection": self.play_direction.value,
            "drawPile": [c.to_dict() for c in self.draw_pile],
            "discardPile": [c.to_dict() for c in self.discard_pile],
            "currentColor": self.current_color.value,
            "previousColor": self.previous_color.value if self.previous_color else None,
            "currentCard": self.current_card.to_dict() if self.current_card else None,
            "pendingDrawCount": self.pending_draw_count,
            "gamePhase": self.game_phase.value,
            "winnerId": self.winner_id,
            "turnPhase": self.turn_phase.value,
            "drawnCard": self.drawn_card.to_dict() if self.drawn_card else None,
            "settings": {"allowStacking": self.settings.allow_stacking},
            "history": list(self.history),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        previous = data.get("previousColor")
        return cls(
            players=tuple(Player.from_dict(p) for p in data["players"]),
            current_player_index=data["currentPlayerIndex"],
            play_direction=PlayDirection(data["playDirection"]),
            draw_pile=tuple(Card.from_dict(c) for c in data["drawPile"]),
            discard_pile=tuple(Card.from_dict(c) for c in data["discardPile"]),
            current_color=CardColor(data["currentColor"]),
            current_card=_card_or_none(data.get("currentCard")),
            previous_color=CardColor(previous) if previous else None,
            pending_draw_count=data.get("pendingDrawCount", 0),
            game_phase=GamePhase(data.get("gamePhase", GamePhase.PLAYING.value)),
            winner_id=data.get("winnerId"),
            turn_phase=TurnPhase(data.get("turnPhase", TurnPhase.NORMAL.value)),
            drawn_card=_card_or_none(data.get("drawnCard")),
            settings=Settings(
                allow_stacking=data.get("settings", {}).get("allowStacking", True)
            ),
            history=tuple(data.get("history", ())),
        )


@dataclass
class PlayerView:
    """Filtered game state visible to a single player.

    Contains only that player's hand and public info.
    """

    player_id: str
    my_hand: List[Card]
    top_discard: Optional[Card]
    current_color: CardColor
    current_player: str
    play_direction: PlayDirection
    pending_draw_count: int
    turn_phase: TurnPhase
    drawn_card: Optional[Card]
    game_phase: GamePhase
    winner_id: Optional[str]
    player_order: Tuple[str, ...]
    num_cards_per_player: Dict[str, int]
    called_uno: Dict[str, bool]
    history: List[str]  # Recent game events

    @classmethod
    def from_state(cls, state: GameState, player_id: str) -> "PlayerView":
        """Create a player view from full game state, hiding other players' hands."""
        me = next((p for p in state.players if p.id == player_id), None)
        return cls(
            player_id=player_id,
            my_hand=list(me.hand) if me else [],
            top_discard=state.current_card,
            current_color=state.current_color,
            current_player=state.current_player.id,
            play_direction=state.play_direction,
            pending_draw_count=state.pending_draw_count,
            turn_phase=state.turn_phase,
            # The drawn card is private to whoever drew it.
            drawn_card=state.drawn_card if state.current_player.id == player_id else None,
            game_phase=state.game_phase,
            winner_id=state.winner_id,
            player_order=tuple(p.id for p in state.players),
            num_cards_per_player={p.id: len(p.hand) for p in state.players},
            called_uno={p.id: p.has_called_uno for p in state.players},
            history=list(state.history[-10:]),  # Last 10 events
        )

    def uno_challenge_targets(self) -> List[str]:
        """Other players holding one card without having called UNO."""
        return [
            pid
            for pid, count in self.num_cards_per_player.items()
            if pid != self.player_id and count == 1 and not self.called_uno[pid]
        ]
