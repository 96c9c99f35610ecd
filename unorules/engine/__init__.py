"""Rules engine for UNO."""

from unorules.engine.card import ACTION_KINDS, PLAYABLE_COLORS, Card, CardColor, CardKind
from unorules.engine.deck import DECK_SIZE, create_deck, draw_cards, shuffle_deck
from unorules.engine.errors import InvalidPlayerCount, UnoError
from unorules.engine.game_state import (
    GamePhase,
    GameState,
    PlayDirection,
    Player,
    PlayerView,
    Settings,
    TurnPhase,
)
from unorules.engine.rules import (
    Challenge,
    ChallengeUno,
    DrawCard,
    Move,
    MoveKind,
    PassTurn,
    PlayCard,
    can_challenge,
    execute_move,
    get_legal_moves,
    get_next_player_index,
    get_previous_player_index,
    initialize_game,
    is_valid_move,
    move_from_dict,
    uno_challenge_targets,
)

__all__ = [
    "Card",
    "CardColor",
    "CardKind",
    "ACTION_KINDS",
    "PLAYABLE_COLORS",
    "DECK_SIZE",
    "create_deck",
    "draw_cards",
    "shuffle_deck",
    "InvalidPlayerCount",
    "UnoError",
    "GamePhase",
    "GameState",
    "PlayDirection",
    "Player",
    "PlayerView",
    "Settings",
    "TurnPhase",
    "Challenge",
    "ChallengeUno",
    "DrawCard",
    "Move",
    "MoveKind",
    "PassTurn",
    "PlayCard",
    "can_challenge",
    "execute_move",
    "get_legal_moves",
    "get_next_player_index",
    "get_previous_player_index",
    "initialize_game",
    "is_valid_move",
    "move_from_dict",
    "uno_challenge_targets",
]
