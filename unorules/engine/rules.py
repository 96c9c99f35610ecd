"""UNO rules: initialization, move validation and state transitions.

``execute_move`` never raises for an illegal move. It returns the very
same ``GameState`` object it was given, so callers detect a rejected move
with ``new_state is state``.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from unorules.engine.card import PLAYABLE_COLORS, Card, CardColor, CardKind
from unorules.engine.deck import DECK_SIZE, create_deck, draw_cards, shuffle_deck
from unorules.engine.errors import InvalidPlayerCount
from unorules.engine.game_state import (
    GamePhase,
    GameState,
    PlayDirection,
    Player,
    PlayerView,
    Settings,
    TurnPhase,
)

logger = logging.getLogger(__name__)

INITIAL_HAND_SIZE = 7
MIN_PLAYERS = 2
# Leaves at least 9 undealt cards, so a non-wild start card always exists.
MAX_PLAYERS = (DECK_SIZE - 9) // INITIAL_HAND_SIZE


class MoveKind(str, Enum):
    PLAY = "play"
    DRAW = "draw"
    PASS = "pass"
    CHALLENGE = "challenge"
    CHALLENGE_UNO = "challenge-uno"


@dataclass
class PlayCard:
    """Action: play a card. For wilds, chosen_color picks the next color."""

    card: Card
    chosen_color: Optional[CardColor] = None
    called_uno: bool = False

    kind: ClassVar[MoveKind] = MoveKind.PLAY

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind.value, "card": self.card.to_dict()}
        if self.chosen_color is not None:
            data["chosenColor"] = self.chosen_color.value
        if self.called_uno:
            data["calledUno"] = True
        return data


@dataclass
class DrawCard:
    """Action: draw one card, or absorb the pending penalty."""

    kind: ClassVar[MoveKind] = MoveKind.DRAW

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value}


@dataclass
class PassTurn:
    """Action: keep the card just drawn and end the turn."""

    kind: ClassVar[MoveKind] = MoveKind.PASS

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value}


@dataclass
class Challenge:
    """Action: challenge the Wild Draw Four on top of the discard pile."""

    kind: ClassVar[MoveKind] = MoveKind.CHALLENGE

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value}


@dataclass
class ChallengeUno:
    """Action: call out a player holding one card without having called UNO."""

    target_player_id: str

    kind: ClassVar[MoveKind] = MoveKind.CHALLENGE_UNO

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "targetPlayerId": self.target_player_id}


Move = Union[PlayCard, DrawCard, PassTurn, Challenge, ChallengeUno]


def move_from_dict(data: Dict[str, Any]) -> Move:
    """Build a Move from its ``{type, card?, chosenColor?, ...}`` dict."""
    kind = MoveKind(data["type"])
    if kind == MoveKind.PLAY:
        if data.get("card") is None:
            raise ValueError("play move requires a card")
        color = data.get("chosenColor")
        return PlayCard(
            card=Card.from_dict(data["card"]),
            chosen_color=CardColor(color) if color else None,
            called_uno=bool(data.get("calledUno", False)),
        )
    if kind == MoveKind.CHALLENGE_UNO:
        if not data.get("targetPlayerId"):
            raise ValueError("challenge-uno move requires targetPlayerId")
        return ChallengeUno(target_player_id=data["targetPlayerId"])
    if kind == MoveKind.DRAW:
        return DrawCard()
    if kind == MoveKind.PASS:
        return PassTurn()
    return Challenge()


def get_next_player_index(index: int, player_count: int, direction: PlayDirection) -> int:
    if direction == PlayDirection.CLOCKWISE:
        return (index + 1) % player_count
    return (index - 1) % player_count


def get_previous_player_index(index: int, player_count: int, direction: PlayDirection) -> int:
    if direction == PlayDirection.CLOCKWISE:
        return (index - 1) % player_count
    return (index + 1) % player_count


def _next_index(state: GameState) -> int:
    return get_next_player_index(
        state.current_player_index, len(state.players), state.play_direction
    )


def _update_player(
    players: Tuple[Player, ...], index: int, **changes: Any
) -> Tuple[Player, ...]:
    return players[:index] + (replace(players[index], **changes),) + players[index + 1:]


def _log(state: GameState, entry: str) -> Tuple[str, ...]:
    return state.history + (entry,)


def _deal(
    player_count: int, rng: Optional[random.Random]
) -> Tuple[List[Card], List[List[Card]]]:
    """Shuffle a fresh deck and deal seven cards to each player round-robin."""
    deck = create_deck(rng=rng)
    hands: List[List[Card]] = [[] for _ in range(player_count)]
    for _ in range(INITIAL_HAND_SIZE):
        for hand in hands:
            hand.append(deck.pop())
    return deck, hands


def initialize_game(
    player_ids: Sequence[str],
    player_names: Optional[Sequence[str]] = None,
    *,
    allow_stacking: bool = True,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Create the initial game state: deal, flip a start card, apply its effect.

    At most MAX_PLAYERS may sit down: past that, seven-card hands could leave
    only wilds in the deck and the start card could never be flipped.

    Raises:
        InvalidPlayerCount: fewer than two (or more than MAX_PLAYERS) players.
        ValueError: duplicate player ids.
    """
    if not MIN_PLAYERS <= len(player_ids) <= MAX_PLAYERS:
        raise InvalidPlayerCount(len(player_ids), MIN_PLAYERS, MAX_PLAYERS)
    if len(set(player_ids)) != len(player_ids):
        raise ValueError(f"Duplicate player ids: {list(player_ids)}")

    names = list(player_names or [])
    deck, hands = _deal(len(player_ids), rng)

    # Wilds can't start the game; put them back and try again
    start = deck.pop()
    while start.is_wild:
        deck.append(start)
        deck = shuffle_deck(deck, rng)
        start = deck.pop()

    discard: List[Card] = [start]
    direction = PlayDirection.CLOCKWISE
    current = 0

    if start.kind == CardKind.DRAW_TWO:
        drawn, deck, discard = draw_cards(deck, discard, 2, rng)
        hands[0].extend(drawn)
        current = 1
    elif start.kind == CardKind.REVERSE:
        if len(player_ids) == 2:
            current = 1
        else:
            direction = PlayDirection.COUNTER_CLOCKWISE
    elif start.kind == CardKind.SKIP:
        current = 1

    players = tuple(
        Player(
            id=pid,
            name=names[i] if i < len(names) and names[i] else f"Player {pid}",
            hand=tuple(hands[i]),
        )
        for i, pid in enumerate(player_ids)
    )
    logger.debug("New game for %d players, start card %s", len(players), start)
    return GameState(
        players=players,
        current_player_index=current % len(players),
        play_direction=direction,
        draw_pile=tuple(deck),
        discard_pile=tuple(discard),
        current_color=start.color,
        current_card=start,
        pending_draw_count=0,
        game_phase=GamePhase.PLAYING,
        turn_phase=TurnPhase.NORMAL,
        drawn_card=None,
        settings=Settings(allow_stacking=allow_stacking),
    )


def is_valid_move(state: GameState, card: Card) -> bool:
    """Check if ``card`` may be played on the current state."""
    if state.game_phase != GamePhase.PLAYING:
        return False

    top = state.current_card

    # Outstanding penalty: only same-kind stacking
    if state.pending_draw_count > 0:
        if not state.settings.allow_stacking or top is None:
            return False
        return card.kind in (CardKind.DRAW_TWO, CardKind.WILD_DRAW_FOUR) and card.kind == top.kind

    if state.turn_phase == TurnPhase.AFTER_DRAW:
        return state.drawn_card is not None and card.id == state.drawn_card.id

    if card.is_wild:
        return True
    if card.color == state.current_color:
        return True
    if top is None:
        return False
    if card.kind == CardKind.NUMBER:
        return top.kind == CardKind.NUMBER and card.value == top.value
    return card.kind == top.kind


def can_challenge(state: GameState) -> bool:
    """A Wild Draw Four is on top and its penalty is still outstanding."""
    top = state.current_card
    return (
        state.game_phase == GamePhase.PLAYING
        and state.pending_draw_count >= 4
        and top is not None
        and top.kind == CardKind.WILD_DRAW_FOUR
    )


def uno_challenge_targets(state: GameState, by_player_id: str) -> List[str]:
    """Players (other than ``by_player_id``) who can be called out for UNO."""
    return PlayerView.from_state(state, by_player_id).uno_challenge_targets()


def get_legal_moves(state: GameState) -> List[Move]:
    """Return all legal moves for the current player."""
    if state.game_phase != GamePhase.PLAYING:
        return []

    player = state.current_player
    going_to_uno = len(player.hand) == 2
    moves: List[Move] = []

    for card in player.hand:
        if not is_valid_move(state, card):
            continue
        if card.is_wild:
            for color in PLAYABLE_COLORS:
                moves.append(PlayCard(card=card, chosen_color=color, called_uno=going_to_uno))
        else:
            moves.append(PlayCard(card=card, called_uno=going_to_uno))

    if state.turn_phase == TurnPhase.AFTER_DRAW:
        moves.append(PassTurn())
    else:
        moves.append(DrawCard())
    if can_challenge(state):
        moves.append(Challenge())
    return moves


def _reject(state: GameState, move: Move, reason: str) -> GameState:
    logger.debug("Rejected %s by %s: %s", move.kind.value, state.current_player.id, reason)
    return state


def _apply_pass(state: GameState, move: PassTurn) -> GameState:
    if state.turn_phase != TurnPhase.AFTER_DRAW:
        return _reject(state, move, "can only pass right after drawing")
    return replace(
        state,
        turn_phase=TurnPhase.NORMAL,
        drawn_card=None,
        current_player_index=_next_index(state),
        history=_log(state, f"{state.current_player.id} passed"),
    )


def _apply_draw(state: GameState, move: DrawCard, rng: Optional[random.Random]) -> GameState:
    if state.turn_phase == TurnPhase.AFTER_DRAW:
        return _reject(state, move, "must play the drawn card or pass")

    penalty = state.pending_draw_count > 0
    amount = state.pending_draw_count if penalty else 1
    cards, draw, discard = draw_cards(state.draw_pile, state.discard_pile, amount, rng)
    player = state.current_player
    drawn_state = replace(
        state,
        players=_update_player(
            state.players,
            state.current_player_index,
            hand=player.hand + tuple(cards),
        ),
        draw_pile=tuple(draw),
        discard_pile=tuple(discard),
    )

    if penalty:
        # Absorbed penalty ends the turn
        return replace(
            drawn_state,
            pending_draw_count=0,
            current_player_index=_next_index(state),
            history=_log(state, f"{player.id} drew {len(cards)} cards (penalty)"),
        )

    drawn = cards[0] if cards else None
    if drawn is not None and is_valid_move(drawn_state, drawn):
        return replace(
            drawn_state,
            turn_phase=TurnPhase.AFTER_DRAW,
            drawn_card=drawn,
            history=_log(state, f"{player.id} drew a card"),
        )
    return replace(
        drawn_state,
        current_player_index=_next_index(state),
        history=_log(state, f"{player.id} drew a card"),
    )


def _apply_challenge(
    state: GameState, move: Challenge, rng: Optional[random.Random]
) -> GameState:
    if not can_challenge(state):
        return _reject(state, move, "no Wild Draw Four to challenge")

    challenger = state.current_player
    accused_index = get_previous_player_index(
        state.current_player_index, len(state.players), state.play_direction
    )
    accused = state.players[accused_index]
    color = state.previous_color or CardColor.RED
    guilty = any(c.color == color for c in accused.hand)

    if guilty:
        # Accused takes the whole (possibly stacked) penalty; challenger keeps the turn
        cards, draw, discard = draw_cards(
            state.draw_pile, state.discard_pile, state.pending_draw_count, rng
        )
        return replace(
            state,
            players=_update_player(
                state.players, accused_index, hand=accused.hand + tuple(cards)
            ),
            draw_pile=tuple(draw),
            discard_pile=tuple(discard),
            pending_draw_count=0,
            history=_log(
                state,
                f"{challenger.id} challenged {accused.id}: guilty, {accused.id} drew {len(cards)} cards",
            ),
        )

    cards, draw, discard = draw_cards(
        state.draw_pile, state.discard_pile, state.pending_draw_count + 2, rng
    )
    return replace(
        state,
        players=_update_player(
            state.players,
            state.current_player_index,
            hand=challenger.hand + tuple(cards),
        ),
        draw_pile=tuple(draw),
        discard_pile=tuple(discard),
        pending_draw_count=0,
        current_player_index=_next_index(state),
        history=_log(
            state,
            f"{challenger.id} challenged {accused.id}: innocent, {challenger.id} drew {len(cards)} cards",
        ),
    )


def _apply_challenge_uno(
    state: GameState, move: ChallengeUno, rng: Optional[random.Random]
) -> GameState:
    index = state.player_index(move.target_player_id)
    if index is None:
        return _reject(state, move, f"unknown player {move.target_player_id!r}")

    target = state.players[index]
    if len(target.hand) != 1 or target.has_called_uno:
        logger.debug("UNO challenge against %s has no effect", target.id)
        return replace(state)

    cards, draw, discard = draw_cards(state.draw_pile, state.discard_pile, 2, rng)
    return replace(
        state,
        players=_update_player(
            state.players, index, hand=target.hand + tuple(cards), has_called_uno=False
        ),
        draw_pile=tuple(draw),
        discard_pile=tuple(discard),
        history=_log(state, f"{target.id} was caught without calling UNO and drew {len(cards)} cards"),
    )


def _apply_play(state: GameState, move: PlayCard) -> GameState:
    player = state.current_player
    hand_index = next((i for i, c in enumerate(player.hand) if c.id == move.card.id), None)
    if hand_index is None:
        return _reject(state, move, f"{move.card} is not in hand")
    played = player.hand[hand_index]
    if not is_valid_move(state, played):
        return _reject(state, move, f"{played} cannot be played now")

    hand = player.hand[:hand_index] + player.hand[hand_index + 1:]

    if played.is_wild:
        color = move.chosen_color
        if color is None or color == CardColor.NONE:
            logger.warning("No color chosen for %s by %s, using red", played, player.id)
            color = CardColor.RED
    else:
        color = played.color

    direction = state.play_direction
    pending = state.pending_draw_count
    skip_next = False
    if played.kind == CardKind.SKIP:
        skip_next = True
    elif played.kind == CardKind.REVERSE:
        # Two players: reversing is the same as skipping the other player
        if len(state.players) == 2:
            skip_next = True
        elif direction == PlayDirection.CLOCKWISE:
            direction = PlayDirection.COUNTER_CLOCKWISE
        else:
            direction = PlayDirection.CLOCKWISE
    elif played.kind == CardKind.DRAW_TWO:
        pending += 2
    elif played.kind == CardKind.WILD_DRAW_FOUR:
        pending += 4

    called_uno = (player.has_called_uno or move.called_uno) and len(hand) == 1

    description = f"{player.id} played {played}"
    if played.is_wild:
        description += f" (chose {color.value})"
    if move.called_uno and called_uno:
        description += " and called UNO"

    played_state = replace(
        state,
        players=_update_player(
            state.players, state.current_player_index, hand=hand, has_called_uno=called_uno
        ),
        discard_pile=state.discard_pile + (played,),
        current_card=played,
        current_color=color,
        previous_color=state.current_color if played.kind == CardKind.WILD_DRAW_FOUR else None,
        play_direction=direction,
        pending_draw_count=pending,
        turn_phase=TurnPhase.NORMAL,
        drawn_card=None,
    )

    if not hand:
        logger.info("%s won the game", player.id)
        return replace(
            played_state,
            game_phase=GamePhase.GAME_OVER,
            winner_id=player.id,
            history=_log(state, f"{description} and WON!"),
        )

    next_index = get_next_player_index(state.current_player_index, len(state.players), direction)
    if skip_next:
        next_index = get_next_player_index(next_index, len(state.players), direction)
    return replace(
        played_state,
        current_player_index=next_index,
        history=_log(state, description),
    )


def execute_move(
    state: GameState,
    move: Move,
    *,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Apply a move for the current player and return the new game state.

    An illegal move returns ``state`` itself, unchanged.
    """
    if state.game_phase != GamePhase.PLAYING:
        return _reject(state, move, "game is not in progress")

    if isinstance(move, PlayCard):
        return _apply_play(state, move)
    if isinstance(move, DrawCard):
        return _apply_draw(state, move, rng)
    if isinstance(move, PassTurn):
        return _apply_pass(state, move)
    if isinstance(move, Challenge):
        return _apply_challenge(state, move, rng)
    if isinstance(move, ChallengeUno):
        return _apply_challenge_uno(state, move, rng)
    raise TypeError(f"Not a move: {move!r}")
