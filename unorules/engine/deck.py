"""Deck creation, shuffling and drawing."""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from unorules.engine.card import PLAYABLE_COLORS, Card, CardColor, CardKind

logger = logging.getLogger(__name__)

DECK_SIZE = 108


def shuffle_deck(cards: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards`` (Fisher-Yates)."""
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)
    return shuffled


def create_deck(rng: Optional[random.Random] = None, shuffle: bool = True) -> List[Card]:
    """Create a standard 108-card UNO deck.

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    - Total: 108 cards
    """
    cards: List[Card] = []

    for color in PLAYABLE_COLORS:
        cards.append(Card(CardKind.NUMBER, color, 0))
        for value in range(1, 10):
            cards.append(Card(CardKind.NUMBER, color, value))
            cards.append(Card(CardKind.NUMBER, color, value))
        for kind in (CardKind.SKIP, CardKind.REVERSE, CardKind.DRAW_TWO):
            cards.append(Card(kind, color))
            cards.append(Card(kind, color))

    for _ in range(4):
        cards.append(Card(CardKind.WILD, CardColor.NONE))
        cards.append(Card(CardKind.WILD_DRAW_FOUR, CardColor.NONE))

    if shuffle:
        return shuffle_deck(cards, rng)
    return cards


def draw_cards(
    draw_pile: Sequence[Card],
    discard_pile: Sequence[Card],
    count: int,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Card], List[Card], List[Card]]:
    """Draw ``count`` cards off the top (end) of the draw pile.

    An empty draw pile is refilled from the discard pile, keeping its top
    card in place. If the discard pile cannot refill it either, fewer cards
    than requested are returned.

    Returns (drawn, new_draw_pile, new_discard_pile); the inputs are not
    modified.
    """
    draw = list(draw_pile)
    discard = list(discard_pile)
    drawn: List[Card] = []

    for _ in range(count):
        if not draw:
            if len(discard) <= 1:
                logger.warning(
                    "Deck exhausted: drew %d of %d requested cards", len(drawn), count
                )
                break
            top = discard.pop()
            draw = shuffle_deck(discard, rng)
            discard = [top]
            logger.debug("Reshuffled %d discarded cards into the draw pile", len(draw))
        drawn.append(draw.pop())

    return drawn, draw, discard
