"""Tests for converting states and moves to and from plain dicts."""

import json
import random

import pytest

from unorules.engine import (
    CardColor,
    CardKind,
    Challenge,
    ChallengeUno,
    DrawCard,
    GameState,
    PassTurn,
    PlayCard,
    TurnPhase,
    initialize_game,
    move_from_dict,
)

from helpers import filler, make_state, num, wild


def test_state_dict_is_json_compatible_and_restores() -> None:
    state = make_state([filler(3), filler(2)], num(CardColor.RED, 4), draw_pile=filler(4))
    restored = GameState.from_dict(json.loads(json.dumps(state.to_dict())))
    assert restored == state


def test_initial_state_round_trip() -> None:
    state = initialize_game(["a", "b", "c"], ["Ann", "Bo", "Cy"], rng=random.Random(5))
    restored = GameState.from_dict(json.loads(json.dumps(state.to_dict())))
    assert restored == state
    assert restored.card_count() == 108


def test_state_dict_shape() -> None:
    drawn = num(CardColor.RED, 1)
    state = make_state(
        [[drawn], filler(2)],
        wild(CardKind.WILD_DRAW_FOUR),
        current_color=CardColor.BLUE,
        previous_color=CardColor.GREEN,
        pending=4,
        turn_phase=TurnPhase.AFTER_DRAW,
        drawn_card=drawn,
    )
    data = state.to_dict()
    assert data["currentColor"] == "blue"
    assert data["previousColor"] == "green"
    assert data["pendingDrawCount"] == 4
    assert data["turnPhase"] == "after_draw"
    assert data["drawnCard"]["id"] == drawn.id
    assert data["currentCard"] == {"id": state.current_card.id, "type": "wild_draw_four", "color": "none"}
    assert data["players"][0]["hasCalledUno"] is False
    assert data["settings"] == {"allowStacking": True}


def test_move_from_dict() -> None:
    card = wild()
    play = move_from_dict(
        {"type": "play", "card": card.to_dict(), "chosenColor": "green", "calledUno": True}
    )
    assert play == PlayCard(card=card, chosen_color=CardColor.GREEN, called_uno=True)
    assert move_from_dict(play.to_dict()) == play
    assert isinstance(move_from_dict({"type": "draw"}), DrawCard)
    assert isinstance(move_from_dict({"type": "pass"}), PassTurn)
    assert isinstance(move_from_dict({"type": "challenge"}), Challenge)
    assert move_from_dict({"type": "challenge-uno", "targetPlayerId": "p2"}) == ChallengeUno("p2")


@pytest.mark.parametrize(
    "data",
    [{"type": "play"}, {"type": "challenge-uno"}, {"type": "shuffle"}],
)
def test_move_from_dict_rejects_malformed(data) -> None:
    with pytest.raises(ValueError):
        move_from_dict(data)
