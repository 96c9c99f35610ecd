"""Unit tests for game history logging."""

from unorules.engine import CardColor, DrawCard, PlayCard, execute_move, initialize_game

from helpers import filler, make_state, num, wild


def test_history_initialization():
    state = initialize_game(["p1", "p2"])
    assert len(state.history) == 0


def test_history_records_play():
    card = num(CardColor.GREEN, 3)
    state = make_state([[card] + filler(2), filler(3)], num(CardColor.GREEN, 8))
    state = execute_move(state, PlayCard(card=card))

    assert len(state.history) == 1
    assert "p1 played" in state.history[0]
    assert str(card) in state.history[0]


def test_history_records_wild_color():
    w = wild()
    state = make_state([[w] + filler(2), filler(3)], num(CardColor.GREEN, 8))
    state = execute_move(state, PlayCard(card=w, chosen_color=CardColor.BLUE))
    assert state.history[-1] == "p1 played wild (chose blue)"


def test_history_records_draw():
    state = make_state([filler(3), filler(3)], num(CardColor.RED, 2), draw_pile=[num(CardColor.BLUE, 9)])
    state = execute_move(state, DrawCard())

    assert len(state.history) == 1
    assert "p1 drew" in state.history[-1]


def test_rejected_move_adds_no_history():
    state = make_state([filler(3), filler(3)], num(CardColor.RED, 2))
    state = execute_move(state, PlayCard(card=num(CardColor.RED, 5)))
    assert state.history == ()


def test_history_persists_across_turns():
    card = num(CardColor.GREEN, 3)
    state = make_state(
        [[card] + filler(2), filler(3)],
        num(CardColor.GREEN, 8),
        draw_pile=[num(CardColor.BLUE, 9)],
    )
    state = execute_move(state, PlayCard(card=card))
    state = execute_move(state, DrawCard())

    assert len(state.history) == 2
    assert "p1 played" in state.history[0]
    assert "p2 drew" in state.history[1]
