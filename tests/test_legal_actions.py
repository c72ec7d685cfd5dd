"""Tests d'énumération des coups légaux et de terminaison."""

import random

import pytest

from dotsboxes.engine.actions import DrawEdge, Orientation
from dotsboxes.engine.state import (
    REJECTED,
    GameState,
    apply_move,
    create_game,
    is_game_over,
    legal_moves,
)


def test_initial_moves_cover_every_edge():
    state = create_game(4, 3)
    moves = legal_moves(state)

    assert isinstance(moves, tuple)
    assert len(moves) == state.total_edge_count == 3 * 3 + 2 * 4
    assert len(set(moves)) == len(moves)


def test_moves_are_horizontal_then_vertical_in_row_major_order():
    moves = legal_moves(create_game(3, 2))

    assert moves == (
        DrawEdge(Orientation.HORIZONTAL, 0, 0),
        DrawEdge(Orientation.HORIZONTAL, 0, 1),
        DrawEdge(Orientation.HORIZONTAL, 1, 0),
        DrawEdge(Orientation.HORIZONTAL, 1, 1),
        DrawEdge(Orientation.VERTICAL, 0, 0),
        DrawEdge(Orientation.VERTICAL, 0, 1),
        DrawEdge(Orientation.VERTICAL, 0, 2),
    )


def test_drawn_edges_are_excluded():
    state = create_game(3, 3)
    state = apply_move(state, Orientation.VERTICAL, 1, 1)
    state = apply_move(state, Orientation.HORIZONTAL, 0, 0)

    moves = legal_moves(state)

    assert DrawEdge.vertical(1, 1) not in moves
    assert DrawEdge.horizontal(0, 0) not in moves
    assert len(moves) == state.total_edge_count - 2


def test_every_enumerated_move_is_legal():
    state = create_game(4, 4)
    for move in legal_moves(state):
        assert state.is_action_legal(move)


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 2024])
def test_random_order_reaches_terminal_state(seed):
    """Quel que soit l'ordre des coups, la partie se termine avec les invariants."""

    rng = random.Random(seed)
    state = create_game(5, 4)
    total_cells = (state.width - 1) * (state.height - 1)

    while not is_game_over(state):
        moves = legal_moves(state)
        assert moves
        move = rng.choice(moves)
        previous = state

        state = apply_move(state, move.orientation, move.row, move.col)

        assert isinstance(state, GameState)
        assert state.drawn_edge_count == previous.drawn_edge_count + 1
        assert state.score_player_1 + state.score_player_2 == state.claimed_cell_count
        gained = state.claimed_cell_count - previous.claimed_cell_count
        if gained:
            assert state.current_player == previous.current_player
            assert state.extra_turn_pending
        else:
            assert state.current_player != previous.current_player
            assert not state.extra_turn_pending

    assert legal_moves(state) == ()
    assert state.claimed_cell_count == total_cells
    assert state.score_player_1 + state.score_player_2 == total_cells


def test_terminal_state_is_absorbing():
    state = create_game(2, 2)
    for move in legal_moves(state):
        state = apply_move(state, move.orientation, move.row, move.col)

    assert is_game_over(state)
    for orientation in Orientation:
        assert apply_move(state, orientation, 0, 0) is REJECTED


def test_game_is_over_only_when_last_edge_is_drawn():
    state = create_game(3, 3)
    moves = legal_moves(state)

    for move in moves[:-1]:
        state = state.apply_action(move)
        assert not is_game_over(state)

    state = state.apply_action(moves[-1])
    assert is_game_over(state)
