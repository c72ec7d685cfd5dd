"""Tests de fermeture des cases, du score et de l'alternance des tours."""

from typing import Iterable

import pytest

from dotsboxes.engine.actions import DrawEdge, Orientation
from dotsboxes.engine.state import (
    GameState,
    IllegalMove,
    Outcome,
    Owner,
    apply_move,
    completed_cells,
    create_game,
    is_game_over,
    winner,
)

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def _play(state: GameState, moves: Iterable[DrawEdge]) -> GameState:
    """Applique une suite de coups légaux."""
    for move in moves:
        state = state.apply_action(move)
    return state


class TestSingleCellGrid:
    """Grille 2x2 points : une seule case, quatre traits."""

    def test_three_sides_complete_nothing(self):
        state = _play(
            create_game(2, 2),
            [DrawEdge.horizontal(0, 0), DrawEdge.horizontal(1, 0), DrawEdge.vertical(0, 0)],
        )

        assert state.claimed_cell_count == 0
        assert state.score_player_1 == 0
        assert state.score_player_2 == 0
        assert state.current_player == 2
        assert not is_game_over(state)

    def test_fourth_side_claims_the_cell(self):
        state = _play(
            create_game(2, 2),
            [DrawEdge.horizontal(0, 0), DrawEdge.horizontal(1, 0), DrawEdge.vertical(0, 0)],
        )
        mover = state.current_player

        final = apply_move(state, V, 0, 1)

        assert final.cells[0][0] == Owner(mover)
        assert final.score_of(mover) == 1
        assert final.current_player == mover
        assert final.extra_turn_pending is True
        assert is_game_over(final)
        assert winner(final) == Outcome(mover)
        assert final.legal_actions() == []

    @pytest.mark.parametrize(
        "last",
        [
            DrawEdge.horizontal(0, 0),
            DrawEdge.horizontal(1, 0),
            DrawEdge.vertical(0, 0),
            DrawEdge.vertical(0, 1),
        ],
    )
    def test_any_side_can_close_the_cell(self, last):
        all_edges = create_game(2, 2).legal_actions()
        state = _play(create_game(2, 2), [edge for edge in all_edges if edge != last])

        assert completed_cells(state, last.orientation, last.row, last.col) == ((0, 0),)
        final = state.apply_action(last)
        assert final.claimed_cell_count == 1


class TestCompletedCells:
    """completed_cells examine au plus les deux cases bordant le trait."""

    def test_boundary_edges_only_check_inner_cell(self):
        state = create_game(3, 3)

        # Aucun trait autour : rien n'est fermé, même aux bords de la grille
        assert completed_cells(state, H, 0, 0) == ()
        assert completed_cells(state, H, 2, 1) == ()
        assert completed_cells(state, V, 0, 0) == ()
        assert completed_cells(state, V, 1, 2) == ()

    def test_vertical_edge_between_two_closed_cells(self):
        # 3x2 points : deux cases côte à côte partageant le trait V(0, 1)
        state = _play(
            create_game(3, 2),
            [
                DrawEdge.horizontal(0, 0),
                DrawEdge.horizontal(0, 1),
                DrawEdge.horizontal(1, 0),
                DrawEdge.horizontal(1, 1),
                DrawEdge.vertical(0, 0),
                DrawEdge.vertical(0, 2),
            ],
        )

        assert completed_cells(state, V, 0, 1) == ((0, 0), (0, 1))

    def test_horizontal_edge_between_two_closed_cells(self):
        # 2x3 points : deux cases superposées partageant le trait H(1, 0)
        state = _play(
            create_game(2, 3),
            [
                DrawEdge.horizontal(0, 0),
                DrawEdge.horizontal(2, 0),
                DrawEdge.vertical(0, 0),
                DrawEdge.vertical(0, 1),
                DrawEdge.vertical(1, 0),
                DrawEdge.vertical(1, 1),
            ],
        )

        assert completed_cells(state, H, 1, 0) == ((0, 0), (1, 0))

    def test_only_one_side_closed(self):
        state = _play(
            create_game(3, 2),
            [
                DrawEdge.horizontal(0, 0),
                DrawEdge.horizontal(1, 0),
                DrawEdge.vertical(0, 0),
            ],
        )

        assert completed_cells(state, V, 0, 1) == ((0, 0),)

    @pytest.mark.parametrize(
        "orientation,row,col",
        [(H, -1, 0), (H, 3, 0), (H, 0, 2), (V, 0, 3), (V, 2, 0), (V, 0, -1)],
    )
    def test_out_of_range_edge_raises(self, orientation, row, col):
        # Un indice négatif ne se replie jamais sur la fin de la grille
        state = create_game(3, 3)

        with pytest.raises(IndexError):
            completed_cells(state, orientation, row, col)


class TestDoubleCompletion:
    def test_shared_edge_scores_two_in_one_move(self):
        state = _play(
            create_game(3, 2),
            [
                DrawEdge.horizontal(0, 0),
                DrawEdge.horizontal(0, 1),
                DrawEdge.horizontal(1, 0),
                DrawEdge.horizontal(1, 1),
                DrawEdge.vertical(0, 0),
                DrawEdge.vertical(0, 2),
            ],
        )
        assert state.current_player == 1

        final = apply_move(state, V, 0, 1)

        assert final.score_player_1 == 2
        assert final.score_player_2 == 0
        assert final.cells == ((Owner.PLAYER_1, Owner.PLAYER_1),)
        assert final.current_player == 1
        assert final.extra_turn_pending is True
        assert is_game_over(final)
        assert winner(final) == Outcome.PLAYER_1


class TestTurnTransition:
    def test_move_without_completion_switches_player(self):
        state = create_game(4, 4)

        state = apply_move(state, H, 0, 0)
        assert state.current_player == 2
        assert state.extra_turn_pending is False

        state = apply_move(state, H, 0, 1)
        assert state.current_player == 1

    def test_extra_turn_is_cleared_by_next_plain_move(self):
        state = _play(
            create_game(3, 2),
            [DrawEdge.horizontal(0, 0), DrawEdge.horizontal(1, 0), DrawEdge.vertical(0, 0)],
        )
        mover = state.current_player
        state = apply_move(state, V, 0, 1)
        assert state.extra_turn_pending is True
        assert state.current_player == mover

        state = apply_move(state, H, 0, 1)
        assert state.extra_turn_pending is False
        assert state.current_player != mover

    def test_claimed_cells_are_never_reassigned(self):
        state = _play(
            create_game(3, 2),
            [DrawEdge.horizontal(0, 0), DrawEdge.horizontal(1, 0), DrawEdge.vertical(0, 0)],
        )
        state = apply_move(state, V, 0, 1)
        owner = state.cells[0][0]

        state = _play(state, state.legal_actions())

        assert state.cells[0][0] == owner


class TestApplyAction:
    def test_illegal_action_raises(self):
        state = create_game(3, 3)

        with pytest.raises(IllegalMove) as excinfo:
            state.apply_action(DrawEdge.horizontal(3, 0))

        assert excinfo.value.move == DrawEdge.horizontal(3, 0)

    def test_drawn_edge_action_raises_value_error(self):
        state = create_game(3, 3).apply_action(DrawEdge.vertical(0, 0))

        with pytest.raises(ValueError):
            state.apply_action(DrawEdge.vertical(0, 0))

    def test_is_action_legal_rejects_foreign_actions(self):
        state = create_game(3, 3)

        assert not state.is_action_legal(object())  # type: ignore[arg-type]
        assert state.is_action_legal(DrawEdge.horizontal(0, 0))
