"""Tests du vainqueur et de l'égalité."""

from dataclasses import replace

from dotsboxes.engine.actions import DrawEdge
from dotsboxes.engine.state import Outcome, create_game, is_game_over, winner


class TestWinner:
    """winner compare strictement les scores."""

    def test_player_one_wins_with_more_cells(self):
        state = replace(create_game(3, 3), score_player_1=3, score_player_2=1)
        assert winner(state) == Outcome.PLAYER_1

    def test_player_two_wins_with_more_cells(self):
        state = replace(create_game(3, 3), score_player_1=1, score_player_2=3)
        assert winner(state) == Outcome.PLAYER_2

    def test_equal_scores_is_a_tie(self):
        state = replace(create_game(3, 3), score_player_1=2, score_player_2=2)
        assert winner(state) == Outcome.TIE

    def test_winner_is_callable_before_the_end(self):
        state = create_game(3, 3)

        assert not is_game_over(state)
        assert winner(state) == Outcome.TIE

    def test_outcome_numbering(self):
        assert [int(o) for o in (Outcome.TIE, Outcome.PLAYER_1, Outcome.PLAYER_2)] == [0, 1, 2]


def test_closing_both_cells_with_the_last_edge_wins():
    moves = [
        DrawEdge.horizontal(0, 0),  # J1
        DrawEdge.horizontal(1, 0),  # J2
        DrawEdge.vertical(0, 0),  # J1
        DrawEdge.horizontal(0, 1),  # J2
        DrawEdge.horizontal(1, 1),  # J1
        DrawEdge.vertical(0, 2),  # J2
    ]
    state = create_game(3, 2)
    for move in moves:
        state = state.apply_action(move)
    assert state.current_player == 1
    assert state.claimed_cell_count == 0

    final = state.apply_action(DrawEdge.vertical(0, 1))

    assert is_game_over(final)
    assert winner(final) == Outcome.PLAYER_1


def test_full_game_ending_in_a_tie():
    """J1 ferme la case de gauche, J2 celle de droite."""

    moves = [
        DrawEdge.vertical(0, 1),  # J1
        DrawEdge.horizontal(0, 1),  # J2
        DrawEdge.horizontal(0, 0),  # J1
        DrawEdge.horizontal(1, 0),  # J2
        DrawEdge.vertical(0, 0),  # J1 ferme (0, 0) et rejoue
        DrawEdge.horizontal(1, 1),  # J1
        DrawEdge.vertical(0, 2),  # J2 ferme (0, 1)
    ]
    state = create_game(3, 2)
    for move in moves:
        state = state.apply_action(move)

    assert is_game_over(state)
    assert (state.score_player_1, state.score_player_2) == (1, 1)
    assert state.current_player == 2
    assert winner(state) == Outcome.TIE
