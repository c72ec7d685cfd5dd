"""Moteur de règles : état immuable, coups, rendu texte et sérialisation."""

from . import rules  # re-export for convenience
from .actions import Action, DrawEdge, Orientation
from .render import render_text
from .state import (
    REJECTED,
    DotsAndBoxesError,
    GameState,
    IllegalMove,
    InvalidDimensions,
    Outcome,
    Owner,
    apply_move,
    completed_cells,
    create_game,
    is_edge_drawn,
    is_game_over,
    is_legal_move,
    legal_moves,
    winner,
)

__all__ = [
    "rules",
    "Action",
    "DrawEdge",
    "Orientation",
    "GameState",
    "Owner",
    "Outcome",
    "REJECTED",
    "DotsAndBoxesError",
    "IllegalMove",
    "InvalidDimensions",
    "create_game",
    "is_edge_drawn",
    "is_legal_move",
    "completed_cells",
    "apply_move",
    "is_game_over",
    "winner",
    "legal_moves",
    "render_text",
]
