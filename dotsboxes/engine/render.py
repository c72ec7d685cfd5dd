"""Rendu texte d'un GameState.

Les lignes de points alternent avec les lignes de cases:

    •───•   •
    │ 1 │
    •───•   •

Un trait non tracé est rendu par des espaces, une case prise par le numéro
de son propriétaire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from dotsboxes.engine.rules import DOT_GLYPH, HORIZONTAL_GLYPH, VERTICAL_GLYPH
from dotsboxes.engine.state import GameState, Owner


@dataclass(frozen=True)
class TextGlyphs:
    """Jeu de glyphes ; `horizontal` fixe la largeur d'une case."""

    dot: str = DOT_GLYPH
    horizontal: str = HORIZONTAL_GLYPH
    vertical: str = VERTICAL_GLYPH

    def __post_init__(self) -> None:
        if len(self.dot) != 1 or len(self.vertical) != 1:
            raise ValueError("Les glyphes de point et de trait vertical font un caractère")
        if not self.horizontal:
            raise ValueError("Le glyphe horizontal ne peut pas être vide")


UNICODE_GLYPHS = TextGlyphs()
ASCII_GLYPHS = TextGlyphs(dot="+", horizontal="---", vertical="|")


def render_text(state: GameState, glyphs: TextGlyphs = UNICODE_GLYPHS) -> str:
    """Produit le diagramme texte de la grille, une ligne par rangée."""

    span = len(glyphs.horizontal)
    blank = " " * span
    lines: List[str] = []

    for row in range(state.height):
        parts: List[str] = []
        for col in range(state.width):
            parts.append(glyphs.dot)
            if col < state.width - 1:
                parts.append(glyphs.horizontal if state.horizontal_edges[row][col] else blank)
        lines.append("".join(parts))

        if row == state.height - 1:
            break

        parts = []
        for col in range(state.width):
            parts.append(glyphs.vertical if state.vertical_edges[row][col] else " ")
            if col < state.width - 1:
                parts.append(_cell_label(state.cells[row][col], span))
        lines.append("".join(parts))

    return "\n".join(lines) + "\n"


def _cell_label(owner: Owner, span: int) -> str:
    if owner == Owner.NONE:
        return " " * span
    return str(int(owner)).center(span)


__all__ = ["TextGlyphs", "UNICODE_GLYPHS", "ASCII_GLYPHS", "render_text"]
