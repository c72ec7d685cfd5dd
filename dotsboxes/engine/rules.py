"""Règles et constantes de la partie.

Ce module expose le contrat minimal attendu par le moteur et les tests:
- dimensions par défaut et minimales de la grille de points
- identifiants des joueurs
- glyphes utilisés par `render_text`
"""

# Grille de points (largeur x hauteur) : 5x5 points = 4x4 cases
DEFAULT_WIDTH: int = 5
DEFAULT_HEIGHT: int = 5
MIN_DIMENSION: int = 2

# Joueurs
PLAYER_IDS: tuple[int, ...] = (1, 2)
FIRST_PLAYER: int = 1

# Rendu texte
DOT_GLYPH: str = "•"
HORIZONTAL_GLYPH: str = "───"
VERTICAL_GLYPH: str = "│"

__all__ = [
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "MIN_DIMENSION",
    "PLAYER_IDS",
    "FIRST_PLAYER",
    "DOT_GLYPH",
    "HORIZONTAL_GLYPH",
    "VERTICAL_GLYPH",
]
