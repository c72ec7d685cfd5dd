"""Actions du jeu.

Une seule action existe : tracer un trait entre deux points adjacents.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(Enum):
    """Orientation d'un trait ; détermine la grille et les bornes d'indices."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Action:
    """Action de base."""

    pass


@dataclass(frozen=True)
class DrawEdge(Action):
    """Trace un trait.

    Args:
        orientation: HORIZONTAL relie (row, col) à (row, col + 1),
            VERTICAL relie (row, col) à (row + 1, col)
        row: ligne du point d'origine
        col: colonne du point d'origine
    """

    orientation: Orientation
    row: int
    col: int

    def __post_init__(self) -> None:
        # Accepte aussi la valeur texte ("horizontal"/"vertical")
        object.__setattr__(self, "orientation", Orientation(self.orientation))

    @classmethod
    def horizontal(cls, row: int, col: int) -> "DrawEdge":
        return cls(Orientation.HORIZONTAL, row, col)

    @classmethod
    def vertical(cls, row: int, col: int) -> "DrawEdge":
        return cls(Orientation.VERTICAL, row, col)


__all__ = [
    "Orientation",
    "Action",
    "DrawEdge",
]
