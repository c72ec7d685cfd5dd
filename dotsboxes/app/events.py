"""Évènements publiés par la couche application (`dotsboxes.app`)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from dotsboxes.engine.actions import DrawEdge
from dotsboxes.engine.state import Cell, GameState, Outcome


@dataclass(frozen=True)
class GameStartedEvent:
    """Émis lorsqu'une nouvelle partie est initialisée."""

    state: GameState


@dataclass(frozen=True)
class MoveAppliedEvent:
    """Émis après qu'un trait légal a été tracé."""

    move: DrawEdge
    previous_state: GameState
    new_state: GameState
    completed_cells: Tuple[Cell, ...] = ()


@dataclass(frozen=True)
class MoveRejectedEvent:
    """Émis quand un coup est refusé ; l'état n'a pas changé.

    `move` vaut None si la demande ne forme pas un trait (orientation inconnue) ;
    `request` garde toujours (orientation, row, col) tels que reçus.
    """

    move: Optional[DrawEdge]
    state: GameState
    request: Tuple[Any, Any, Any] = (None, None, None)


@dataclass(frozen=True)
class GameEndedEvent:
    """Émis quand le dernier trait est tracé."""

    state: GameState
    outcome: Outcome
