"""Outils de sérialisation pour GameState.

- Snapshot JSON-friendly (listes/dicts primitifs, traits encodés 0/1)
- Restauration complète de GameState avec contrôle des invariants
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from dotsboxes.engine.rules import PLAYER_IDS
from dotsboxes.engine.state import GameState, InvalidDimensions, Owner, validate_dimensions

SCHEMA_VERSION = "1.0.0"


def state_to_snapshot(state: GameState) -> Dict[str, Any]:
    """Convertit un GameState en snapshot JSON-friendly."""

    snapshot: Dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "variant": {"width": state.width, "height": state.height},
        "horizontal_edges": _serialize_edges(state.horizontal_edges),
        "vertical_edges": _serialize_edges(state.vertical_edges),
        "cells": [[int(owner) for owner in row] for row in state.cells],
        "current_player": state.current_player,
        "scores": {"1": state.score_player_1, "2": state.score_player_2},
        "extra_turn_pending": state.extra_turn_pending,
    }
    return snapshot


def snapshot_to_state(snapshot: Mapping[str, Any]) -> GameState:
    """Reconstruit un GameState à partir d'un snapshot.

    Raises:
        ValueError: version inconnue ou invariants de propriété violés
        InvalidDimensions: grilles incohérentes avec les dimensions annoncées
    """

    version = snapshot.get("schema_version")
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema_version: {version!r}")

    variant = snapshot.get("variant", {})
    width = variant.get("width")
    height = variant.get("height")
    validate_dimensions(width, height)

    horizontal = _deserialize_edges(
        snapshot["horizontal_edges"], height, width - 1, "horizontal_edges"
    )
    vertical = _deserialize_edges(
        snapshot["vertical_edges"], height - 1, width, "vertical_edges"
    )
    cells = _deserialize_cells(snapshot["cells"], height - 1, width - 1)

    current_player = int(snapshot["current_player"])
    if current_player not in PLAYER_IDS:
        raise ValueError(f"Joueur courant invalide: {current_player!r}")

    scores = snapshot.get("scores", {})
    state = GameState(
        width=width,
        height=height,
        horizontal_edges=horizontal,
        vertical_edges=vertical,
        cells=cells,
        current_player=current_player,
        score_player_1=int(scores.get("1", 0)),
        score_player_2=int(scores.get("2", 0)),
        extra_turn_pending=bool(snapshot.get("extra_turn_pending", False)),
    )
    _check_ownership(state)
    return state


def _serialize_edges(grid: Sequence[Sequence[bool]]) -> List[List[int]]:
    return [[1 if drawn else 0 for drawn in row] for row in grid]


def _deserialize_edges(
    payload: Sequence[Sequence[Any]], rows: int, cols: int, name: str
) -> Tuple[Tuple[bool, ...], ...]:
    _check_shape(payload, rows, cols, name)
    return tuple(tuple(bool(flag) for flag in row) for row in payload)


def _deserialize_cells(
    payload: Sequence[Sequence[Any]], rows: int, cols: int
) -> Tuple[Tuple[Owner, ...], ...]:
    _check_shape(payload, rows, cols, "cells")
    return tuple(tuple(Owner(int(value)) for value in row) for row in payload)


def _check_shape(
    payload: Sequence[Sequence[Any]], rows: int, cols: int, name: str
) -> None:
    if len(payload) != rows or any(len(row) != cols for row in payload):
        found_cols = len(payload[0]) if payload else 0
        raise InvalidDimensions(
            cols,
            rows,
            f"{name}: grille {len(payload)}x{found_cols} au lieu de {rows}x{cols}",
        )


def _check_ownership(state: GameState) -> None:
    """Une case est prise si et seulement si ses quatre côtés sont tracés."""

    counts = {1: 0, 2: 0}
    for row, owners in enumerate(state.cells):
        for col, owner in enumerate(owners):
            closed = (
                state.horizontal_edges[row][col]
                and state.horizontal_edges[row + 1][col]
                and state.vertical_edges[row][col]
                and state.vertical_edges[row][col + 1]
            )
            if closed != (owner != Owner.NONE):
                raise ValueError(f"Case ({row}, {col}) incohérente avec ses traits")
            if owner != Owner.NONE:
                counts[int(owner)] += 1

    if (state.score_player_1, state.score_player_2) != (counts[1], counts[2]):
        raise ValueError("Scores incohérents avec les cases prises")


__all__ = ["SCHEMA_VERSION", "state_to_snapshot", "snapshot_to_state"]
