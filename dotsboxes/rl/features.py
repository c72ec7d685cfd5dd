"""Encodage ObservationTensor d'un GameState.

L'encodage utilise une perspective ego-centrée : les cases et le score du
joueur au trait sont toujours encodés en premier, ceux de l'adversaire en
second.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from dotsboxes.engine.state import GameState, opponent_of
from dotsboxes.sim.runner import ActionSpace, build_default_action_catalog


@dataclass(frozen=True)
class ObservationTensor:
    """Structure regroupant les tenseurs d'une observation."""

    horizontal_edges: np.ndarray
    vertical_edges: np.ndarray
    cells: np.ndarray
    scores: np.ndarray
    metadata: np.ndarray
    legal_actions_mask: np.ndarray


def build_observation(
    state: GameState,
    *,
    action_space: ActionSpace | None = None,
) -> ObservationTensor:
    """Construit un ObservationTensor normalisé à partir d'un GameState.

    Args:
        state: état du jeu à encoder.
        action_space: catalogue aligné sur la grille (par défaut, tous les traits).

    Returns:
        ObservationTensor avec les traits, les cases, les scores et le masque légal.
    """

    current_player = state.current_player
    return ObservationTensor(
        horizontal_edges=np.array(state.horizontal_edges, dtype=np.float32),
        vertical_edges=np.array(state.vertical_edges, dtype=np.float32),
        cells=_encode_cells(state, current_player),
        scores=_encode_scores(state, current_player),
        metadata=_encode_metadata(state),
        legal_actions_mask=_encode_legal_actions(state, action_space),
    )


def _encode_cells(state: GameState, current_player: int) -> np.ndarray:
    """Encode cells with ego-centric perspective.

    Values: -1.0 (empty), 0.0 (current player), 1.0 (opponent)
    """
    owners = np.array(state.cells, dtype=np.int8)
    tensor = np.full(owners.shape, -1.0, dtype=np.float32)
    tensor[owners == current_player] = 0.0
    tensor[owners == opponent_of(current_player)] = 1.0
    return tensor


def _encode_scores(state: GameState, current_player: int) -> np.ndarray:
    total_cells = float((state.width - 1) * (state.height - 1))
    return np.array(
        [
            state.score_of(current_player) / total_cells,
            state.score_of(opponent_of(current_player)) / total_cells,
        ],
        dtype=np.float32,
    )


def _encode_metadata(state: GameState) -> np.ndarray:
    """Encode game metadata.

    Indices:
        0: Extra turn pending (1.0 if true)
        1: Drawn edges (fraction of all edges)
        2: Unclaimed cells (fraction of all cells)
    """
    total_cells = (state.width - 1) * (state.height - 1)
    metadata = np.zeros(3, dtype=np.float32)
    metadata[0] = 1.0 if state.extra_turn_pending else 0.0
    metadata[1] = state.drawn_edge_count / state.total_edge_count
    metadata[2] = (total_cells - state.claimed_cell_count) / total_cells
    return metadata


def _encode_legal_actions(
    state: GameState, action_space: ActionSpace | None
) -> np.ndarray:
    space = action_space or ActionSpace(
        build_default_action_catalog(state.width, state.height)
    )
    legal_actions = state.legal_actions()
    space.register(legal_actions)
    return np.array(space.mask(legal_actions), dtype=np.bool_)


__all__ = ["ObservationTensor", "build_observation"]
