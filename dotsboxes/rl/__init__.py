"""Encodage des observations pour la recherche et l'apprentissage.

Exemple :
    >>> from dotsboxes.engine.state import GameState
    >>> from dotsboxes.rl.features import build_observation
    >>>
    >>> obs = build_observation(GameState.new_game(3, 3))
    >>> obs.horizontal_edges.shape
    (3, 2)
"""

from .features import ObservationTensor, build_observation

__all__ = [
    "ObservationTensor",
    "build_observation",
]
