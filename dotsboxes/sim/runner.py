"""Boucle headless pour le moteur Dots and Boxes.

Ce module expose un environnement minimaliste pour piloter le moteur via une
API `reset()` / `step()` et fournir un masque d'actions stable, base des
recherches exhaustives et des encodeurs d'observation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

from dotsboxes.engine.actions import DrawEdge
from dotsboxes.engine.rules import DEFAULT_HEIGHT, DEFAULT_WIDTH
from dotsboxes.engine.state import GameState, IllegalMove

logger = logging.getLogger(__name__)

MoveSelector = Callable[[GameState, Sequence[DrawEdge]], DrawEdge]


class ActionSpace:
    """Maintient un catalogue d'actions unique et fournit des masques."""

    def __init__(self, initial_actions: Sequence[DrawEdge] | None = None) -> None:
        self._catalog: List[DrawEdge] = []
        self._index: Dict[DrawEdge, int] = {}
        if initial_actions:
            self.register(initial_actions)

    @property
    def catalog(self) -> List[DrawEdge]:
        """Retourne une copie du catalogue courant."""

        return list(self._catalog)

    def __len__(self) -> int:
        return len(self._catalog)

    def index_of(self, action: DrawEdge) -> int:
        return self._index[action]

    def register(self, actions: Iterable[DrawEdge]) -> None:
        """Ajoute les actions au catalogue si elles n'y figurent pas déjà."""

        for action in actions:
            if action in self._index:
                continue
            self._index[action] = len(self._catalog)
            self._catalog.append(action)

    def mask(self, legal_actions: Iterable[DrawEdge]) -> List[bool]:
        """Construit le masque booléen aligné sur le catalogue courant."""

        legal = set(legal_actions)
        return [action in legal for action in self._catalog]


def build_default_action_catalog(
    width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
) -> List[DrawEdge]:
    """Tous les traits de la grille, dans l'ordre de `legal_moves`."""

    return GameState.new_game(width, height).legal_actions()


@dataclass(frozen=True)
class StepResult:
    """Résultat d'un appel à HeadlessEnv.step()."""

    state: GameState
    reward: Tuple[float, float]
    done: bool
    info: Dict[str, Any]


def first_legal(state: GameState, legal: Sequence[DrawEdge]) -> DrawEdge:
    """Sélecteur déterministe : premier trait libre."""

    return legal[0]


class HeadlessEnv:
    """Environnement headless léger pour le moteur Dots and Boxes."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        self._width = width
        self._height = height
        self._state: GameState | None = None
        self._action_space = ActionSpace(build_default_action_catalog(width, height))

    @property
    def state(self) -> GameState:
        """Retourne l'état courant (reset doit avoir été appelé)."""

        if self._state is None:
            raise RuntimeError("reset() doit être appelé avant d'accéder à l'état")
        return self._state

    @property
    def action_catalog(self) -> List[DrawEdge]:
        """Retourne le catalogue courant."""

        return self._action_space.catalog

    @property
    def action_space(self) -> ActionSpace:
        return self._action_space

    def reset(self, *, state: GameState | None = None) -> GameState:
        """Réinitialise l'environnement et renvoie l'état initial.

        Un état fourni doit avoir les dimensions de l'environnement.
        """

        if state is not None:
            if (state.width, state.height) != (self._width, self._height):
                raise ValueError(
                    f"État {state.width}x{state.height} incompatible avec "
                    f"l'environnement {self._width}x{self._height}"
                )
            self._state = state
        else:
            self._state = GameState.new_game(self._width, self._height)
        return self._state

    def legal_actions(self) -> List[DrawEdge]:
        """Retourne les actions légales de l'état courant."""

        return self.state.legal_actions()

    def legal_actions_mask(self) -> List[bool]:
        """Retourne un masque booléen aligné sur le catalogue courant."""

        return self._action_space.mask(self.state.legal_actions())

    def step(self, action: DrawEdge) -> StepResult:
        """Applique une action et renvoie le résultat.

        La récompense est le nombre de cases gagnées par chaque joueur.

        Raises:
            IllegalMove: si l'action n'est pas légale
        """

        current_state = self.state
        if not current_state.is_action_legal(action):
            raise IllegalMove(action)

        new_state = current_state.apply_action(action)
        self._state = new_state

        reward = (
            float(new_state.score_player_1 - current_state.score_player_1),
            float(new_state.score_player_2 - current_state.score_player_2),
        )
        done = new_state.is_game_over
        info = {
            "last_action": action,
            "mover": current_state.current_player,
            "extra_turn": new_state.extra_turn_pending,
        }
        return StepResult(state=new_state, reward=reward, done=done, info=info)

    def play_out(self, select: MoveSelector = first_legal) -> GameState:
        """Joue jusqu'à la fin en demandant chaque coup à `select`."""

        steps = 0
        while not self.state.is_game_over:
            legal = self.legal_actions()
            self.step(select(self.state, legal))
            steps += 1
        logger.debug(
            "Partie simulée en %d coups, score %d-%d",
            steps,
            self.state.score_player_1,
            self.state.score_player_2,
        )
        return self.state
