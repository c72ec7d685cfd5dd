"""État du jeu et logique de transition.

Ce module définit l'état immuable d'une partie et les transitions d'état.
Les fonctions de module (`create_game`, `apply_move`, `legal_moves`...)
forment l'API fonctionnelle du moteur ; les méthodes de `GameState` en sont
l'équivalent orienté objet utilisé par les couches `app` et `sim`.

Conventions de la grille (largeur x hauteur en points):
- `horizontal_edges[row][col]` relie le point (row, col) au point (row, col + 1)
- `vertical_edges[row][col]` relie le point (row, col) au point (row + 1, col)
- `cells[row][col]` est la case dont le coin haut-gauche est le point (row, col)
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, List, Optional, Tuple, cast

from dotsboxes.engine.actions import Action, DrawEdge, Orientation
from dotsboxes.engine.rules import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    FIRST_PLAYER,
    MIN_DIMENSION,
    PLAYER_IDS,
)

Cell = Tuple[int, int]
EdgeKey = Tuple[Orientation, int, int]
EdgeGrid = Tuple[Tuple[bool, ...], ...]
CellGrid = Tuple[Tuple["Owner", ...], ...]


class Owner(IntEnum):
    """Propriétaire d'une case."""

    NONE = 0
    PLAYER_1 = 1
    PLAYER_2 = 2


class Outcome(IntEnum):
    """Résultat d'une partie (même numérotation que les joueurs, 0 = égalité)."""

    TIE = 0
    PLAYER_1 = 1
    PLAYER_2 = 2


class DotsAndBoxesError(Exception):
    """Erreur de base du moteur."""


class IllegalMove(DotsAndBoxesError, ValueError):
    """Trait hors grille ou déjà tracé."""

    def __init__(self, move: Any) -> None:
        super().__init__(f"Coup illégal: {move}")
        self.move = move


class InvalidDimensions(DotsAndBoxesError, ValueError):
    """Grille plus petite que MIN_DIMENSION x MIN_DIMENSION points."""

    def __init__(self, width: Any, height: Any, reason: Optional[str] = None) -> None:
        super().__init__(
            f"Dimensions invalides: {width!r}x{height!r} "
            f"({reason or f'minimum {MIN_DIMENSION}x{MIN_DIMENSION} points'})"
        )
        self.width = width
        self.height = height


class Rejected:
    """Sentinelle renvoyée par `apply_move` quand le coup est refusé.

    Elle est fausse en contexte booléen : `if not apply_move(...)` suffit.
    """

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "REJECTED"


REJECTED = Rejected()


@dataclass(frozen=True)
class GameState:
    """État immuable du jeu.

    Toutes les modifications retournent un nouvel état ; seules les grilles
    effectivement touchées par un coup sont recopiées.
    """

    width: int
    height: int
    horizontal_edges: EdgeGrid
    vertical_edges: EdgeGrid
    cells: CellGrid
    current_player: int = FIRST_PLAYER
    score_player_1: int = 0
    score_player_2: int = 0
    # Informatif : le dernier coup a fermé au moins une case
    extra_turn_pending: bool = False

    @classmethod
    def new_game(
        cls, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
    ) -> "GameState":
        """Crée une partie vide.

        Args:
            width: nombre de points horizontalement (>= MIN_DIMENSION)
            height: nombre de points verticalement (>= MIN_DIMENSION)

        Returns:
            État initial : aucun trait, aucune case prise, joueur 1 au trait

        Raises:
            InvalidDimensions: si une dimension est trop petite ou non entière
        """

        validate_dimensions(width, height)
        return cls(
            width=width,
            height=height,
            horizontal_edges=_grid(height, width - 1, False),
            vertical_edges=_grid(height - 1, width, False),
            cells=_grid(height - 1, width - 1, Owner.NONE),
        )

    # ------------------------------------------------------------------
    # Requêtes
    # ------------------------------------------------------------------
    @property
    def total_edge_count(self) -> int:
        return self.height * (self.width - 1) + (self.height - 1) * self.width

    @property
    def drawn_edge_count(self) -> int:
        return sum(map(sum, self.horizontal_edges)) + sum(map(sum, self.vertical_edges))

    @property
    def claimed_cell_count(self) -> int:
        return sum(
            1 for row in self.cells for owner in row if owner != Owner.NONE
        )

    @property
    def is_game_over(self) -> bool:
        """Vrai quand tous les traits sont tracés (calculé sur les traits)."""
        return all(all(row) for row in self.horizontal_edges) and all(
            all(row) for row in self.vertical_edges
        )

    @property
    def winner(self) -> Outcome:
        """Compare les scores ; n'a de sens qu'une fois la partie terminée."""
        if self.score_player_1 > self.score_player_2:
            return Outcome.PLAYER_1
        if self.score_player_2 > self.score_player_1:
            return Outcome.PLAYER_2
        return Outcome.TIE

    def score_of(self, player: int) -> int:
        if player == 1:
            return self.score_player_1
        if player == 2:
            return self.score_player_2
        raise ValueError(f"Joueur inconnu: {player!r}")

    def edge_in_bounds(self, orientation: Orientation, row: int, col: int) -> bool:
        """Vérifie que (row, col) désigne un trait existant pour l'orientation."""

        if not _is_index(row) or not _is_index(col):
            return False
        if orientation is Orientation.HORIZONTAL:
            return 0 <= row < self.height and 0 <= col < self.width - 1
        if orientation is Orientation.VERTICAL:
            return 0 <= row < self.height - 1 and 0 <= col < self.width
        return False

    def is_edge_drawn(self, orientation: Orientation, row: int, col: int) -> bool:
        """Indique si le trait est tracé.

        Raises:
            IndexError: si le trait est hors grille (précondition violée)
        """

        orientation = Orientation(orientation)
        if not self.edge_in_bounds(orientation, row, col):
            raise IndexError(f"Trait hors grille: {orientation.value} ({row}, {col})")
        return self._drawn(orientation, row, col)

    def is_move_legal(self, orientation: Orientation, row: int, col: int) -> bool:
        """Vrai si le trait existe et n'est pas encore tracé. Ne lève jamais."""

        resolved = _coerce_orientation(orientation)
        if resolved is None or not self.edge_in_bounds(resolved, row, col):
            return False
        return not self._drawn(resolved, row, col)

    def is_action_legal(self, action: Action) -> bool:
        """Vérifie si une action est légale dans l'état actuel."""

        if not isinstance(action, DrawEdge):
            return False
        return self.is_move_legal(action.orientation, action.row, action.col)

    def legal_actions(self) -> List[DrawEdge]:
        """Traits libres : horizontaux ligne par ligne, puis verticaux."""

        actions: List[DrawEdge] = []
        for row, flags in enumerate(self.horizontal_edges):
            for col, drawn in enumerate(flags):
                if not drawn:
                    actions.append(DrawEdge(Orientation.HORIZONTAL, row, col))
        for row, flags in enumerate(self.vertical_edges):
            for col, drawn in enumerate(flags):
                if not drawn:
                    actions.append(DrawEdge(Orientation.VERTICAL, row, col))
        return actions

    def completed_cells(
        self, orientation: Orientation, row: int, col: int
    ) -> Tuple[Cell, ...]:
        """Cases fermées par un trait que l'on suppose déjà tracé.

        Un trait borde au plus deux cases : au-dessus/en dessous pour un trait
        horizontal, à gauche/à droite pour un trait vertical. Une case est
        retenue si ses trois autres côtés sont tracés.

        Raises:
            IndexError: si le trait est hors grille
        """

        orientation = Orientation(orientation)
        if not self.edge_in_bounds(orientation, row, col):
            raise IndexError(f"Trait hors grille: {orientation.value} ({row}, {col})")
        candidates: List[Cell] = []
        if orientation is Orientation.HORIZONTAL:
            if row > 0:
                candidates.append((row - 1, col))
            if row < self.height - 1:
                candidates.append((row, col))
        else:
            if col > 0:
                candidates.append((row, col - 1))
            if col < self.width - 1:
                candidates.append((row, col))

        just_drawn = (orientation, row, col)
        return tuple(
            cell
            for cell in candidates
            if all(
                self._drawn(*side)
                for side in _cell_sides(*cell)
                if side != just_drawn
            )
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def apply_move(
        self, orientation: Orientation, row: int, col: int
    ) -> "GameState | Rejected":
        """Trace un trait et retourne le nouvel état, ou `REJECTED`.

        Un coup refusé ne crée aucune copie et laisse l'état intact.
        """

        resolved = _coerce_orientation(orientation)
        if resolved is None or not self.is_move_legal(resolved, row, col):
            return REJECTED

        if resolved is Orientation.HORIZONTAL:
            drawn = replace(
                self, horizontal_edges=_with_value(self.horizontal_edges, row, col, True)
            )
        else:
            drawn = replace(
                self, vertical_edges=_with_value(self.vertical_edges, row, col, True)
            )

        completed = drawn.completed_cells(resolved, row, col)
        if not completed:
            return replace(
                drawn,
                current_player=opponent_of(self.current_player),
                extra_turn_pending=False,
            )

        # Le joueur garde la main et marque toutes les cases fermées
        owner = Owner(self.current_player)
        cells = self.cells
        for cell_row, cell_col in completed:
            cells = _with_value(cells, cell_row, cell_col, owner)

        gained = len(completed)
        return replace(
            drawn,
            cells=cells,
            score_player_1=self.score_player_1 + (gained if owner == Owner.PLAYER_1 else 0),
            score_player_2=self.score_player_2 + (gained if owner == Owner.PLAYER_2 else 0),
            extra_turn_pending=True,
        )

    def apply_action(self, action: Action) -> "GameState":
        """Applique une action et retourne le nouvel état.

        Args:
            action: Action à appliquer

        Returns:
            Nouvel état après application de l'action

        Raises:
            IllegalMove: Si l'action n'est pas légale
        """

        if not self.is_action_legal(action):
            raise IllegalMove(action)
        move = cast(DrawEdge, action)
        return cast(GameState, self.apply_move(move.orientation, move.row, move.col))

    def _drawn(self, orientation: Orientation, row: int, col: int) -> bool:
        if orientation is Orientation.HORIZONTAL:
            return self.horizontal_edges[row][col]
        return self.vertical_edges[row][col]


# ----------------------------------------------------------------------
# API fonctionnelle
# ----------------------------------------------------------------------
def create_game(width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> GameState:
    """Crée une partie vide (voir `GameState.new_game`)."""
    return GameState.new_game(width, height)


def is_edge_drawn(state: GameState, orientation: Orientation, row: int, col: int) -> bool:
    return state.is_edge_drawn(orientation, row, col)


def is_legal_move(state: GameState, orientation: Orientation, row: int, col: int) -> bool:
    return state.is_move_legal(orientation, row, col)


def completed_cells(
    state: GameState, orientation: Orientation, row: int, col: int
) -> Tuple[Cell, ...]:
    return state.completed_cells(orientation, row, col)


def apply_move(
    state: GameState, orientation: Orientation, row: int, col: int
) -> "GameState | Rejected":
    return state.apply_move(orientation, row, col)


def is_game_over(state: GameState) -> bool:
    return state.is_game_over


def winner(state: GameState) -> Outcome:
    return state.winner


def legal_moves(state: GameState) -> Tuple[DrawEdge, ...]:
    return tuple(state.legal_actions())


def opponent_of(player: int) -> int:
    """Retourne l'autre joueur (1 <-> 2)."""
    if player not in PLAYER_IDS:
        raise ValueError(f"Joueur inconnu: {player!r}")
    return 3 - player


def validate_dimensions(width: Any, height: Any) -> None:
    """Lève InvalidDimensions si la grille n'a pas au moins 2x2 points."""

    if not (_is_index(width) and _is_index(height)):
        raise InvalidDimensions(width, height)
    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise InvalidDimensions(width, height)


def _is_index(value: Any) -> bool:
    # numbers.Integral couvre aussi les entiers numpy (np.int64...)
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _coerce_orientation(value: Any) -> Optional[Orientation]:
    try:
        return Orientation(value)
    except ValueError:
        return None


def _cell_sides(row: int, col: int) -> Tuple[EdgeKey, ...]:
    return (
        (Orientation.HORIZONTAL, row, col),  # haut
        (Orientation.HORIZONTAL, row + 1, col),  # bas
        (Orientation.VERTICAL, row, col),  # gauche
        (Orientation.VERTICAL, row, col + 1),  # droite
    )


def _grid(rows: int, cols: int, value: Any) -> Tuple[Tuple[Any, ...], ...]:
    return tuple((value,) * cols for _ in range(rows))


def _with_value(
    grid: Tuple[Tuple[Any, ...], ...], row: int, col: int, value: Any
) -> Tuple[Tuple[Any, ...], ...]:
    """Copie sur écriture : seule la ligne modifiée est reconstruite."""

    line = grid[row]
    new_line = line[:col] + (value,) + line[col + 1 :]
    return grid[:row] + (new_line,) + grid[row + 1 :]


__all__ = [
    "Cell",
    "Owner",
    "Outcome",
    "DotsAndBoxesError",
    "IllegalMove",
    "InvalidDimensions",
    "Rejected",
    "REJECTED",
    "GameState",
    "create_game",
    "is_edge_drawn",
    "is_legal_move",
    "completed_cells",
    "apply_move",
    "is_game_over",
    "winner",
    "legal_moves",
    "opponent_of",
    "validate_dimensions",
]
