"""Service d'orchestration pour une partie Dots and Boxes."""

from __future__ import annotations

import logging
from typing import List

from dotsboxes.app.event_bus import EventBus
from dotsboxes.app.events import (
    GameEndedEvent,
    GameStartedEvent,
    MoveAppliedEvent,
    MoveRejectedEvent,
)
from dotsboxes.engine.actions import DrawEdge, Orientation
from dotsboxes.engine.render import UNICODE_GLYPHS, TextGlyphs, render_text
from dotsboxes.engine.rules import DEFAULT_HEIGHT, DEFAULT_WIDTH
from dotsboxes.engine.state import GameState, IllegalMove

logger = logging.getLogger(__name__)


class GameService:
    """Détient l'état de référence et publie les évènements pour l'affichage.

    Les coups sont appliqués un par un sur cet état unique. Le service n'est
    pas thread-safe : un hôte concurrent doit sérialiser ses appels.
    """

    def __init__(self, *, event_bus: EventBus | None = None) -> None:
        self._event_bus = event_bus or EventBus()
        self._state: GameState | None = None

    @property
    def event_bus(self) -> EventBus:
        """Retourne le bus d'évènements utilisé par le service."""

        return self._event_bus

    @property
    def state(self) -> GameState:
        """État courant de la partie (erreur si aucune partie lancée)."""

        if self._state is None:
            raise RuntimeError("Aucune partie initialisée. Utiliser start_new_game().")
        return self._state

    def start_new_game(
        self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
    ) -> GameState:
        """Initialise une nouvelle partie et publie l'évènement associé."""

        state = GameState.new_game(width, height)
        self._state = state
        logger.info("Nouvelle partie %dx%d", width, height)
        self._event_bus.publish(GameStartedEvent(state=state))
        return state

    def legal_moves(self) -> List[DrawEdge]:
        """Retourne les traits encore libres pour l'état courant."""

        return self.state.legal_actions()

    def dispatch(self, move: DrawEdge) -> GameState:
        """Valide et applique un coup, puis notifie les observateurs.

        Raises:
            IllegalMove: trait hors grille ou déjà tracé
        """

        current_state = self.state
        if not current_state.is_action_legal(move):
            raise IllegalMove(move)

        new_state = current_state.apply_action(move)
        self._state = new_state
        completed = new_state.completed_cells(move.orientation, move.row, move.col)
        logger.debug(
            "Joueur %d trace %s (%d, %d), cases fermées: %s",
            current_state.current_player,
            move.orientation.value,
            move.row,
            move.col,
            list(completed),
        )

        self._event_bus.publish(
            MoveAppliedEvent(
                move=move,
                previous_state=current_state,
                new_state=new_state,
                completed_cells=completed,
            )
        )

        if new_state.is_game_over:
            logger.info(
                "Partie terminée %d-%d",
                new_state.score_player_1,
                new_state.score_player_2,
            )
            self._event_bus.publish(
                GameEndedEvent(state=new_state, outcome=new_state.winner)
            )

        return new_state

    def try_move(self, orientation: Orientation | str, row: int, col: int) -> bool:
        """Variante sans exception pour un clic : un refus ne change rien.

        Returns:
            True si le trait a été tracé
        """

        move: DrawEdge | None = None
        try:
            move = DrawEdge(orientation, row, col)  # type: ignore[arg-type]
            self.dispatch(move)
        except (IllegalMove, ValueError):
            # Orientation inconnue : aucun DrawEdge ne peut être construit
            logger.warning("Coup refusé: %s (%r, %r)", orientation, row, col)
            self._event_bus.publish(
                MoveRejectedEvent(
                    move=move, state=self.state, request=(orientation, row, col)
                )
            )
            return False
        return True

    def render(self, glyphs: TextGlyphs = UNICODE_GLYPHS) -> str:
        """Rendu texte de l'état courant."""

        return render_text(self.state, glyphs)
