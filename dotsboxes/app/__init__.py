"""Services d'application pour orchestrer le moteur Dots and Boxes."""

from .event_bus import EventBus
from .events import GameEndedEvent, GameStartedEvent, MoveAppliedEvent, MoveRejectedEvent
from .game_service import GameService

__all__ = [
    "EventBus",
    "GameService",
    "GameStartedEvent",
    "MoveAppliedEvent",
    "MoveRejectedEvent",
    "GameEndedEvent",
]
