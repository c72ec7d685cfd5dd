"""Bus d'évènements synchrone de la couche application.

Un abonné peut écouter tous les évènements ou seulement un type
(`MoveAppliedEvent` pour redessiner la grille, `GameEndedEvent` pour afficher
le vainqueur...). Le filtrage se fait par `isinstance`.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

Subscriber = Callable[[object], None]
_Subscription = Tuple[Optional[type], Subscriber]


class EventBus:
    """Diffuse les évènements de partie aux observateurs.

    Les abonnés sont appelés immédiatement, dans l'ordre d'enregistrement.
    Une exception levée par un abonné interrompt la diffusion et remonte à
    l'appelant de `publish`.
    """

    __slots__ = ("_subscriptions",)

    def __init__(self) -> None:
        self._subscriptions: List[_Subscription] = []

    def subscribe(
        self, callback: Subscriber, event_type: Optional[type] = None
    ) -> Callable[[], None]:
        """Enregistre un abonné, éventuellement restreint à un type d'évènement.

        Returns:
            Fonction de désinscription, sans effet si appelée plusieurs fois
        """

        subscription: _Subscription = (event_type, callback)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            # Comparaison par identité : le même callback peut être inscrit deux fois
            for index, registered in enumerate(self._subscriptions):
                if registered is subscription:
                    del self._subscriptions[index]
                    return

        return unsubscribe

    def publish(self, event: object) -> int:
        """Diffuse l'évènement aux abonnés concernés.

        Returns:
            Nombre d'abonnés notifiés
        """

        delivered = 0
        for event_type, callback in tuple(self._subscriptions):
            if event_type is None or isinstance(event, event_type):
                callback(event)
                delivered += 1
        return delivered
