"""Canal de eventos en proceso.

Sustituye al `window.dispatchEvent` de un navegador: cualquier número de
listeners (incluido cero) puede observar un evento. Un handler que falla se
registra en el log y no impide que el resto lo reciba.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

from core.interfaces.notifier import EventHandler, Notifier
from core.observability import get_logger

logger = get_logger("adapters.event_bus")


class EventBus(Notifier):
    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event: str, handler: EventHandler) -> Callable[[], None]:
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, event: str, detail: Any = None) -> None:
        # Copia: un handler puede desuscribirse mientras iteramos.
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(detail)
            except Exception:
                logger.exception("Event handler for %s failed", event)

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))


# Canal global del proceso (equivalente a `window`).
events = EventBus()
