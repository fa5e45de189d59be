"""Contrato del canal de eventos.

Los consumidores (UI, CLI) se suscriben para reaccionar a fallos de sesión,
p.ej. redirigir al login o mostrar un toast.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

LOGIN_INVALID_EVENT = "fishpi:login-invalid"
ERROR_EVENT = "fishpi:error"

EventHandler = Callable[[Any], None]


@runtime_checkable
class Notifier(Protocol):
    """Publish/subscribe sin garantía de entrega ni backpressure."""

    def publish(self, event: str, detail: Any = None) -> None:
        ...

    def subscribe(self, event: str, handler: EventHandler) -> Callable[[], None]:
        """Registra `handler` y devuelve una función para desuscribirlo."""

        ...
