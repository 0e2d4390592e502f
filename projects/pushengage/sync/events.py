"""Barramento de eventos simples para o sync do lado do cliente."""

from collections import defaultdict
from typing import Any, Awaitable, Callable

from shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

SUBSCRIPTION_CHANGE_EVENT = "PushEngage.onSubscriptionChange"

EventHandler = Callable[[dict[str, Any]], Awaitable[None]]


class EventBus:
    """Registro de handlers assíncronos por nome de evento."""

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers[event].append(handler)

    def off(self, event: str, handler: EventHandler) -> None:
        if handler in self._handlers.get(event, []):
            self._handlers[event].remove(handler)

    async def emit(self, event: str, detail: dict[str, Any]) -> None:
        """Chama os handlers em ordem; a falha de um não impede os demais."""
        for handler in list(self._handlers.get(event, [])):
            try:
                await handler(detail)
            except Exception:
                logger.exception("Handler de evento falhou", event_name=event)
