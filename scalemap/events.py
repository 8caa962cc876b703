from typing import Callable, Dict, List

from scalemap.logger import logger

REFERENCE_POINT_CHANGED = "reference-point-changed"
LANGUAGE_CHANGED = "language-changed"
SESSION_RESET = "session-reset"


class EventBus:
    """Synchronous pub/sub: emit() returns after every handler has run"""

    def __init__(self):
        self._handlers: Dict[str, List[Callable[..., None]]] = {}

    def connect(self, signal: str, handler: Callable[..., None]) -> None:
        handlers = self._handlers.setdefault(signal, [])
        if handler not in handlers:
            handlers.append(handler)

    def disconnect(self, signal: str, handler: Callable[..., None]) -> None:
        handlers = self._handlers.get(signal, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, signal: str, *args) -> None:
        handlers = list(self._handlers.get(signal, []))
        logger.debug(f"Emitting {signal} to {len(handlers)} handler(s)")
        for handler in handlers:
            handler(*args)
