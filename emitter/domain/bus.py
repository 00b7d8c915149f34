"""Simple synchronous in-process event bus."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from emitter.config import BusSettings, HandlerErrorPolicy
from emitter.domain.errors import DispatchError, HandlerFailure
from emitter.domain.events import Event
from emitter.services.identity import index_of, is_valid_handler, is_valid_type

LOGGER = logging.getLogger(__name__)

Handler = Callable[[Event], Any]


class EventBus:
    """Publish/subscribe bus keyed by type strings.

    Handlers are called synchronously in registration order. Misuse
    (bad type, non-callable handler, duplicate registration) is reported
    through return values; nothing here raises for it.
    """

    def __init__(self, settings: BusSettings | None = None) -> None:
        self.settings = settings or BusSettings()
        self._registry: dict[str, list[Handler]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, event_type: str, handler: Handler) -> bool:
        """Add *handler* for *event_type*.

        Returns False if either argument is invalid or the pair is already
        registered, True otherwise.
        """
        if not is_valid_type(event_type):
            LOGGER.debug("Rejected registration: invalid type %r", event_type)
            return False
        if not is_valid_handler(handler):
            LOGGER.debug(
                "Rejected registration for %s: handler not callable", event_type
            )
            return False

        handlers = self._registry.setdefault(event_type, [])
        if index_of(handlers, handler) != -1:
            return False
        handlers.append(handler)
        LOGGER.debug("Registered handler for %s (%d total)", event_type, len(handlers))
        return True

    def register_once(self, event_type: str, handler: Handler) -> bool:
        """Register *handler* to run on the next dispatch of *event_type* only.

        The bus stores a wrapper, so the original handler cannot be looked up
        or deregistered directly; each call registers a new wrapper.
        """
        if not is_valid_handler(handler):
            LOGGER.debug(
                "Rejected one-shot registration for %r: handler not callable",
                event_type,
            )
            return False

        fired = False

        @functools.wraps(handler)
        def once_wrapper(event: Event) -> Any:
            nonlocal fired
            # An outer dispatch may still hold this wrapper in its snapshot.
            if fired:
                return None
            fired = True
            self.deregister(event_type, once_wrapper)
            return handler(event)

        return self.register(event_type, once_wrapper)

    # ------------------------------------------------------------------
    # Deregistration
    # ------------------------------------------------------------------

    def deregister(
        self, event_type: str | None = None, handler: Handler | None = None
    ) -> None:
        """Remove handlers.

        With no arguments every type is cleared. With only *event_type* all of
        its handlers go. With both, only that exact pair is removed.
        """
        if event_type is None and handler is None:
            self.deregister_all()
            return
        if not is_valid_type(event_type):
            return

        if handler is None:
            if self._registry.pop(event_type, None) is not None:
                LOGGER.debug("Deregistered all handlers for %s", event_type)
            return

        handlers = self._registry.get(event_type)
        if not handlers:
            return
        i = index_of(handlers, handler)
        if i == -1:
            return
        del handlers[i]
        if not handlers:
            del self._registry[event_type]
        LOGGER.debug("Deregistered handler for %s", event_type)

    def deregister_all(self) -> None:
        """Remove every handler for every type."""
        self._registry.clear()
        LOGGER.debug("Cleared all handlers")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_handlers(self, event_type: str | None = None) -> list[Handler]:
        """Return a copy of the handlers for *event_type*, in order."""
        if not is_valid_type(event_type):
            return []
        return list(self._registry.get(event_type, []))

    def has(self, event_type: str, handler: Handler | None = None) -> bool:
        if not is_valid_type(event_type):
            return False
        handlers = self._registry.get(event_type)
        if not handlers:
            return False
        if handler is None:
            return True
        return index_of(handlers, handler) != -1

    def types(self) -> list[str]:
        """Types with at least one handler, in first-registration order."""
        return list(self._registry)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, event_type: str, data: Any = None) -> None:
        """Invoke every handler registered for *event_type* with one Event.

        Handlers registered when the call starts are the ones that run, even
        if a handler changes the registry along the way.
        """
        if not is_valid_type(event_type):
            return
        handlers = list(self._registry.get(event_type, []))
        if not handlers:
            LOGGER.debug("No handlers for event: %s", event_type)
            return

        event = Event(type=event_type, data=data)
        if self.settings.handler_errors == HandlerErrorPolicy.RAISE:
            for handler in handlers:
                handler(event)
            return

        failures: list[HandlerFailure] = []
        for handler in handlers:
            try:
                handler(event)
            except Exception as exc:
                LOGGER.exception("Event handler failed for %s", event_type)
                failures.append(HandlerFailure(handler=handler, error=exc))
        if failures:
            raise DispatchError(event, failures)

    # Short aliases: on/once/off/off_all/fire.
    on = register
    once = register_once
    off = deregister
    off_all = deregister_all
    fire = dispatch
