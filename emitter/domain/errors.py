"""Exceptions raised by the event emitter."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from emitter.domain.events import Event


class EmitterError(RuntimeError):
    """Base class for all emitter errors."""


class ConfigValidationError(EmitterError):
    """Raised when bus settings cannot be validated."""


@dataclass(frozen=True)
class HandlerFailure:
    handler: Callable[[Event], Any]
    error: Exception


class DispatchError(EmitterError):
    """Raised after a dispatch pass in which one or more handlers failed.

    Only raised under the ``continue`` handler-error policy; every handler in
    the pass has already run by the time this is raised.
    """

    def __init__(self, event: Event, failures: list[HandlerFailure]) -> None:
        self.event = event
        self.failures = failures
        super().__init__(
            f"{len(failures)} handler(s) failed while dispatching {event.type!r}"
        )
