"""Process-wide default event bus.

Every caller of ``get_default_bus`` shares one registry. The bus is built on
first use from the ``EMITTER_*`` environment settings. Handlers and
formatting stay with the host application; see
``emitter.logging_utils.configure_logging``.
"""

from __future__ import annotations

import logging
import threading

from emitter.config import load_settings
from emitter.domain.bus import EventBus
from emitter.logging_utils import ROOT_LOGGER_NAME

_default_bus: EventBus | None = None
_lock = threading.Lock()


def get_default_bus() -> EventBus:
    """Return the shared bus, creating it on the first call."""
    global _default_bus
    if _default_bus is None:
        with _lock:
            if _default_bus is None:
                settings = load_settings()
                logger = logging.getLogger(ROOT_LOGGER_NAME)
                # Only fill in a level the host has not chosen.
                if logger.level == logging.NOTSET:
                    logger.setLevel(settings.log_level)
                _default_bus = EventBus(settings=settings)
    return _default_bus
