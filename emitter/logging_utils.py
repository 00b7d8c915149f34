"""Logging bootstrap for the emitter logger namespace."""

from __future__ import annotations

import logging

import structlog

ROOT_LOGGER_NAME = "emitter"
_HANDLER_NAME = "emitter-stream"


def _build_formatter(structured: bool) -> structlog.stdlib.ProcessorFormatter:
    if structured:
        renderer = structlog.processors.JSONRenderer(
            ensure_ascii=False, separators=(",", ":")
        )
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ],
    )


def configure_logging(
    level: str = "WARNING", structured: bool = True
) -> logging.Logger:
    """Attach one stderr handler to the ``emitter`` logger at *level*.

    Records are rendered by structlog, as JSON when *structured* is set.
    Calling this again updates the level and formatter; handlers are never
    stacked.
    """
    level_value = getattr(logging, str(level).upper(), logging.WARNING)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level_value)

    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
    handler.setFormatter(_build_formatter(structured))
    return logger
