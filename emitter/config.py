"""Settings for event buses, loaded from the environment."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from emitter.domain.errors import ConfigValidationError

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "EMITTER_"
ENV_HANDLER_ERRORS = f"{ENV_PREFIX}HANDLER_ERRORS"
ENV_LOG_LEVEL = f"{ENV_PREFIX}LOG_LEVEL"

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class HandlerErrorPolicy(StrEnum):
    RAISE = "raise"
    CONTINUE = "continue"


class BusSettings(BaseSettings):
    """How a bus reacts to failing handlers and how loudly it logs.

    Values come from keyword arguments first, then ``EMITTER_*`` environment
    variables. Blank variables count as unset.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True)

    handler_errors: HandlerErrorPolicy = HandlerErrorPolicy.RAISE
    log_level: str = "WARNING"

    @field_validator("handler_errors", mode="before")
    @classmethod
    def _normalize_policy(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Expected a string value.")
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return normalized


def load_settings() -> BusSettings:
    """Build settings from the environment.

    Raises ConfigValidationError instead of pydantic's ValidationError.
    """
    try:
        settings = BusSettings()
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid emitter settings: {exc}") from exc

    LOGGER.debug("Loaded emitter settings: %s", settings.model_dump(mode="json"))
    return settings
