"""Settings for the demo service, read from the environment."""

from __future__ import annotations

import logging
import os
from typing import Literal, Mapping

from pydantic import BaseModel, Field, field_validator

from eventbus.domain.diagnostics import DEFAULT_HISTORY

_PREFIX = "EVENTBUS_"


class Settings(BaseModel):
    # "reflective" registers consumers with bus.register_object,
    # "explicit" with the subscribe table in handlers.wire_explicitly.
    registration: Literal["reflective", "explicit"] = "reflective"
    seed: int | None = None
    log_level: str = "INFO"
    # How many failures and skipped registrations diagnostics keeps.
    diagnostics_history: int = Field(default=DEFAULT_HISTORY, ge=1)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ``EVENTBUS_*`` variables; unset ones keep defaults."""
    env = os.environ if environ is None else environ
    values = {
        name: env[_PREFIX + name.upper()]
        for name in Settings.model_fields
        if env.get(_PREFIX + name.upper())
    }
    return Settings(**values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
