"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

KEY_FIELD_ENV: Final[str] = "DATAJOIN_KEY_FIELD"
LOG_LEVEL_ENV: Final[str] = "DATAJOIN_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[int] = logging.INFO


@dataclass(frozen=True, slots=True)
class JoinSettings:
    """``key_field`` of ``None`` selects positional keying."""

    key_field: str | None = None
    log_level: int = DEFAULT_LOG_LEVEL


def parse_log_level(value: str) -> int:
    level = logging.getLevelNamesMapping().get(value.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level: {value}")
    return level


def get_join_settings() -> JoinSettings:
    raw_level = optional_env_var(LOG_LEVEL_ENV)
    return JoinSettings(
        key_field=optional_env_var(KEY_FIELD_ENV),
        log_level=parse_log_level(raw_level) if raw_level else DEFAULT_LOG_LEVEL,
    )
