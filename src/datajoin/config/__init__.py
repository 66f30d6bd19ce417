"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .settings import JoinSettings, get_join_settings, parse_log_level

__all__ = [
    "ConfigurationError",
    "JoinSettings",
    "configure_logging",
    "get_join_settings",
    "optional_env_var",
    "parse_log_level",
]
