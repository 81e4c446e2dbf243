"""
Environment configuration for the theme.json engine.

Two environment variables are read:

- ``THEMEJSON_ENV``: ``development`` (default), ``test`` or ``production``.
  Reported by :func:`get_environment_info` for startup logging.
- ``THEMEJSON_DEBUG``: when truthy, stylesheets are emitted in the
  multi-line, indented form instead of the minified one.

Usage:
    from themejson.core.environment import is_debug

    if is_debug():
        ...
"""

from __future__ import annotations

import logging
import os
from enum import StrEnum

logger = logging.getLogger(__name__)


class ThemeJSONEnv(StrEnum):
    """Runtime environment values."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


_DEFAULT_ENV = ThemeJSONEnv.DEVELOPMENT

THEMEJSON_ENV_VAR = "THEMEJSON_ENV"
THEMEJSON_DEBUG_VAR = "THEMEJSON_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


def get_themejson_env() -> ThemeJSONEnv:
    """Get the current environment from THEMEJSON_ENV.

    Returns:
        ThemeJSONEnv: development, test or production. Defaults to
        development if THEMEJSON_ENV is not set or invalid.
    """
    env_value = os.environ.get(THEMEJSON_ENV_VAR, "").lower().strip()

    if env_value in ("production", "prod"):
        return ThemeJSONEnv.PRODUCTION
    elif env_value in ("test", "testing"):
        return ThemeJSONEnv.TEST
    elif env_value in ("development", "dev", ""):
        return ThemeJSONEnv.DEVELOPMENT
    else:
        logger.warning(
            "Unknown THEMEJSON_ENV value '%s'. "
            "Valid values: development, test, production. Defaulting to development.",
            env_value,
        )
        return _DEFAULT_ENV


def is_debug(override: bool | None = None) -> bool:
    """Determine whether stylesheets use the debug (pretty) form.

    Resolution order:
    1. If override is explicitly set (True/False), use it
    2. Otherwise, THEMEJSON_DEBUG (1/true/yes/on); unset means False

    Args:
        override: Explicit setting from the caller. None means "use the
            environment".

    Returns:
        bool: Whether to emit multi-line rulesets.
    """
    if override is not None:
        return override

    value = os.environ.get(THEMEJSON_DEBUG_VAR, "").lower().strip()
    if value in _TRUTHY:
        return True
    if value not in _FALSY:
        logger.warning(
            "Unknown THEMEJSON_DEBUG value '%s'. Treating it as disabled.", value
        )
    return False


def get_environment_info() -> dict[str, str | bool]:
    """Get a summary of the current environment configuration.

    Returns:
        dict: ``env`` (THEMEJSON_ENV value) and ``debug`` (resolved flag).
    """
    return {
        "env": get_themejson_env().value,
        "debug": is_debug(),
    }
