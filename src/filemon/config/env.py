"""Environment variable reader with dependency injection support.

This module provides the EnvReader class for reading and parsing environment
variables with type conversion and validation. It supports dependency injection
for testing by accepting an optional env mapping.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvReader:
    """Environment variable reader with type conversion and validation.

    Example:
        # Production usage (reads from os.environ)
        reader = EnvReader()
        retry = reader.get_float("FILEMON_PAUSE_RETRY_SECONDS", 30.0)

        # Testing usage (inject custom env)
        reader = EnvReader(env={"FILEMON_PAUSE_RETRY_SECONDS": "5"})
        retry = reader.get_float("FILEMON_PAUSE_RETRY_SECONDS", 30.0)  # 5.0
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
                 If None, reads from os.environ. Useful for testing.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string from environment variable.

        Empty values count as set and are returned as-is.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value

    def get_float(self, var: str, default: float | None = None) -> float | None:
        """Get a float from environment variable.

        Args:
            var: Environment variable name.
            default: Default value if not set or invalid.

        Returns:
            Parsed float value, or default if not set or invalid.
            Logs a warning if the value is set but cannot be parsed.
        """
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float value for %s: %s", var, value)
            return default

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path from environment variable, with tilde expansion.

        Empty values are treated as unset.
        """
        value = self._env.get(var)
        if not value:
            return default
        return Path(value).expanduser()
