"""TOML loading for the main config file."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TomlParseError(Exception):
    """Raised when a TOML file exists but cannot be parsed."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to parse {path}: {message}")


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content.

    Raises:
        tomllib.TOMLDecodeError: If the content is not valid TOML.
    """
    return tomllib.loads(content)


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise TomlParseError on read or parse failures.
                If False (default), log a warning and return an empty dict.

    Returns:
        Parsed dictionary. Empty dict if the file doesn't exist.

    Raises:
        TomlParseError: When strict=True and the file cannot be parsed.
    """
    if not path.exists():
        logger.debug("TOML file not found: %s", path)
        return {}

    try:
        config = parse_toml(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise TomlParseError(path, str(e)) from e
        logger.warning("Failed to load TOML file %s: %s", path, e)
        return {}

    logger.debug("Loaded TOML config from %s", path)
    return config
