"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (FILEMON_*)
3. Config file (~/.filemon/config.toml)
4. Default values

Environment variables:
- FILEMON_DATA_DIR: Path to the data directory (overrides ~/.filemon/)
- FILEMON_CONFIG_PATH: Path to config file (overrides default location)
- FILEMON_HISTORY_DIR: Base directory for per-project summaries
- FILEMON_PAUSE_RETRY_SECONDS: Seconds between checks while paused
- FILEMON_LOG_LEVEL: Log level (debug, info, warning, error)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import fields
from pathlib import Path
from typing import Any

from filemon.config.env import EnvReader
from filemon.config.models import FileMonConfig, LoggingConfig, MonitorConfig
from filemon.config.toml_parser import load_toml_file
from filemon.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Default data location
DEFAULT_DATA_DIR = Path.home() / ".filemon"
CONFIG_FILE_NAME = "config.toml"

# Cache for loaded config files (path -> (parsed dict, mtime))
# This prevents redundant file reads and automatically reloads on file change
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_data_dir(env_reader: EnvReader | None = None) -> Path:
    """Get the filemon data directory.

    This is the base directory for all filemon data including:
    - Configuration file (config.toml)
    - Project definitions (projects/)
    - Default history directory (history/)

    Can be overridden by FILEMON_DATA_DIR environment variable.
    Supports tilde expansion (e.g., ~/custom/filemon).

    Returns:
        Path to the data directory (~/.filemon/ by default).
    """
    reader = env_reader or EnvReader()
    return reader.get_path("FILEMON_DATA_DIR", DEFAULT_DATA_DIR)


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by FILEMON_CONFIG_PATH environment variable.
    """
    reader = env_reader or EnvReader()
    env_path = reader.get_path("FILEMON_CONFIG_PATH")
    if env_path is not None:
        return env_path
    return get_data_dir(reader) / CONFIG_FILE_NAME


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation. The cache automatically
    reloads the file if it has been modified since the last read.
    Use clear_config_cache() to force a reload regardless of mtime.

    Thread-safe: uses a lock to protect concurrent access to the cache.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.
                If False (default), return empty dict on errors.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        TomlParseError: When strict=True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        if path in _config_cache:
            cached_config, cached_mtime = _config_cache[path]
            if current_mtime == cached_mtime:
                return cached_config

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache.

    Call this if the config file may have changed and you need
    a fresh load. Primarily useful for testing.
    """
    with _config_cache_lock:
        _config_cache.clear()


def _file_section(file_config: dict[str, Any], section_name: str) -> dict[str, Any]:
    """Return a copy of a config file section, empty when absent."""
    section = file_config.get(section_name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{section_name}] must be a table")
    return dict(section)


def _build_section(
    section_name: str, dataclass_type: type, data: dict[str, Any]
) -> Any:
    """Construct a config dataclass from a config file section.

    Raises:
        ConfigError: If the section has unknown keys or invalid values.
    """
    expected_fields = {f.name for f in fields(dataclass_type)}
    unknown_keys = set(data) - expected_fields
    if unknown_keys:
        raise ConfigError(
            f"Unknown keys in [{section_name}]: {sorted(unknown_keys)}. "
            f"Valid keys are: {sorted(expected_fields)}"
        )

    try:
        return dataclass_type(**data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid [{section_name}] configuration: {e}") from e


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    history_dir: Path | None = None,
    log_level: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> FileMonConfig:
    """Get filemon configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides FILEMON_CONFIG_PATH).
        history_dir: CLI override for the history directory.
        log_level: CLI override for the log level.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        FileMonConfig with merged configuration.

    Raises:
        ConfigError: If a config file section is invalid.
        TomlParseError: When strict=True and the config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    data_dir = get_data_dir(reader)
    file_config = load_config_file(
        config_path or get_default_config_path(reader), strict=strict
    )

    logging_data = _file_section(file_config, "logging")
    if logging_data.get("file"):
        logging_data["file"] = Path(logging_data["file"]).expanduser()
    level = log_level or reader.get_str("FILEMON_LOG_LEVEL")
    if level:
        logging_data["level"] = level

    monitor_data = _file_section(file_config, "monitor")
    if monitor_data.get("history_dir"):
        monitor_data["history_dir"] = Path(monitor_data["history_dir"]).expanduser()
    env_history_dir = reader.get_path("FILEMON_HISTORY_DIR")
    if env_history_dir is not None:
        monitor_data["history_dir"] = env_history_dir
    env_retry = reader.get_float("FILEMON_PAUSE_RETRY_SECONDS")
    if env_retry is not None:
        monitor_data["pause_retry_seconds"] = env_retry
    if history_dir is not None:
        monitor_data["history_dir"] = history_dir

    return FileMonConfig(
        data_dir=data_dir,
        logging=_build_section("logging", LoggingConfig, logging_data),
        monitor=_build_section("monitor", MonitorConfig, monitor_data),
    )
