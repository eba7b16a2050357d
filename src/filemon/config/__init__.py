"""Configuration management for filemon.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (FILEMON_*)
3. Config file (~/.filemon/config.toml)
4. Default values (lowest priority)

Project definitions are YAML files in ~/.filemon/projects/.
"""

from filemon.config.env import EnvReader
from filemon.config.loader import (
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from filemon.config.logging_factory import build_logging_config
from filemon.config.models import (
    FileMonConfig,
    LoggingConfig,
    MonitorConfig,
    ProjectConfig,
)
from filemon.config.projects import (
    list_projects,
    load_project,
    load_projects,
    parse_project,
)
from filemon.config.toml_parser import TomlParseError, load_toml_file, parse_toml

__all__ = [
    # Models
    "FileMonConfig",
    "LoggingConfig",
    "MonitorConfig",
    "ProjectConfig",
    # Loader
    "EnvReader",
    "clear_config_cache",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    # Projects
    "list_projects",
    "load_project",
    "load_projects",
    "parse_project",
    # Logging
    "build_logging_config",
    # TOML
    "TomlParseError",
    "load_toml_file",
    "parse_toml",
]
