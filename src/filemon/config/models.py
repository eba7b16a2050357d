"""Configuration data models for filemon."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

# Project names double as directory names under the history directory
PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 _.-]*$")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class MonitorConfig:
    """Configuration for the scan loop."""

    # Base directory for per-project summaries and markers
    # (None = <data_dir>/history)
    history_dir: Path | None = None

    # Seconds between checks while a project is paused
    pause_retry_seconds: float = 30.0

    # Scan interval for projects that do not set their own
    default_interval_minutes: float = 0.5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.pause_retry_seconds <= 0:
            raise ValueError(
                f"pause_retry_seconds must be positive, got {self.pause_retry_seconds}"
            )
        if self.default_interval_minutes <= 0:
            raise ValueError(
                "default_interval_minutes must be positive, "
                f"got {self.default_interval_minutes}"
            )


@dataclass
class FileMonConfig:
    """Main configuration container."""

    data_dir: Path
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)

    @property
    def history_dir(self) -> Path:
        """Effective history directory."""
        if self.monitor.history_dir is not None:
            return self.monitor.history_dir
        return self.data_dir / "history"

    @property
    def projects_dir(self) -> Path:
        """Directory holding one YAML definition per project."""
        return self.data_dir / "projects"


@dataclass(frozen=True)
class ProjectConfig:
    """A monitored project.

    This dataclass is immutable (frozen); monitor threads share it.
    """

    name: str
    root: Path
    subfolders: tuple[str, ...]
    # Scan interval in minutes
    minutes: float = 0.5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not PROJECT_NAME_PATTERN.match(self.name) or self.name in {".", ".."}:
            raise ValueError(
                f"project name must start with a letter or digit and contain only "
                f"letters, digits, spaces, '.', '_' or '-': {self.name!r}"
            )
        if not self.subfolders:
            raise ValueError(f"project '{self.name}' has no subfolders")
        for subfolder in self.subfolders:
            if Path(subfolder).is_absolute() or ".." in Path(subfolder).parts:
                raise ValueError(
                    f"subfolder must be relative to the project root: {subfolder!r}"
                )
        if len(set(self.subfolders)) != len(self.subfolders):
            duplicates = sorted(
                {s for s in self.subfolders if self.subfolders.count(s) > 1}
            )
            raise ValueError(
                f"project '{self.name}' lists subfolders more than once: {duplicates}"
            )
        if self.minutes <= 0:
            raise ValueError(f"minutes must be positive, got {self.minutes}")

    @property
    def interval_seconds(self) -> float:
        return self.minutes * 60.0
