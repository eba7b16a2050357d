"""Exception hierarchy for filemon.

All errors raised by the scan engine, summary store and project
configuration inherit from FileMonitorError so callers can catch the whole
family with a single except clause when they need to.
"""

from __future__ import annotations

from pathlib import Path


class FileMonitorError(Exception):
    """Base exception for filemon errors."""


class CorruptStateError(FileMonitorError):
    """Raised when a persisted summary cannot be used.

    Covers both unparseable or invalid files and identity mismatches
    (a summary stored under one project's location naming another project).
    A corrupt summary is never discarded automatically.

    Attributes:
        path: Location of the persisted summary.
        reason: Human-readable description of the problem.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt summary at {path}: {reason}")


# Name used by the storage contract.
CorruptState = CorruptStateError


class ScanIoError(FileMonitorError):
    """Raised when a configured directory or file cannot be read mid-scan.

    The scan attempt is aborted; the previously persisted summary remains
    authoritative.

    Attributes:
        path: The directory or file that could not be read.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class ConfigError(FileMonitorError):
    """Invalid configuration file or setting."""


class ProjectConfigError(ConfigError):
    """Error loading or validating a project definition."""


class ProjectNotFoundError(ProjectConfigError):
    """Project definition does not exist."""

    def __init__(self, name: str, projects_dir: Path) -> None:
        self.name = name
        self.projects_dir = projects_dir
        super().__init__(
            f"Project '{name}' not found. "
            f"Expected a definition at {projects_dir / (name + '.yaml')}"
        )
