"""Domain models for filemon.

These models represent the persisted summary of a monitored project
independent of how it is serialized. All timestamps are timezone-aware
UTC datetimes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

KEY_SEPARATOR = "/"


def make_key(subfolder: str, name: str) -> str:
    """Build the ledger key for a file.

    Args:
        subfolder: Configured subfolder the file lives in, relative to the
            project root (e.g., "tools/nav").
        name: File name.

    Returns:
        Composite key "subfolder/name", stable across process restarts.
    """
    return f"{subfolder}{KEY_SEPARATOR}{name}"


class EventKind(str, Enum):
    """Kind of change event recorded for a monitored file."""

    ADDED = "added"
    EDITED = "edited"
    GENERATED = "generated"


@dataclass(frozen=True)
class ScanRecord:
    """Audit record of a single completed scan."""

    time: datetime
    is_gen: bool
    checked_file_count: int
    changed_file_count: int


@dataclass
class MonitoredFile:
    """Per-file ledger entry tracked across all scans of a project."""

    subfolder: str
    name: str
    # Set once, when the file first appears after the bootstrap scan
    time_added: datetime | None = None
    time_latest_edit: datetime | None = None
    time_latest_gen: datetime | None = None
    gen_count: int = 0
    edit_count: int = 0

    @property
    def key(self) -> str:
        """Ledger key for this file."""
        return make_key(self.subfolder, self.name)


@dataclass
class Summary:
    """Cumulative change summary for one project.

    scans is append-only and kept in the order the scans happened.
    files only grows; entries are updated in place and never removed.
    """

    project_name: str
    scans: list[ScanRecord] = field(default_factory=list)
    files: dict[str, MonitoredFile] = field(default_factory=dict)

    @property
    def last_scan(self) -> ScanRecord | None:
        """Most recent scan, or None if the project was never scanned."""
        return self.scans[-1] if self.scans else None

    @property
    def previous_scan_time(self) -> datetime | None:
        """Completion time of the most recent scan, if any."""
        last = self.last_scan
        return last.time if last is not None else None


@dataclass(frozen=True)
class LatestEvent:
    """The most significant event recorded for a file."""

    time: datetime
    kind: EventKind

    @property
    def label(self) -> str:
        return self.kind.value
