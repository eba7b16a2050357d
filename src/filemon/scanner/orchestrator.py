"""Scan orchestrator: one load, scan, persist cycle for a project."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from filemon.config.models import ProjectConfig
from filemon.core.datetime_utils import utc_now
from filemon.domain.models import ScanRecord, Summary
from filemon.scanner.engine import scan
from filemon.store.summary_store import SummaryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    """Result of a completed and persisted scan."""

    project_name: str
    record: ScanRecord
    summary: Summary
    summary_path: Path

    @property
    def is_bootstrap(self) -> bool:
        """True if this was the project's first scan."""
        return len(self.summary.scans) == 1


def default_store() -> SummaryStore:
    """Summary store rooted at the configured history directory."""
    from filemon.config.loader import get_config

    return SummaryStore(get_config().history_dir)


def perform_scan(
    project: ProjectConfig,
    is_gen: bool,
    *,
    store: SummaryStore | None = None,
    now: Callable[[], datetime] = utc_now,
) -> ScanOutcome:
    """Scan a project now and persist the updated summary.

    The engine works on a copy of the loaded summary, so a failed scan
    leaves nothing half-updated in memory or on disk.

    Args:
        project: Project to scan.
        is_gen: Whether this scan is a generation pass.
        store: Summary store (defaults to the configured history directory).
        now: Clock used to timestamp the scan record.

    Returns:
        ScanOutcome describing the persisted scan.

    Raises:
        CorruptStateError: If the persisted summary cannot be loaded.
        ScanIoError: If the project root, a subfolder or a file is unreadable.
        OSError: If the summary cannot be written.
    """
    store = store or default_store()
    loaded = store.load_or_create(project.name)

    working = copy.deepcopy(loaded)
    scan(working, project.subfolders, project.root, is_gen, now=now)
    path = store.persist(working)

    record = working.scans[-1]
    return ScanOutcome(
        project_name=project.name,
        record=record,
        summary=working,
        summary_path=path,
    )
