"""Recent activity report.

Lists the files of a project whose most significant event falls inside a
trailing time window. The report is a read-only view over a Summary.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from filemon.core.datetime_utils import utc_now
from filemon.domain.ledger import latest_event
from filemon.domain.models import Summary

if TYPE_CHECKING:
    from filemon.config.models import ProjectConfig
    from filemon.store.summary_store import SummaryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityEntry:
    """One row of the activity report."""

    key: str
    time: datetime
    label: str

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "time": self.time.isoformat(), "label": self.label}


class RecentActivity:
    """Files with an event at or after a cutoff, ordered by ledger key.

    Iterating walks the summary each time, so the report can be iterated
    any number of times. The cutoff is fixed when the report is created.
    """

    def __init__(self, summary: Summary, cutoff: datetime) -> None:
        self.summary = summary
        self.cutoff = cutoff

    def __iter__(self) -> Iterator[ActivityEntry]:
        for key in sorted(self.summary.files):
            event = latest_event(self.summary.files[key])
            if event is not None and event.time >= self.cutoff:
                yield ActivityEntry(key=key, time=event.time, label=event.label)

    def __repr__(self) -> str:
        return (
            f"RecentActivity(project={self.summary.project_name!r}, "
            f"cutoff={self.cutoff.isoformat()})"
        )


def recent_activity(
    summary: Summary,
    window: timedelta,
    *,
    now: Callable[[], datetime] = utc_now,
) -> RecentActivity:
    """Report files changed within the trailing window.

    Args:
        summary: Project summary to report on. It is not modified.
        window: Length of the trailing window.
        now: Clock used to compute the cutoff.

    Returns:
        A re-iterable report of ActivityEntry rows.
    """
    return RecentActivity(summary, now() - window)


def recent_activity_for_project(
    project: ProjectConfig,
    window_minutes: float,
    *,
    store: SummaryStore | None = None,
    now: Callable[[], datetime] = utc_now,
) -> list[ActivityEntry]:
    """Load a project's summary and report its recent activity.

    Raises:
        CorruptStateError: If the persisted summary cannot be loaded.
    """
    from filemon.scanner.orchestrator import default_store

    store = store or default_store()
    summary = store.load_or_create(project.name)
    entries = list(
        recent_activity(summary, timedelta(minutes=window_minutes), now=now)
    )
    logger.debug(
        "%d file(s) active in the last %s minute(s) for %s",
        len(entries),
        window_minutes,
        project.name,
    )
    return entries
