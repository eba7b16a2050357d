"""Read-only reports over project summaries."""

from filemon.reports.activity import (
    ActivityEntry,
    RecentActivity,
    recent_activity,
    recent_activity_for_project,
)

__all__ = [
    "ActivityEntry",
    "RecentActivity",
    "recent_activity",
    "recent_activity_for_project",
]
