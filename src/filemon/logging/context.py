"""Project context for structured logging.

Each project's monitor thread sets the project it is scanning; the
ProjectContextFilter then tags every log record emitted on that thread.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_project: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "project", default=None
)


def set_project_context(project: str | None) -> None:
    """Set the project for the current thread or task."""
    _project.set(project)


def get_project_context() -> str | None:
    """Get the project for the current thread or task, if any."""
    return _project.get()


@contextmanager
def project_context(project: str) -> Generator[None, None, None]:
    """Context manager that tags log records with a project name.

    Example:
        with project_context("DokuWiki"):
            logger.info("Scanning")  # Logged as "[DokuWiki] Scanning"
    """
    token = _project.set(project)
    try:
        yield
    finally:
        _project.reset(token)


class ProjectContextFilter(logging.Filter):
    """Logging filter that injects the project context into log records.

    Adds a `project` attribute for JSON output and a `project_tag`
    ("[DokuWiki] " or empty) for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        project = get_project_context()
        record.project = project
        record.project_tag = f"[{project}] " if project else ""
        return True  # Never filter out records
