"""Persistence for per-project summaries.

Each project's summary lives in its own directory under the history
directory:

    <history_dir>/<project_name>/summary.json

The same directory holds the project's marker files (see
filemon.monitor.signals). Writes go through a temp file and a rename, so a
crash mid-write leaves the previous summary intact.

The store assumes a single writer per project; it does not lock.
"""

from __future__ import annotations

import logging
from pathlib import Path

from filemon.core.file_utils import atomic_write_text
from filemon.core.json_utils import parse_json_with_schema
from filemon.domain.models import Summary
from filemon.exceptions import CorruptStateError
from filemon.store.schemas import SummarySchema, schema_to_summary, summary_to_schema

logger = logging.getLogger(__name__)

SUMMARY_FILE_NAME = "summary.json"


class SummaryStore:
    """Loads and persists project summaries under a history directory."""

    def __init__(self, history_dir: Path) -> None:
        """Initialize the store.

        Args:
            history_dir: Base directory holding one subdirectory per project.
        """
        self.history_dir = history_dir

    def project_dir(self, project_name: str) -> Path:
        """Directory holding a project's summary and marker files."""
        return self.history_dir / project_name

    def summary_path(self, project_name: str) -> Path:
        """Location of a project's persisted summary."""
        return self.project_dir(project_name) / SUMMARY_FILE_NAME

    def exists(self, project_name: str) -> bool:
        return self.summary_path(project_name).is_file()

    def load_or_create(self, project_name: str) -> Summary:
        """Load a project's summary, or start a new one.

        Args:
            project_name: Identity of the project.

        Returns:
            The persisted summary, or an empty summary bound to project_name
            if nothing has been persisted yet.

        Raises:
            CorruptStateError: If the persisted file cannot be parsed or
                validated, or names a different project.
        """
        path = self.summary_path(project_name)
        if not path.exists():
            logger.debug("No summary at %s, starting fresh", path)
            return Summary(project_name=project_name)

        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStateError(path, f"not valid UTF-8 ({e})") from e

        result = parse_json_with_schema(raw, SummarySchema, context=str(path))
        if not result.success or result.value is None:
            raise CorruptStateError(path, result.error or "unreadable summary")

        schema = result.value
        if schema.project_name != project_name:
            raise CorruptStateError(
                path,
                f"summary belongs to project '{schema.project_name}', "
                f"expected '{project_name}'",
            )

        summary = schema_to_summary(schema)
        logger.debug(
            "Loaded summary for %s: %d scan(s), %d file(s)",
            project_name,
            len(summary.scans),
            len(summary.files),
        )
        return summary

    def persist(self, summary: Summary) -> Path:
        """Write a summary, replacing any previous version atomically.

        Args:
            summary: Summary to write.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the project directory or file cannot be written.
        """
        path = self.summary_path(summary.project_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        content = summary_to_schema(summary).model_dump_json(indent=2)
        atomic_write_text(path, content + "\n")
        logger.debug(
            "Persisted summary for %s (%d scan(s)) to %s",
            summary.project_name,
            len(summary.scans),
            path,
        )
        return path
