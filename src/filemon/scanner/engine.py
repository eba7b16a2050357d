"""Scan diff engine.

Compares the files in a project's configured subfolders against the time of
the previous scan and folds the result into the project's summary.

Classification rules, per file:
- First scan ever (no baseline): the file is registered with no timestamps
  and is not counted as changed.
- mtime strictly after the previous scan: counted as changed. Unknown files
  are recorded as added; known files as edited or generated, depending on
  whether this scan is a generation pass.
- Otherwise: unchanged, nothing recorded.

Deleted files are not detected; their ledger entries keep their last state.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from filemon.core.datetime_utils import mtime_to_datetime, utc_now
from filemon.domain.ledger import record_change, register_file
from filemon.domain.models import ScanRecord, Summary
from filemon.exceptions import ScanIoError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObservedFile:
    """A file found in a configured subfolder."""

    subfolder: str
    name: str
    modified_at: datetime


def iter_subfolder_files(root_path: Path, subfolder: str) -> Iterator[ObservedFile]:
    """Yield the regular files directly inside a configured subfolder.

    Subdirectories are skipped, not descended into. Files are yielded in
    name order.

    Args:
        root_path: Project root.
        subfolder: Subfolder relative to the root (may contain "/").

    Raises:
        ScanIoError: If the subfolder or a file's metadata cannot be read.
    """
    path_subfolder = root_path / subfolder
    try:
        with os.scandir(path_subfolder) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except FileNotFoundError as e:
        raise ScanIoError(
            path_subfolder, f"Subfolder not found: {path_subfolder}"
        ) from e
    except NotADirectoryError as e:
        raise ScanIoError(
            path_subfolder, f"Subfolder is not a directory: {path_subfolder}"
        ) from e
    except OSError as e:
        raise ScanIoError(
            path_subfolder, f"Cannot read subfolder {path_subfolder}: {e}"
        ) from e

    for entry in entries:
        try:
            if not entry.is_file():
                continue
            mtime = entry.stat().st_mtime
        except OSError as e:
            raise ScanIoError(
                Path(entry.path), f"Cannot read metadata for {entry.path}: {e}"
            ) from e
        yield ObservedFile(subfolder, entry.name, mtime_to_datetime(mtime))


def scan(
    summary: Summary,
    subfolders: Sequence[str],
    root_path: Path,
    is_gen: bool,
    *,
    now: Callable[[], datetime] = utc_now,
) -> Summary:
    """Scan a project's subfolders and update its summary in place.

    On error the summary may be partially updated; callers that need the
    previous state intact should scan a copy (see perform_scan()).

    Args:
        summary: Summary to update.
        subfolders: Subfolders to scan, relative to root_path.
        root_path: Project root directory.
        is_gen: Whether this scan is a generation pass.
        now: Clock used to timestamp the scan record.

    Returns:
        The same summary, with a new ScanRecord appended.

    Raises:
        ScanIoError: If the root, a subfolder or a file cannot be read.
    """
    if not root_path.is_dir():
        raise ScanIoError(root_path, f"Project root not found: {root_path}")

    previous_scan_time = summary.previous_scan_time
    checked_file_count = 0
    changed_file_count = 0

    # A subfolder listed twice is walked once.
    for subfolder in dict.fromkeys(subfolders):
        for observed in iter_subfolder_files(root_path, subfolder):
            checked_file_count += 1
            logger.debug(
                "%s: %s/%s",
                observed.modified_at.isoformat(),
                observed.subfolder,
                observed.name,
            )

            if previous_scan_time is None:
                # First scan for this project: record the file without
                # treating it as a change.
                register_file(summary.files, observed.subfolder, observed.name)
            elif observed.modified_at > previous_scan_time:
                changed_file_count += 1
                record_change(
                    summary.files,
                    observed.subfolder,
                    observed.name,
                    observed.modified_at,
                    is_gen,
                )

    record = ScanRecord(
        time=now(),
        is_gen=is_gen,
        checked_file_count=checked_file_count,
        changed_file_count=changed_file_count,
    )
    summary.scans.append(record)
    logger.info(
        "Scanned %s: checked=%d changed=%d gen=%s%s",
        summary.project_name,
        checked_file_count,
        changed_file_count,
        is_gen,
        " (bootstrap)" if previous_scan_time is None else "",
    )
    return summary
