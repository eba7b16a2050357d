"""Ledger operations on MonitoredFile entries.

The scan engine uses these helpers for its per-file bookkeeping; the
activity reporter uses latest_event() to label files.
"""

from __future__ import annotations

from datetime import datetime

from filemon.domain.models import EventKind, LatestEvent, MonitoredFile, make_key


def register_file(
    files: dict[str, MonitoredFile], subfolder: str, name: str
) -> MonitoredFile:
    """Register a file seen during the bootstrap scan.

    The entry carries no timestamps: without a baseline there is no way to
    tell whether the file changed.
    """
    entry = MonitoredFile(subfolder=subfolder, name=name)
    files[make_key(subfolder, name)] = entry
    return entry


def record_change(
    files: dict[str, MonitoredFile],
    subfolder: str,
    name: str,
    file_time: datetime,
    is_gen: bool,
) -> MonitoredFile:
    """Record that a file changed since the previous scan.

    Unknown files get an entry with time_added set. Known files have their
    edit or generation timestamp and counter updated, depending on is_gen.

    Returns:
        The created or updated ledger entry.
    """
    key = make_key(subfolder, name)
    entry = files.get(key)
    if entry is None:
        entry = MonitoredFile(subfolder=subfolder, name=name, time_added=file_time)
        files[key] = entry
    elif is_gen:
        entry.time_latest_gen = file_time
        entry.gen_count += 1
    else:
        entry.time_latest_edit = file_time
        entry.edit_count += 1
    return entry


def latest_event(file: MonitoredFile) -> LatestEvent | None:
    """Resolve the most significant event for a file.

    An addition always wins, even over later edits or generations.
    Otherwise the later of the generation and edit times wins; on a tie
    the edit is reported.

    Returns:
        The event, or None if the file has no recorded events yet.
    """
    if file.time_added is not None:
        return LatestEvent(file.time_added, EventKind.ADDED)

    gen = file.time_latest_gen
    edit = file.time_latest_edit
    if gen is not None and (edit is None or gen > edit):
        return LatestEvent(gen, EventKind.GENERATED)
    if edit is not None:
        return LatestEvent(edit, EventKind.EDITED)
    return None
