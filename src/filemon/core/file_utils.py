"""Atomic file write utility.

Used by the summary store to replace persisted state without ever exposing
a half-written file.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write_text(path: Path, content: str) -> None:
    """Replace a file's content atomically.

    Writes to a temporary file in the target directory, flushes it to disk
    and renames it over the target, so readers see either the old or the
    new content and never a mix of both.

    Args:
        path: Destination file. Its parent directory must exist.
        content: Text to write (UTF-8).

    Raises:
        OSError: If the temporary file cannot be written or renamed.
    """
    fd, temp_path_str = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=path.parent,
        text=True,
    )
    temp_path = Path(temp_path_str)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        temp_path.replace(path)  # Atomic on POSIX
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
