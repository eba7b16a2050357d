"""Pause and generation-pass signals for the scan loop.

The monitor only depends on the ScanSignals protocol. Operators drive the
file-based implementation from another process (or the `filemon pause`,
`resume` and `gen` commands) by creating and removing marker files in the
project's history directory.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class Marker(Enum):
    """Marker files understood by the monitor."""

    GEN = "gen_marker.txt"
    PAUSE = "pause_marker.txt"

    @property
    def file_name(self) -> str:
        return self.value


class ScanSignals(Protocol):
    """Operator intent consulted before each scan."""

    def is_paused(self) -> bool:
        """True while scanning should be held off."""
        ...

    def is_gen_requested(self) -> bool:
        """True if the next scan should be treated as a generation pass."""
        ...

    def clear_gen_request(self) -> None:
        """Acknowledge a generation request after it was honoured."""
        ...


class MarkerFileSignals:
    """ScanSignals backed by marker files in a project directory."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir

    def marker_path(self, marker: Marker) -> Path:
        return self.project_dir / marker.file_name

    def set_marker(self, marker: Marker) -> None:
        self.project_dir.mkdir(parents=True, exist_ok=True)
        self.marker_path(marker).write_text("marker", encoding="utf-8")
        logger.debug("Set %s marker in %s", marker.name, self.project_dir)

    def clear_marker(self, marker: Marker) -> None:
        self.marker_path(marker).unlink(missing_ok=True)
        logger.debug("Cleared %s marker in %s", marker.name, self.project_dir)

    def is_marker_present(self, marker: Marker) -> bool:
        return self.marker_path(marker).exists()

    def is_paused(self) -> bool:
        return self.is_marker_present(Marker.PAUSE)

    def is_gen_requested(self) -> bool:
        return self.is_marker_present(Marker.GEN)

    def clear_gen_request(self) -> None:
        self.clear_marker(Marker.GEN)


class InMemorySignals:
    """ScanSignals held in memory, settable from any thread."""

    def __init__(self, *, paused: bool = False, gen_requested: bool = False) -> None:
        self._lock = threading.Lock()
        self._paused = paused
        self._gen_requested = gen_requested

    def pause(self) -> None:
        with self._lock:
            self._paused = True

    def resume(self) -> None:
        with self._lock:
            self._paused = False

    def request_gen(self) -> None:
        with self._lock:
            self._gen_requested = True

    def is_paused(self) -> bool:
        with self._lock:
            return self._paused

    def is_gen_requested(self) -> bool:
        with self._lock:
            return self._gen_requested

    def clear_gen_request(self) -> None:
        with self._lock:
            self._gen_requested = False
