"""Scan diff engine and orchestration."""

from filemon.scanner.engine import ObservedFile, iter_subfolder_files, scan
from filemon.scanner.orchestrator import ScanOutcome, perform_scan

__all__ = [
    "ObservedFile",
    "ScanOutcome",
    "iter_subfolder_files",
    "perform_scan",
    "scan",
]
