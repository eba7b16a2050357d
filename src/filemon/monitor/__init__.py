"""Scan scheduling: per-project loops, signals and fan-out."""

from filemon.monitor.runner import MonitorSupervisor, ProjectMonitor
from filemon.monitor.signals import (
    InMemorySignals,
    Marker,
    MarkerFileSignals,
    ScanSignals,
)

__all__ = [
    "InMemorySignals",
    "Marker",
    "MarkerFileSignals",
    "MonitorSupervisor",
    "ProjectMonitor",
    "ScanSignals",
]
