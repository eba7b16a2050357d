"""Domain models and ledger operations."""

from filemon.domain.ledger import latest_event, record_change, register_file
from filemon.domain.models import (
    EventKind,
    LatestEvent,
    MonitoredFile,
    ScanRecord,
    Summary,
    make_key,
)

__all__ = [
    "EventKind",
    "LatestEvent",
    "MonitoredFile",
    "ScanRecord",
    "Summary",
    "latest_event",
    "make_key",
    "record_change",
    "register_file",
]
