"""Summary persistence."""

from filemon.store.schemas import (
    MonitoredFileSchema,
    ScanRecordSchema,
    SummarySchema,
    schema_to_summary,
    summary_to_schema,
)
from filemon.store.summary_store import SUMMARY_FILE_NAME, SummaryStore

__all__ = [
    "SUMMARY_FILE_NAME",
    "MonitoredFileSchema",
    "ScanRecordSchema",
    "SummarySchema",
    "SummaryStore",
    "schema_to_summary",
    "summary_to_schema",
]
