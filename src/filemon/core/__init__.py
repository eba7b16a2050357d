"""Core utilities package.

This package contains small utility functions used across the codebase for
datetime parsing and formatting, atomic writes and JSON
validation.
"""

from filemon.core.datetime_utils import (
    format_local_datetime,
    format_local_time,
    mtime_to_datetime,
    parse_duration,
    parse_iso_timestamp,
    utc_now,
)
from filemon.core.file_utils import atomic_write_text
from filemon.core.json_utils import JsonParseResult, parse_json_with_schema

__all__ = [
    # datetime_utils
    "utc_now",
    "parse_iso_timestamp",
    "mtime_to_datetime",
    "format_local_datetime",
    "format_local_time",
    "parse_duration",
    # file_utils
    "atomic_write_text",
    # json_utils
    "JsonParseResult",
    "parse_json_with_schema",
]
