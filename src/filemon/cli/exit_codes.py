"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Configuration errors
    40-49: Scan and storage errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for filemon CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    # Configuration errors (10-19)
    CONFIG_ERROR = 11
    PROJECT_NOT_FOUND = 12

    # Scan and storage errors (40-49)
    OPERATION_FAILED = 40
    SCAN_IO_ERROR = 41
    CORRUPT_STATE = 42
