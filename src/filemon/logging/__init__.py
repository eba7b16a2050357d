"""Structured logging module for filemon.

Provides configurable logging with JSON format support and file rotation.
Includes project context support for the per-project monitor threads.
"""

from filemon.logging.config import configure_logging
from filemon.logging.context import (
    ProjectContextFilter,
    get_project_context,
    project_context,
    set_project_context,
)
from filemon.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ProjectContextFilter",
    "configure_logging",
    "get_project_context",
    "project_context",
    "set_project_context",
]
