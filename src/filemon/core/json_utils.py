"""Safe JSON utilities with consistent error handling.

This module provides type-safe JSON parsing with Pydantic schema
validation. Functions return Result types rather than raising exceptions,
making error handling explicit and consistent.

Example usage:
    result = parse_json_with_schema(raw_json, SummarySchema, context=str(path))
    if result.success:
        summary = result.value  # Type: SummarySchema
    else:
        logger.warning("Parse failed: %s", result.error)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from pydantic import BaseModel

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonParseResult(Generic[T]):
    """Result of a JSON parsing operation.

    Attributes:
        success: True if parsing succeeded, False otherwise.
        value: The parsed value if successful, None otherwise.
        error: Error message if parsing failed, None otherwise.
    """

    success: bool
    value: T | None
    error: str | None = None


def parse_json_with_schema(
    raw: str | None,
    schema: type[BaseModel],
    *,
    context: str = "",
) -> JsonParseResult[BaseModel]:
    """Parse JSON and validate against a Pydantic schema.

    Args:
        raw: JSON string to parse.
        schema: Pydantic model class for validation.
        context: Context string for error messages.

    Returns:
        JsonParseResult with validated model instance or error information.
        Empty or missing input is a failure: there is nothing to validate.
    """
    from pydantic import ValidationError

    context_prefix = f"{context}: " if context else ""

    if raw is None or raw.strip() == "":
        error_msg = f"{context_prefix}Empty JSON document"
        logger.warning(error_msg)
        return JsonParseResult(success=False, value=None, error=error_msg)

    # First parse the JSON
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        error_msg = f"{context_prefix}Invalid JSON at position {e.pos}: {e.msg}"
        logger.warning(error_msg)
        return JsonParseResult(success=False, value=None, error=error_msg)

    # Then validate against schema
    try:
        validated = schema.model_validate(data)
        return JsonParseResult(success=True, value=validated, error=None)
    except ValidationError as e:
        error_count = len(e.errors())
        first_error = e.errors()[0] if e.errors() else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", []))
        msg = first_error.get("msg", "validation error")
        error_msg = (
            f"{context_prefix}Schema validation failed "
            f"({error_count} error(s)): {field}: {msg}"
        )
        logger.warning(error_msg)
        return JsonParseResult(success=False, value=None, error=error_msg)
