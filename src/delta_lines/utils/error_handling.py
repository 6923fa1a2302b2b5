"""Standardized error logging helpers for delta_lines.

Modules that log an error before re-raising it go through these helpers so
every record uses the same ``[TAG] Failed ...: Type: message`` shape.
"""

from typing import Any, Optional

from .logger import log


def log_validation_error(field: str, value: Any, exception: Exception) -> None:
    """Log validation errors with consistent formatting.

    Args:
        field: Name of the argument being validated
        value: The value that failed validation
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[VALIDATION] Failed validating {field}='{value}': {error_type}: {exception}")


def log_failed_operation(operation: str, exception: Exception, prefix: Optional[str] = None) -> None:
    """Log a simple failed operation as "Failed to [operation]: [exception]".

    Args:
        operation: Description of what failed
        exception: The exception that was raised
        prefix: Optional log tag such as "DIFF"
    """
    prefix_str = f"[{prefix}] " if prefix else ""
    log.error(f"{prefix_str}Failed to {operation}: {type(exception).__name__}: {exception}")
