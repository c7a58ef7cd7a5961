"""
Observability helpers.

Logging configuration and safe structured-context logging.
"""

from smartnotes.observability.logger import configure_logging, get_logger
from smartnotes.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_exception_with_context",
    "log_with_context",
    "safe_log_value",
]
