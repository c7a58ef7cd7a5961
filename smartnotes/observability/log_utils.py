"""
Structured logging helpers.

Context values are flattened to short strings before they reach the
LogRecord: embedding vectors and hit lists are logged by size, long text
(document content, fused query text) is truncated.

Dependencies: logging (stdlib)
System role: Safe `extra=` context for retrieval and ingestion logs
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value for a log record.

    Args:
        value: Any value passed as logging context
        max_length: Longest string kept before truncation

    Returns:
        str: Printable summary that never raises
    """
    if value is None:
        return "None"

    if isinstance(value, str):
        text = value
    elif isinstance(value, Mapping):
        text = f"dict({len(value)} keys)"
    elif isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        text = f"{type(value).__name__}({len(value)} items)"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... (truncated, {len(text)} total)"


def _safe_context(context: Mapping[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """Log message at level with sanitized keyword context as record attributes."""
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with traceback plus error_type / error_msg attributes.

    Must be called from inside the except block handling exc.
    """
    extra = _safe_context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
