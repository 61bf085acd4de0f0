"""
Structured logging helpers.

Log context often carries document text, embeddings or gateway keys;
these helpers keep such values short and secrets out of the logs.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions
"""

import logging
from typing import Any

from pydantic import SecretStr


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Render a value for a log record.

    Secrets are masked, sequences and mappings are summarized by size
    (an embedding becomes ``list(768 items)``) and long strings are cut.

    Args:
        value: Value to render
        max_length: Maximum characters kept from a string value

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, SecretStr):
        return "**********"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = value if isinstance(value, str) else str(value)
    if len(text) > max_length:
        return text[:max_length] + f"... ({len(text)} chars)"
    return text


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    level: int = logging.ERROR,
    **context,
) -> None:
    """
    Log an exception with its traceback and structured context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        level: Log level; degraded paths log at WARNING
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = safe_log_value(str(exc))
    logger.log(level, message, exc_info=exc, extra=safe_context)
