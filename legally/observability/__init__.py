"""
Observability module.

Provides logging configuration and structured logging helpers.
"""

from legally.observability.log_utils import log_exception_with_context
from legally.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "log_exception_with_context",
]
