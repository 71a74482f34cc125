"""Utility functions for the Patterns Operator."""

from .context import get_context_dict, get_correlation_id, with_correlation_id
from .errors import sanitize_error_message, sanitize_exception
from .events import emit_event

__all__ = [
    "emit_event",
    "get_context_dict",
    "get_correlation_id",
    "with_correlation_id",
    "sanitize_error_message",
    "sanitize_exception",
]
