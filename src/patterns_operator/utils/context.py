"""Correlation IDs and trace IDs for tying log lines to one reconcile invocation."""

from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace

correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def get_correlation_id() -> str | None:
    """Get the correlation ID from the current context."""
    return correlation_id.get()


@contextmanager
def with_correlation_id(corr_id: str | None = None) -> Iterator[str]:
    """Set a correlation ID for the duration of a block.

    kopf runs sync handlers in a thread pool; each invocation gets its own
    context, so concurrent Patterns never see each other's ID.

    Args:
        corr_id: Correlation ID to use; a random one is generated when omitted

    Yields:
        The correlation ID
    """
    corr_id = corr_id or uuid.uuid4().hex
    token = correlation_id.set(corr_id)
    try:
        yield corr_id
    finally:
        correlation_id.reset(token)


def get_trace_ids() -> dict[str, str]:
    """IDs of the active span, or an empty dict when nothing is being recorded."""
    span = trace.get_current_span()
    span_context = span.get_span_context()
    if not span.is_recording() or not span_context.is_valid:
        return {}
    return {
        "trace_id": format(span_context.trace_id, "032x"),
        "span_id": format(span_context.span_id, "016x"),
    }


def get_context_dict(additional: dict[str, Any] | None = None) -> dict[str, Any]:
    """Collect per-invocation context for a log line.

    Args:
        additional: Extra key-value pairs; they win over context values

    Returns:
        Dictionary with correlation_id and trace IDs when set
    """
    ctx: dict[str, Any] = {}

    corr_id = get_correlation_id()
    if corr_id:
        ctx["correlation_id"] = corr_id
    ctx.update(get_trace_ids())

    if additional:
        ctx.update(additional)

    return ctx
