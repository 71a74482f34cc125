"""Main entry point for the Patterns Operator."""

from __future__ import annotations

import logging
from typing import Any

import kopf

from . import health
from . import logging as structured_logging
from . import tracing
from .config import K8S_REQUEST_TIMEOUT_SECONDS, LOG_LEVEL, MAX_WORKERS, METRICS_PORT
from .handlers import pattern

logger = logging.getLogger(__name__)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, memo: kopf.Memo, **_: Any) -> None:
    """Configure the operator."""
    # Set up structured JSON logging
    structured_logging.setup_structured_logging(LOG_LEVEL)
    tracing.initialize_tracing()

    # Annotations keep kopf's bookkeeping out of the status subresource we own
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    # Only kopf's own warnings become events; ours are posted explicitly
    settings.posting.level = logging.WARNING
    settings.networking.request_timeout = K8S_REQUEST_TIMEOUT_SECONDS
    settings.execution.max_workers = MAX_WORKERS

    # Metrics plus health check endpoints on one port
    health.start_health_server(METRICS_PORT)

    # Every object's memo is a shallow copy of this one, so they share the handler
    memo[pattern.MEMO_HANDLER_KEY] = pattern.PatternHandler.from_cluster()
    health.mark_ready()
    logger.info(f"Patterns operator started, serving metrics on port {METRICS_PORT}")


@kopf.on.cleanup()
def shutdown(**_: Any) -> None:
    """Stop reporting ready while the operator drains."""
    health.mark_not_ready()
