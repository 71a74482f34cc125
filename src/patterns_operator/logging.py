"""Structured logging configuration for the Patterns Operator."""

import json
import logging
import sys
from typing import Any

from .utils.context import get_context_dict

# Client libraries that log every request at INFO/DEBUG
NOISY_LOGGERS = ("kubernetes.client.rest", "urllib3")


def setup_structured_logging(level: str | int = logging.INFO) -> None:
    """Configure JSON-per-line logging on stdout.

    Args:
        level: Root log level, as a number or a name such as ``"DEBUG"``
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    resource_name: str,
    namespace: str,
    uid: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log one resource event as a single JSON document.

    Correlation and trace IDs of the current invocation are merged in, then
    ``kwargs``; values that are not JSON types are rendered with ``str``.
    """
    log_data = {
        "level": logging.getLevelName(level),
        "controller": controller,
        "resource": resource_kind,
        "name": resource_name,
        "namespace": namespace,
        "uid": uid,
        "event": event,
        "reason": reason,
        "message": message,
    }
    log_data.update(get_context_dict(kwargs))
    logger.log(level, json.dumps(log_data, default=str))
