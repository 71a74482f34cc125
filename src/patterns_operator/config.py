"""Runtime settings read from the environment."""

from __future__ import annotations

import os

# Fixed requeue delays
REQUEUE_ERROR_DELAY_SECONDS: float = float(os.getenv("REQUEUE_ERROR_DELAY_SECONDS", "60"))
REQUEUE_DELETING_DELAY_SECONDS: float = float(os.getenv("REQUEUE_DELETING_DELAY_SECONDS", "120"))

# Level-triggered resync of converged patterns
RESYNC_INTERVAL_SECONDS: float = float(os.getenv("RESYNC_INTERVAL_SECONDS", "300"))

# Deadline passed to every Kubernetes API call
K8S_REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("K8S_REQUEST_TIMEOUT_SECONDS", "30"))

METRICS_PORT: int = int(os.getenv("METRICS_PORT", "8080"))
MAX_WORKERS: int = int(os.getenv("MAX_WORKERS", "4"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
