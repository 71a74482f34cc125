"""Prometheus metrics for the Patterns Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "patterns_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "patterns_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

reconcile_step_total = Counter(
    "patterns_operator_reconcile_step_total",
    "Reconcile steps reported to Pattern status",
    ["step", "result"],
)

# Owned resource metrics
owned_resource_operations_total = Counter(
    "patterns_operator_owned_resource_operations_total",
    "Total number of operations on owned Subscriptions and Applications",
    ["kind", "operation", "result"],
)

ownership_conflicts_total = Counter(
    "patterns_operator_ownership_conflicts_total",
    "Owned resources found with a foreign owner reference",
    ["kind"],
)

# Configuration drift detection metrics
drift_detected_total = Counter(
    "patterns_operator_drift_detected_total",
    "Total number of configuration drift detections",
    ["kind"],
)

# API call metrics
api_call_total = Counter(
    "patterns_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "patterns_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

error_total = Counter(
    "patterns_operator_error_total",
    "Errors raised during reconciliation",
    ["kind", "error_type"],
)
