"""Kubernetes API access shared by the handlers and owned resource kinds."""

from __future__ import annotations

import time
from typing import Any, Callable

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from .. import metrics
from ..config import K8S_REQUEST_TIMEOUT_SECONDS
from ..constants import (
    ACM_GROUP,
    ACM_HUB_PLURAL,
    ACM_VERSION,
    API_GROUP,
    API_VERSION,
    PLURAL_PATTERNS,
)


def load_kubernetes_config() -> None:
    """Load in-cluster configuration, falling back to the local kubeconfig."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


def get_k8s_clients() -> tuple[client.CustomObjectsApi, client.CoreV1Api]:
    """Get the Kubernetes API clients used by the operator.

    Returns:
        Tuple of (CustomObjectsApi, CoreV1Api)
    """
    load_kubernetes_config()
    return client.CustomObjectsApi(), client.CoreV1Api()


def is_not_found(error: BaseException) -> bool:
    """Return True if the error is an API 404."""
    return isinstance(error, ApiException) and error.status == 404


def is_conflict(error: BaseException) -> bool:
    """Return True if the error is an API 409 (stale resourceVersion)."""
    return isinstance(error, ApiException) and error.status == 409


def call_k8s(operation: str, func: Callable[..., Any], **kwargs: Any) -> Any:
    """Call a Kubernetes API method with a deadline and record metrics.

    Args:
        operation: Operation name used as the metrics label
        func: Bound API client method
        **kwargs: Arguments for the API method

    Returns:
        Whatever the API method returns

    Raises:
        client.exceptions.ApiException: On API errors, including 404
    """
    kwargs.setdefault("_request_timeout", K8S_REQUEST_TIMEOUT_SECONDS)
    start_time = time.time()
    try:
        result = func(**kwargs)
        metrics.api_call_total.labels(api_type="k8s", operation=operation, result="success").inc()
        return result
    except ApiException as e:
        result_label = "not_found" if e.status == 404 else "error"
        metrics.api_call_total.labels(api_type="k8s", operation=operation, result=result_label).inc()
        raise
    except Exception:
        metrics.api_call_total.labels(api_type="k8s", operation=operation, result="error").inc()
        raise
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(api_type="k8s", operation=operation).observe(duration)


def get_or_none(operation: str, func: Callable[..., Any], **kwargs: Any) -> Any:
    """Like call_k8s, but a 404 returns None instead of raising."""
    try:
        return call_k8s(operation, func, **kwargs)
    except ApiException as e:
        if e.status == 404:
            return None
        raise


class PatternStore:
    """Get, update and status-update Pattern objects."""

    def __init__(self, custom_api: Any) -> None:
        self.custom_api = custom_api

    def get(self, namespace: str, name: str) -> dict[str, Any]:
        return call_k8s(
            "get_pattern",
            self.custom_api.get_namespaced_custom_object,
            group=API_GROUP,
            version=API_VERSION,
            namespace=namespace,
            plural=PLURAL_PATTERNS,
            name=name,
        )

    def update(self, pattern: dict[str, Any]) -> dict[str, Any]:
        """Replace the Pattern; the body's resourceVersion guards against lost updates."""
        meta = pattern["metadata"]
        return call_k8s(
            "update_pattern",
            self.custom_api.replace_namespaced_custom_object,
            group=API_GROUP,
            version=API_VERSION,
            namespace=meta["namespace"],
            plural=PLURAL_PATTERNS,
            name=meta["name"],
            body=pattern,
        )

    def update_status(self, pattern: dict[str, Any]) -> dict[str, Any]:
        """Replace the Pattern status subresource."""
        meta = pattern["metadata"]
        return call_k8s(
            "update_pattern_status",
            self.custom_api.replace_namespaced_custom_object_status,
            group=API_GROUP,
            version=API_VERSION,
            namespace=meta["namespace"],
            plural=PLURAL_PATTERNS,
            name=meta["name"],
            body=pattern,
        )


class ClusterState:
    """Boolean presence checks against the cluster."""

    def __init__(self, custom_api: Any, core_api: Any) -> None:
        self.custom_api = custom_api
        self.core_api = core_api

    def namespace_exists(self, name: str) -> bool:
        try:
            call_k8s("get_namespace", self.core_api.read_namespace, name=name)
        except ApiException as e:
            if e.status == 404:
                return False
            raise
        return True

    def acm_hub_present(self) -> bool:
        """Return True if any MultiClusterHub exists.

        A missing CRD (404) means ACM is not installed.
        """
        try:
            hubs = call_k8s(
                "list_multiclusterhubs",
                self.custom_api.list_cluster_custom_object,
                group=ACM_GROUP,
                version=ACM_VERSION,
                plural=ACM_HUB_PLURAL,
            )
        except ApiException as e:
            if e.status == 404:
                return False
            raise
        return len(hubs.get("items", [])) > 0
