"""Read-only access to OpenShift cluster metadata."""

from __future__ import annotations

from typing import Any, Protocol

from ..constants import CONFIG_GROUP, CONFIG_VERSION
from .kubernetes import call_k8s


class ClusterMetadataProvider(Protocol):
    """Protocol defining the cluster metadata lookups used for defaulting."""

    def get_cluster_version(self) -> dict[str, Any]:
        """Get the ClusterVersion object named ``version``."""
        ...

    def get_infrastructure(self) -> dict[str, Any]:
        """Get the Infrastructure object named ``cluster``."""
        ...

    def get_ingress(self) -> dict[str, Any]:
        """Get the Ingress config object named ``cluster``."""
        ...


class OpenShiftClusterMetadata:
    """Cluster metadata read from ``config.openshift.io/v1`` singletons."""

    def __init__(self, custom_api: Any) -> None:
        """Initialize the provider.

        Args:
            custom_api: Kubernetes CustomObjectsApi instance
        """
        self.custom_api = custom_api

    def _get(self, plural: str, name: str) -> dict[str, Any]:
        return call_k8s(
            f"get_{plural}",
            self.custom_api.get_cluster_custom_object,
            group=CONFIG_GROUP,
            version=CONFIG_VERSION,
            plural=plural,
            name=name,
        )

    def get_cluster_version(self) -> dict[str, Any]:
        return self._get("clusterversions", "version")

    def get_infrastructure(self) -> dict[str, Any]:
        return self._get("infrastructures", "cluster")

    def get_ingress(self) -> dict[str, Any]:
        return self._get("ingresses", "cluster")
