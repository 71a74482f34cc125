"""Builder for the Argo CD Application that syncs a pattern's repository."""

from __future__ import annotations

from typing import Any

from ..constants import (
    APPLICATION_DESTINATION_SERVER,
    APPLICATION_NAMESPACE,
    APPLICATION_PATH,
    APPLICATION_PROJECT,
    ARGO_CASCADE_FINALIZER,
    ARGO_GROUP,
    ARGO_VERSION,
    KIND_APPLICATION,
    LABEL_PATTERN,
)
from ..resources.base import owner_reference
from .pattern import is_deleting


def application_name(qualified: dict[str, Any]) -> str:
    """Name of the Application for a qualified Pattern."""
    return f"{qualified['metadata']['name']}-{qualified['spec']['clusterGroupName']}"


def build_value_files(qualified: dict[str, Any]) -> list[str]:
    """Helm value files layered from most generic to most specific."""
    spec = qualified["spec"]
    status = qualified.get("status", {})
    base = (spec["gitSpec"].get("valuesDirectoryURL") or "").rstrip("/")
    group = spec["clusterGroupName"]
    platform = status.get("clusterPlatform", "")

    return [
        f"{base}/values-global.yaml",
        f"{base}/values-{group}.yaml",
        f"{base}/values-{platform}.yaml",
        f"{base}/values-{platform}-{group}.yaml",
        f"{base}/values-{status.get('clusterName', '')}.yaml",
    ]


def build_parameters(qualified: dict[str, Any]) -> list[dict[str, str]]:
    """Helm parameters consumed by the cluster group chart.

    ``spec.extraParameters`` are appended after the built-in ones.
    """
    meta = qualified["metadata"]
    spec = qualified["spec"]
    status = qualified.get("status", {})
    git = spec["gitSpec"]

    parameters = [
        {"name": "global.pattern", "value": meta["name"]},
        {"name": "global.namespace", "value": meta["namespace"]},
        {"name": "global.repoURL", "value": git.get("targetRepo", "")},
        {"name": "global.targetRevision", "value": git["targetRevision"]},
        {"name": "global.hostname", "value": git["hostname"]},
        {"name": "global.valuesDirectoryURL", "value": git.get("valuesDirectoryURL") or ""},
        {"name": "global.hubClusterDomain", "value": status.get("clusterDomain", "")},
        {"name": "global.clusterPlatform", "value": status.get("clusterPlatform", "")},
        {"name": "main.clusterGroupName", "value": spec["clusterGroupName"]},
    ]
    for extra in spec.get("extraParameters") or []:
        parameters.append({"name": str(extra["name"]), "value": str(extra.get("value", ""))})
    return parameters


def build_sync_policy(qualified: dict[str, Any]) -> dict[str, Any]:
    """Automated sync; pruning is switched on once the Pattern is being deleted."""
    return {"automated": {"prune": is_deleting(qualified), "selfHeal": False}}


def build_application(qualified: dict[str, Any]) -> dict[str, Any]:
    """Create the desired Application from a qualified Pattern.

    Args:
        qualified: Pattern with defaults applied

    Returns:
        Application body owned by the Pattern
    """
    git = qualified["spec"]["gitSpec"]

    return {
        "apiVersion": f"{ARGO_GROUP}/{ARGO_VERSION}",
        "kind": KIND_APPLICATION,
        "metadata": {
            "name": application_name(qualified),
            "namespace": APPLICATION_NAMESPACE,
            "labels": {LABEL_PATTERN: qualified["metadata"]["name"]},
            "finalizers": [ARGO_CASCADE_FINALIZER],
            "ownerReferences": [owner_reference(qualified)],
        },
        "spec": {
            "project": APPLICATION_PROJECT,
            "source": {
                "repoURL": git.get("targetRepo", ""),
                "targetRevision": git["targetRevision"],
                "path": APPLICATION_PATH,
                "helm": {
                    "ignoreMissingValueFiles": True,
                    "valueFiles": build_value_files(qualified),
                    "parameters": build_parameters(qualified),
                },
            },
            "destination": {
                "server": APPLICATION_DESTINATION_SERVER,
                "namespace": qualified["metadata"]["namespace"],
            },
            "syncPolicy": build_sync_policy(qualified),
        },
    }
