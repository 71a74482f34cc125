"""Qualify a Pattern by filling unset spec fields and derived status fields."""

from __future__ import annotations

import copy
from typing import Any

from ..constants import (
    DEFAULT_CLUSTER_GROUP,
    DEFAULT_OPERATOR_CHANNEL,
    DEFAULT_OPERATOR_CSV,
    DEFAULT_OPERATOR_SOURCE,
    DEFAULT_TARGET_REVISION,
)
from ..exceptions import DefaultingError
from ..services.cluster import ClusterMetadataProvider


def cluster_name_from_domain(domain: str) -> str:
    """Derive the cluster short name from an ingress domain.

    The domain is expected to look like ``apps.<cluster>.<base domain>``.

    Raises:
        DefaultingError: If the domain has no second label
    """
    labels = domain.split(".")
    if len(labels) < 2 or not labels[1]:
        raise DefaultingError(f"cluster domain {domain!r} is not of the form apps.<cluster>.<domain>")
    return labels[1]


def hostname_from_repo(target_repo: str) -> str:
    """Return the host part of ``scheme://host/...``, or "" when there is none."""
    segments = target_repo.split("/")
    if len(segments) < 3:
        return ""
    return segments[2]


def apply_defaults(pattern: dict[str, Any], cluster: ClusterMetadataProvider) -> dict[str, Any]:
    """Build the qualified copy of a Pattern.

    Cluster facts are always re-read and overwrite the copied status; empty
    spec fields are filled from fixed defaults. The input is never modified.

    Args:
        pattern: Live Pattern object
        cluster: Cluster metadata provider

    Returns:
        Deep copy of the Pattern with defaults applied

    Raises:
        DefaultingError: If cluster metadata is missing or malformed
        client.exceptions.ApiException: If cluster metadata could not be read
    """
    output = copy.deepcopy(pattern)
    spec = output.setdefault("spec", {})
    status = output.setdefault("status", {})

    cluster_version = cluster.get_cluster_version()
    status["clusterID"] = cluster_version.get("spec", {}).get("clusterID", "")

    infrastructure = cluster.get_infrastructure()
    status["clusterPlatform"] = infrastructure.get("spec", {}).get("platformSpec", {}).get("type", "")

    ingress = cluster.get_ingress()
    domain = ingress.get("spec", {}).get("domain", "")
    status["clusterName"] = cluster_name_from_domain(domain)
    status["clusterDomain"] = domain

    git = spec.setdefault("gitSpec", {})
    if not git.get("targetRevision"):
        git["targetRevision"] = DEFAULT_TARGET_REVISION
    if not git.get("hostname"):
        git["hostname"] = hostname_from_repo(git.get("targetRepo", ""))

    gitops = spec.get("gitOpsSpec")
    if gitops is None:
        gitops = spec["gitOpsSpec"] = {}
    if not gitops.get("operatorChannel"):
        gitops["operatorChannel"] = DEFAULT_OPERATOR_CHANNEL
    if not gitops.get("operatorSource"):
        gitops["operatorSource"] = DEFAULT_OPERATOR_SOURCE
    if not gitops.get("operatorCSV"):
        gitops["operatorCSV"] = DEFAULT_OPERATOR_CSV

    if not spec.get("clusterGroupName"):
        spec["clusterGroupName"] = DEFAULT_CLUSTER_GROUP

    return output


def is_deleting(pattern: dict[str, Any]) -> bool:
    """Return True once the Pattern has a deletion timestamp."""
    return bool(pattern.get("metadata", {}).get("deletionTimestamp"))
