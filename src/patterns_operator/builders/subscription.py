"""Builder for the GitOps operator Subscription."""

from __future__ import annotations

from typing import Any

from ..constants import (
    APPLICATION_NAMESPACE,
    KIND_SUBSCRIPTION,
    OLM_GROUP,
    OLM_VERSION,
    SUBSCRIPTION_NAME,
    SUBSCRIPTION_NAMESPACE,
    SUBSCRIPTION_PACKAGE,
    SUBSCRIPTION_SOURCE_NAMESPACE,
)
from ..resources.base import owner_reference


def build_subscription(qualified: dict[str, Any]) -> dict[str, Any]:
    """Create the desired Subscription from a qualified Pattern.

    Args:
        qualified: Pattern with defaults applied

    Returns:
        Subscription body owned by the Pattern
    """
    gitops = qualified["spec"]["gitOpsSpec"]
    namespace = qualified["metadata"]["namespace"]

    return {
        "apiVersion": f"{OLM_GROUP}/{OLM_VERSION}",
        "kind": KIND_SUBSCRIPTION,
        "metadata": {
            "name": SUBSCRIPTION_NAME,
            "namespace": SUBSCRIPTION_NAMESPACE,
            "ownerReferences": [owner_reference(qualified)],
        },
        "spec": {
            "name": SUBSCRIPTION_PACKAGE,
            "source": gitops["operatorSource"],
            "sourceNamespace": SUBSCRIPTION_SOURCE_NAMESPACE,
            "channel": gitops["operatorChannel"],
            "startingCSV": f"{SUBSCRIPTION_PACKAGE}.{gitops['operatorCSV']}",
            "installPlanApproval": "Automatic",
            "config": {
                "env": [
                    {
                        # Lets the GitOps engine manage cluster-scoped resources for the pattern
                        "name": "ARGOCD_CLUSTER_CONFIG_NAMESPACES",
                        "value": f"{APPLICATION_NAMESPACE}, {namespace}",
                    }
                ],
            },
        },
    }
