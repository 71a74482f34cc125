"""OLM Subscription as an owned resource kind."""

from __future__ import annotations

import copy
from typing import Any

from ..constants import KIND_SUBSCRIPTION, OLM_GROUP, OLM_SUBSCRIPTION_PLURAL, OLM_VERSION
from ..services.kubernetes import call_k8s, get_or_none
from .base import OwnedResourceKind

# Spec keys kept in line with the target; anything else OLM or an admin sets is left alone
MANAGED_SPEC_KEYS = ("name", "source", "sourceNamespace", "channel", "startingCSV")


class SubscriptionKind(OwnedResourceKind):
    """Subscriptions in ``operators.coreos.com/v1alpha1``."""

    kind = KIND_SUBSCRIPTION

    def __init__(self, custom_api: Any) -> None:
        self.custom_api = custom_api

    def fetch(self, name: str, namespace: str) -> dict[str, Any] | None:
        return get_or_none(
            "get_subscription",
            self.custom_api.get_namespaced_custom_object,
            group=OLM_GROUP,
            version=OLM_VERSION,
            namespace=namespace,
            plural=OLM_SUBSCRIPTION_PLURAL,
            name=name,
        )

    def create(self, body: dict[str, Any]) -> dict[str, Any]:
        return call_k8s(
            "create_subscription",
            self.custom_api.create_namespaced_custom_object,
            group=OLM_GROUP,
            version=OLM_VERSION,
            namespace=body["metadata"]["namespace"],
            plural=OLM_SUBSCRIPTION_PLURAL,
            body=body,
        )

    def update(self, body: dict[str, Any]) -> dict[str, Any]:
        return call_k8s(
            "update_subscription",
            self.custom_api.replace_namespaced_custom_object,
            group=OLM_GROUP,
            version=OLM_VERSION,
            namespace=body["metadata"]["namespace"],
            plural=OLM_SUBSCRIPTION_PLURAL,
            name=body["metadata"]["name"],
            body=body,
        )

    def managed_fields(self, obj: dict[str, Any]) -> dict[str, Any]:
        spec = obj.get("spec", {})
        return {key: spec.get(key) for key in MANAGED_SPEC_KEYS}

    def apply_managed_fields(self, target: dict[str, Any], observed: dict[str, Any]) -> dict[str, Any]:
        updated = copy.deepcopy(observed)
        spec = updated.setdefault("spec", {})
        for key in MANAGED_SPEC_KEYS:
            spec[key] = target["spec"].get(key)
        return updated
