"""Argo CD Application as an owned resource kind."""

from __future__ import annotations

import copy
from typing import Any

from ..constants import (
    ARGO_APPLICATION_PLURAL,
    ARGO_CASCADE_FINALIZER,
    ARGO_GROUP,
    ARGO_VERSION,
    KIND_APPLICATION,
)
from ..services.kubernetes import call_k8s, get_or_none
from .base import OwnedResourceKind

MANAGED_SPEC_KEYS = ("project", "source", "destination", "syncPolicy")


def sync_status(app: dict[str, Any]) -> str:
    """Live sync status code reported by Argo CD, e.g. ``Synced`` or ``OutOfSync``."""
    return app.get("status", {}).get("sync", {}).get("status", "")


class ApplicationKind(OwnedResourceKind):
    """Applications in ``argoproj.io/v1alpha1``."""

    kind = KIND_APPLICATION

    def __init__(self, custom_api: Any) -> None:
        self.custom_api = custom_api

    def fetch(self, name: str, namespace: str) -> dict[str, Any] | None:
        return get_or_none(
            "get_application",
            self.custom_api.get_namespaced_custom_object,
            group=ARGO_GROUP,
            version=ARGO_VERSION,
            namespace=namespace,
            plural=ARGO_APPLICATION_PLURAL,
            name=name,
        )

    def create(self, body: dict[str, Any]) -> dict[str, Any]:
        return call_k8s(
            "create_application",
            self.custom_api.create_namespaced_custom_object,
            group=ARGO_GROUP,
            version=ARGO_VERSION,
            namespace=body["metadata"]["namespace"],
            plural=ARGO_APPLICATION_PLURAL,
            body=body,
        )

    def update(self, body: dict[str, Any]) -> dict[str, Any]:
        return call_k8s(
            "update_application",
            self.custom_api.replace_namespaced_custom_object,
            group=ARGO_GROUP,
            version=ARGO_VERSION,
            namespace=body["metadata"]["namespace"],
            plural=ARGO_APPLICATION_PLURAL,
            name=body["metadata"]["name"],
            body=body,
        )

    def delete(self, name: str, namespace: str) -> None:
        # Foreground so the cascade finalizer runs before the object disappears
        call_k8s(
            "delete_application",
            self.custom_api.delete_namespaced_custom_object,
            group=ARGO_GROUP,
            version=ARGO_VERSION,
            namespace=namespace,
            plural=ARGO_APPLICATION_PLURAL,
            name=name,
            propagation_policy="Foreground",
        )

    def managed_fields(self, obj: dict[str, Any]) -> dict[str, Any]:
        spec = obj.get("spec", {})
        fields = {key: spec.get(key) for key in MANAGED_SPEC_KEYS}
        fields["cascade"] = ARGO_CASCADE_FINALIZER in (obj.get("metadata", {}).get("finalizers") or [])
        return fields

    def apply_managed_fields(self, target: dict[str, Any], observed: dict[str, Any]) -> dict[str, Any]:
        updated = copy.deepcopy(observed)
        spec = updated.setdefault("spec", {})
        for key in MANAGED_SPEC_KEYS:
            spec[key] = copy.deepcopy(target["spec"].get(key))
        finalizers = updated["metadata"].setdefault("finalizers", [])
        if ARGO_CASCADE_FINALIZER not in finalizers:
            finalizers.append(ARGO_CASCADE_FINALIZER)
        return updated
