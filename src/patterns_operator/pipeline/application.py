"""Keep the Argo CD Application in line with the qualified Pattern."""

from __future__ import annotations

from typing import Any

from .. import metrics
from ..builders.application import build_application
from ..constants import (
    APPLICATION_NAMESPACE,
    KIND_APPLICATION,
    KIND_PATTERN,
    STEP_CHECK_NAMESPACE,
    STEP_CREATE_APPLICATION,
    STEP_UPDATE_APPLICATION,
)
from ..exceptions import NamespaceNotReady, OwnershipConflict
from ..handlers.base import BaseHandler
from ..resources.base import Classification, OwnedResourceKind, classify
from ..services.kubernetes import ClusterState
from .result import StepOutcome


class ApplicationReconciler(BaseHandler):
    """Create or update the Application once the GitOps namespace exists."""

    def __init__(self, applications: OwnedResourceKind, cluster_state: ClusterState) -> None:
        super().__init__(KIND_PATTERN)
        self.applications = applications
        self.cluster_state = cluster_state

    def check_namespace(self, qualified: dict[str, Any]) -> StepOutcome | None:
        """The GitOps operator creates the namespace; wait for it."""
        if not self.cluster_state.namespace_exists(APPLICATION_NAMESPACE):
            return StepOutcome(STEP_CHECK_NAMESPACE, NamespaceNotReady(APPLICATION_NAMESPACE))
        return None

    def reconcile(self, qualified: dict[str, Any]) -> StepOutcome | None:
        meta = qualified["metadata"]
        target = build_application(qualified)
        name = target["metadata"]["name"]
        observed = self.applications.fetch(name, target["metadata"]["namespace"])

        state = classify(self.applications, target, observed)

        if state is Classification.MISSING:
            self.log_info(meta, f"Application {name} not found, creating it", reason="ApplicationMissing", application=name)
            try:
                self.applications.create(target)
            except Exception as e:
                metrics.owned_resource_operations_total.labels(
                    kind=KIND_APPLICATION, operation="create", result="failed"
                ).inc()
                return StepOutcome(STEP_CREATE_APPLICATION, e)
            metrics.owned_resource_operations_total.labels(
                kind=KIND_APPLICATION, operation="create", result="success"
            ).inc()
            return StepOutcome(STEP_CREATE_APPLICATION)

        if state is Classification.OWNED_AND_DRIFTED:
            metrics.drift_detected_total.labels(kind=KIND_APPLICATION).inc()
            self.log_info(meta, f"Drift detected on application {name}", reason="DriftDetected", application=name)
            try:
                changed = self.applications.update_if_changed(target, observed)
            except Exception as e:
                metrics.owned_resource_operations_total.labels(
                    kind=KIND_APPLICATION, operation="update", result="failed"
                ).inc()
                # Breadcrumb that a retried update failed again
                status = qualified.setdefault("status", {})
                status["version"] = int(status.get("version") or 0) + 1
                return StepOutcome(STEP_UPDATE_APPLICATION, e)
            if changed:
                metrics.owned_resource_operations_total.labels(
                    kind=KIND_APPLICATION, operation="update", result="success"
                ).inc()
                return StepOutcome(STEP_UPDATE_APPLICATION)
            return None

        if state is Classification.NOT_OWNED:
            # Someone removed or replaced the owner reference
            metrics.ownership_conflicts_total.labels(kind=KIND_APPLICATION).inc()
            return StepOutcome(STEP_CREATE_APPLICATION, OwnershipConflict(f"We no longer own Application {name!r}"))

        return None
