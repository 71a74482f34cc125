"""Cascade removal of a Pattern's Application before the Pattern goes away."""

from __future__ import annotations

from typing import Any

from .. import metrics
from ..builders.application import build_application
from ..builders.pattern import apply_defaults
from ..constants import KIND_APPLICATION, KIND_PATTERN, SYNC_STATUS_OUT_OF_SYNC
from ..exceptions import PendingCondition
from ..handlers.base import BaseHandler
from ..resources.application import sync_status
from ..resources.base import Classification, OwnedResourceKind, classify
from ..services.cluster import ClusterMetadataProvider
from ..services.kubernetes import ClusterState


class PatternFinalizer(BaseHandler):
    """Drives the Application through removal, one action per call.

    ``finalize`` returns normally once nothing is left to clean up and raises
    PendingCondition while removal is still in progress.
    """

    def __init__(
        self,
        cluster: ClusterMetadataProvider,
        applications: OwnedResourceKind,
        cluster_state: ClusterState,
    ) -> None:
        super().__init__(KIND_PATTERN)
        self.cluster = cluster
        self.applications = applications
        self.cluster_state = cluster_state

    def finalize(self, pattern: dict[str, Any]) -> None:
        meta = pattern["metadata"]

        try:
            target = build_application(apply_defaults(pattern, self.cluster))
        except Exception as e:
            # The Application cannot be reconstructed; give up cleanly
            self.log_error(
                meta,
                "Cannot clean up the application of an invalid pattern",
                error=e,
                reason="FinalizeSkipped",
            )
            return

        name = target["metadata"]["name"]
        observed = self.applications.fetch(name, target["metadata"]["namespace"])
        state = classify(self.applications, target, observed)

        if state is Classification.MISSING:
            self.log_info(meta, f"Application {name} has already been removed", reason="ApplicationRemoved")
            return

        if state is Classification.NOT_OWNED:
            self.log_info(meta, f"Application {name} is not owned by us", reason="ApplicationNotOwned")
            return

        if state is Classification.OWNED_AND_DRIFTED and self.applications.update_if_changed(target, observed):
            metrics.owned_resource_operations_total.labels(
                kind=KIND_APPLICATION, operation="update", result="success"
            ).inc()
            raise PendingCondition(f"updated application {name!r} for removal")

        if self.cluster_state.acm_hub_present():
            raise PendingCondition("waiting for removal of that acm hub")

        live_status = sync_status(observed)
        if live_status == SYNC_STATUS_OUT_OF_SYNC:
            raise PendingCondition(f"application {name!r} is still {live_status}")

        self.log_info(
            meta,
            f"Removing application {name}, cascading to anything instantiated by Argo CD",
            reason="ApplicationRemoving",
        )
        self.applications.delete(name, target["metadata"]["namespace"])
        metrics.owned_resource_operations_total.labels(
            kind=KIND_APPLICATION, operation="delete", result="success"
        ).inc()
        raise PendingCondition(f"waiting for application {name!r} to be removed")
