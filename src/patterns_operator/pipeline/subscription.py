"""Keep the GitOps operator Subscription in line with the qualified Pattern."""

from __future__ import annotations

from typing import Any

from .. import metrics
from ..builders.subscription import build_subscription
from ..constants import KIND_PATTERN, KIND_SUBSCRIPTION, STEP_CREATE_SUBSCRIPTION, STEP_UPDATE_SUBSCRIPTION
from ..handlers.base import BaseHandler
from ..resources.base import Classification, OwnedResourceKind, classify
from .result import StepOutcome


class SubscriptionReconciler(BaseHandler):
    """Create or update the Subscription; never touch one we do not own."""

    def __init__(self, subscriptions: OwnedResourceKind) -> None:
        super().__init__(KIND_PATTERN)
        self.subscriptions = subscriptions

    def reconcile(self, qualified: dict[str, Any]) -> StepOutcome | None:
        meta = qualified["metadata"]
        target = build_subscription(qualified)
        name = target["metadata"]["name"]
        observed = self.subscriptions.fetch(name, target["metadata"]["namespace"])

        state = classify(self.subscriptions, target, observed)

        if state is Classification.MISSING:
            try:
                self.subscriptions.create(target)
            except Exception as e:
                metrics.owned_resource_operations_total.labels(
                    kind=KIND_SUBSCRIPTION, operation="create", result="failed"
                ).inc()
                return StepOutcome(STEP_CREATE_SUBSCRIPTION, e)
            metrics.owned_resource_operations_total.labels(
                kind=KIND_SUBSCRIPTION, operation="create", result="success"
            ).inc()
            self.log_info(meta, f"Created subscription {name}", reason="SubscriptionCreated", subscription=name)
            return StepOutcome(STEP_CREATE_SUBSCRIPTION)

        if state is Classification.OWNED_AND_DRIFTED:
            # Dangerous if several patterns disagree on channel or version
            metrics.drift_detected_total.labels(kind=KIND_SUBSCRIPTION).inc()
            self.log_info(meta, f"Drift detected on subscription {name}", reason="DriftDetected", subscription=name)
            try:
                changed = self.subscriptions.update_if_changed(target, observed)
            except Exception as e:
                metrics.owned_resource_operations_total.labels(
                    kind=KIND_SUBSCRIPTION, operation="update", result="failed"
                ).inc()
                return StepOutcome(STEP_UPDATE_SUBSCRIPTION, e)
            if changed:
                metrics.owned_resource_operations_total.labels(
                    kind=KIND_SUBSCRIPTION, operation="update", result="success"
                ).inc()
                return StepOutcome(STEP_UPDATE_SUBSCRIPTION)
            return None

        if state is Classification.NOT_OWNED:
            # Shared installs of the GitOps engine may belong to another pattern
            metrics.ownership_conflicts_total.labels(kind=KIND_SUBSCRIPTION).inc()
            self.log_info(
                meta,
                "The gitops subscription is not owned by us, leaving untouched",
                reason="SubscriptionNotOwned",
                subscription=name,
            )
            return None

        return None
