"""Handler for Pattern CRD."""

from __future__ import annotations

import threading
from typing import Any, Callable

import kopf

from .. import metrics
from ..builders.pattern import apply_defaults, is_deleting
from ..config import (
    REQUEUE_DELETING_DELAY_SECONDS,
    REQUEUE_ERROR_DELAY_SECONDS,
    RESYNC_INTERVAL_SECONDS,
)
from ..constants import (
    API_GROUP,
    API_VERSION,
    KIND_PATTERN,
    PLURAL_PATTERNS,
    STEP_APPLY_DEFAULTS,
    STEP_CHECK_NAMESPACE,
    STEP_CREATE_APPLICATION,
    STEP_CREATE_SUBSCRIPTION,
    STEP_FINALIZE,
    STEP_POST_VALIDATION,
    STEP_PRE_VALIDATION,
    STEP_UPDATE_FINALIZER,
)
from ..exceptions import PendingCondition
from ..pipeline.application import ApplicationReconciler
from ..pipeline.finalization import PatternFinalizer
from ..pipeline.result import ReconcileResult, StepOutcome
from ..pipeline.subscription import SubscriptionReconciler
from ..resources.application import ApplicationKind
from ..resources.subscription import SubscriptionKind
from ..services.cluster import ClusterMetadataProvider, OpenShiftClusterMetadata
from ..services.kubernetes import ClusterState, PatternStore, get_k8s_clients, is_conflict, is_not_found
from ..tracing import trace_span
from ..utils.context import with_correlation_id
from ..utils.errors import sanitize_exception
from ..utils.events import (
    emit_finalized,
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_step_completed,
)
from ..validation import post_validate, pre_validate
from .base import BaseHandler

PipelineStep = Callable[[dict[str, Any]], "StepOutcome | None"]

MEMO_HANDLER_KEY = "pattern_handler"


class PatternHandler(BaseHandler):
    """Reconciles one Pattern per call, taking at most one action each time."""

    def __init__(
        self,
        patterns: PatternStore,
        cluster: ClusterMetadataProvider,
        cluster_state: ClusterState,
        subscriptions: SubscriptionKind,
        applications: ApplicationKind,
    ) -> None:
        super().__init__(KIND_PATTERN)
        self.patterns = patterns
        self.cluster = cluster
        self.subscription_reconciler = SubscriptionReconciler(subscriptions)
        self.application_reconciler = ApplicationReconciler(applications, cluster_state)
        self.finalizer = PatternFinalizer(cluster, applications, cluster_state)

    @classmethod
    def from_cluster(cls) -> PatternHandler:
        """Build a handler wired to the live cluster."""
        custom_api, core_api = get_k8s_clients()
        return cls(
            patterns=PatternStore(custom_api),
            cluster=OpenShiftClusterMetadata(custom_api),
            cluster_state=ClusterState(custom_api, core_api),
            subscriptions=SubscriptionKind(custom_api),
            applications=ApplicationKind(custom_api),
        )

    def reconcile(self, namespace: str, name: str) -> ReconcileResult:
        """Run one reconcile invocation for the Pattern ``namespace/name``."""
        try:
            instance = self.patterns.get(namespace, name)
        except Exception as e:
            if is_not_found(e):
                # Deleted after the request was queued; owned objects are garbage collected
                return ReconcileResult.done()
            return ReconcileResult.after(REQUEUE_ERROR_DELAY_SECONDS, e)

        meta = instance["metadata"]
        self.log_info(meta, "Reconciling Pattern", event="reconcile", reason="Reconciling")

        if not is_deleting(instance):
            if not self.has_finalizer(meta):
                self.add_finalizer(meta)
                try:
                    instance = self.patterns.update(instance)
                except Exception as e:
                    return self.action_performed(instance, STEP_UPDATE_FINALIZER, e)
                return self.action_performed(instance, STEP_UPDATE_FINALIZER, None)
            return self.converge(instance)

        if not self.has_finalizer(meta):
            return ReconcileResult.done()
        return self.finalize(instance)

    def converge(self, instance: dict[str, Any]) -> ReconcileResult:
        """Walk the pipeline and stop at the first step that acted or failed."""
        try:
            qualified = apply_defaults(instance, self.cluster)
        except Exception as e:
            return self.action_performed(instance, STEP_APPLY_DEFAULTS, e)

        # Each entry names the step an unexpected exception is reported under
        steps: list[tuple[str, PipelineStep]] = [
            (STEP_PRE_VALIDATION, pre_validate),
            (STEP_CREATE_SUBSCRIPTION, self.subscription_reconciler.reconcile),
            (STEP_CHECK_NAMESPACE, self.application_reconciler.check_namespace),
            (STEP_CREATE_APPLICATION, self.application_reconciler.reconcile),
            (STEP_POST_VALIDATION, post_validate),
        ]
        for step_name, step in steps:
            with trace_span(step_name, kind=KIND_PATTERN):
                try:
                    outcome = step(qualified)
                except Exception as e:
                    outcome = StepOutcome(step_name, e)
            if outcome is not None:
                return self.action_performed(qualified, outcome.step, outcome.error)

        self.log_info(instance["metadata"], "Reconcile complete", event="reconcile", reason="Converged")
        return ReconcileResult.done()

    def finalize(self, instance: dict[str, Any]) -> ReconcileResult:
        """Clean up owned resources, then release the finalizer."""
        meta = instance["metadata"]
        self.log_info(meta, "Finalizing pattern object", event="deletion", reason="Finalizing")
        try:
            self.finalizer.finalize(instance)
        except Exception as e:
            return self.action_performed(instance, STEP_FINALIZE, e)

        self.log_info(meta, f"Removing finalizer from {meta.get('name')}", event="deletion", reason="FinalizerRemoved")
        self.remove_finalizer(meta)
        try:
            self.patterns.update(instance)
        except Exception as e:
            if is_not_found(e):
                return ReconcileResult.done()
            self.log_error(meta, "Failed to remove finalizer", error=e, reason="FinalizerRemoveFailed")
            return ReconcileResult.after(REQUEUE_ERROR_DELAY_SECONDS, e)
        metrics.reconcile_step_total.labels(step=STEP_FINALIZE, result="success").inc()
        return ReconcileResult.done()

    def action_performed(
        self,
        pattern: dict[str, Any],
        step: str,
        error: BaseException | None,
    ) -> ReconcileResult:
        """Pick the requeue delay for a reported step and persist the outcome.

        Anything reported while deleting waits the deletion delay, failures
        wait the error delay, and successful steps requeue immediately.
        """
        if is_deleting(pattern):
            delay = REQUEUE_DELETING_DELAY_SECONDS
        elif error is not None:
            delay = REQUEUE_ERROR_DELAY_SECONDS
        else:
            delay = 0.0
        return self.report(pattern, step, error, delay)

    def report(
        self,
        pattern: dict[str, Any],
        step: str,
        error: BaseException | None,
        delay: float,
    ) -> ReconcileResult:
        """Persist lastStep and lastError to the Pattern's status subresource."""
        meta = pattern["metadata"]
        status = pattern.setdefault("status", {})
        status["lastStep"] = step

        if error is not None:
            status["lastError"] = sanitize_exception(error)
            result_label = "pending" if isinstance(error, PendingCondition) else "failed"
            self.log_error(meta, f"Reconcile step {step!r} failed", error=error, reason="StepFailed", step=step)
        else:
            status["lastError"] = ""
            result_label = "success"
            self.log_info(meta, f"Reconcile step {step!r} complete", reason="StepComplete", step=step)
        metrics.reconcile_step_total.labels(step=step, result=result_label).inc()

        try:
            self.patterns.update_status(pattern)
        except Exception as e:
            if is_conflict(e):
                # Acted on a stale copy; the next attempt re-reads it
                self.log_warning(meta, "Pattern changed while reconciling", reason="StatusConflict", step=step)
            else:
                self.log_error(meta, "Failed to update Pattern status", error=e, reason="StatusUpdateFailed")
            return ReconcileResult.after(REQUEUE_ERROR_DELAY_SECONDS, e)

        return ReconcileResult.after(delay, error, step=step)


def raise_for_result(result: ReconcileResult) -> None:
    """Translate a reconcile result into kopf's retry contract.

    Raises:
        kopf.TemporaryError: When the invocation asked to be requeued
    """
    if not result.requeue:
        return
    if result.error is not None:
        message = sanitize_exception(result.error)
    else:
        message = "reconcile step complete, continuing"
    raise kopf.TemporaryError(message, delay=result.requeue_after)


def run_reconcile(
    namespace: str,
    name: str,
    body: dict[str, Any],
    memo: kopf.Memo,
    blocking: bool = True,
) -> ReconcileResult | None:
    """Run one invocation, serialized per Pattern via its kopf memo.

    The handler is placed in the operator memo at startup; kopf hands every
    object a shallow copy of it, so the lock stays per object.

    Returns None when ``blocking`` is False and another invocation is in flight.
    """
    lock = memo.setdefault("reconcile_lock", threading.Lock())
    if not lock.acquire(blocking=blocking):
        return None
    try:
        handler: PatternHandler = memo[MEMO_HANDLER_KEY]
        with with_correlation_id(), trace_span("reconcile_pattern", kind=KIND_PATTERN, attributes={"pattern.name": name}):
            result = handler.reconcile_with_metrics(
                body.get("metadata", {}),
                lambda: handler.reconcile(namespace, name),
            )
    finally:
        lock.release()

    if result.error is not None:
        emit_reconcile_failed(body, sanitize_exception(result.error))
    elif result.step:
        emit_step_completed(body, result.step)
    return result


@kopf.on.resume(API_GROUP, API_VERSION, PLURAL_PATTERNS)
@kopf.on.create(API_GROUP, API_VERSION, PLURAL_PATTERNS)
@kopf.on.update(API_GROUP, API_VERSION, PLURAL_PATTERNS)
def handle_pattern(
    namespace: str,
    name: str,
    body: kopf.Body,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Handle Pattern resource reconciliation."""
    emit_reconcile_started(body)
    result = run_reconcile(namespace, name, dict(body), memo)
    if result is not None:
        raise_for_result(result)


@kopf.timer(API_GROUP, API_VERSION, PLURAL_PATTERNS, interval=RESYNC_INTERVAL_SECONDS, idle=RESYNC_INTERVAL_SECONDS)
def resync_pattern(
    namespace: str,
    name: str,
    body: kopf.Body,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Periodically re-run a reconcile so drift on owned resources is noticed.

    Once the change handlers are done, corrections arrive here, so the result
    goes through the same requeue delays.
    """
    result = run_reconcile(namespace, name, dict(body), memo, blocking=False)
    if result is not None:
        raise_for_result(result)


# Timers make kopf put its own finalizer on every Pattern. That marker is what
# brings deletions to this handler; removing the timer needs optional=False here.
@kopf.on.delete(API_GROUP, API_VERSION, PLURAL_PATTERNS, optional=True)
def handle_pattern_delete(
    namespace: str,
    name: str,
    body: kopf.Body,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Handle Pattern resource deletion; our own finalizer gates the cleanup."""
    result = run_reconcile(namespace, name, dict(body), memo)
    if result is None:
        return
    raise_for_result(result)
    emit_finalized(body)
